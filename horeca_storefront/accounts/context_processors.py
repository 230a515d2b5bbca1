"""Signed-in shopper for the header."""

from accounts.services.auth_service import get_user


def shopper(request):
    user = get_user(request)
    return {
        "shopper": user,
        "shopper_signed_in": user is not None,
    }

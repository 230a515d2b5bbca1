# accounts/views.py
"""
ACCOUNT PAGES

- /login/              sign in (sign up form alongside)
- /account/            sign up; signed-in shoppers go to the dashboard
- /logout/             POST, best-effort backend sign out
- /auth/callback/      SSO credential hand-off
- /forgot-password/    request a reset email
- /reset-password/     set a new password from ?token=
- /dashboard/          profile, orders and saved address (signed-in only)
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import urlencode
from django.views import View
from django.views.generic import TemplateView

from accounts.forms import (
    CustomerDetailsForm,
    ForgotPasswordForm,
    ResetPasswordForm,
    SignInForm,
    SignUpForm,
    SSOCallbackForm,
)
from accounts.services.auth_service import (
    AuthError,
    auth_service,
    clear_auth,
    get_token,
    get_user,
    is_authenticated,
    store_auth,
)
from catalog.services.api_client import get_client
from catalog.services.exceptions import StorefrontServiceError
from catalog.views.navigation import safe_redirect

logger = logging.getLogger(__name__)

DASHBOARD_SECTIONS = ("personal-info", "orders", "address", "payment", "password")


class SignedInRequiredMixin:
    """Anonymous shoppers are sent to the login page with ?next=."""

    def dispatch(self, request, *args, **kwargs):
        if not is_authenticated(request):
            query = urlencode({"next": request.get_full_path()})
            return redirect(f"{reverse('accounts:login')}?{query}")
        return super().dispatch(request, *args, **kwargs)


def _first_error(form) -> str:
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return "Please check the form and try again."


class LoginView(View):
    template_name = "accounts/login.html"

    def get(self, request, *args, **kwargs):
        if is_authenticated(request):
            return redirect("accounts:dashboard")
        return self._render(
            request, SignInForm(initial={"next": request.GET.get("next", "")})
        )

    def post(self, request, *args, **kwargs):
        form = SignInForm(request.POST)
        if not form.is_valid():
            return self._render(request, form, status=400)

        data = form.cleaned_data
        try:
            result = auth_service.sign_in(email=data["email"], password=data["password"])
        except AuthError as exc:
            return self._render(request, form, error=str(exc), status=400)

        store_auth(request, result)
        logger.info("Shopper signed in")
        return safe_redirect(request, data["next"], "accounts:dashboard")

    def _render(self, request, form, *, error: str = "", status: int = 200):
        return render(
            request,
            self.template_name,
            {"form": form, "signup_form": SignUpForm(), "error": error},
            status=status,
        )


class AccountView(View):
    template_name = "accounts/account.html"

    def get(self, request, *args, **kwargs):
        if is_authenticated(request):
            return redirect("accounts:dashboard")
        return render(request, self.template_name, {"form": SignUpForm()})

    def post(self, request, *args, **kwargs):
        form = SignUpForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {"form": form}, status=400)

        data = form.cleaned_data
        try:
            result = auth_service.sign_up(
                first_name=data["first_name"],
                last_name=data["last_name"],
                email=data["email"],
                phone=data["phone"],
                password=data["password"],
            )
        except AuthError as exc:
            return render(
                request,
                self.template_name,
                {"form": form, "error": str(exc)},
                status=400,
            )

        store_auth(request, result)
        logger.info("Shopper signed up")
        messages.success(request, "Welcome! Your account has been created.")
        return redirect("accounts:dashboard")


class LogoutView(View):
    def post(self, request, *args, **kwargs):
        auth_service.sign_out(get_token(request))
        clear_auth(request)
        messages.info(request, "You have been signed out.")
        return redirect("catalog:home")


class SSOCallbackView(View):
    template_name = "accounts/callback.html"

    def get(self, request, *args, **kwargs):
        return render(request, self.template_name, {"status": "loading"})

    def post(self, request, *args, **kwargs):
        form = SSOCallbackForm(request.POST)
        if not form.is_valid():
            return render(
                request,
                self.template_name,
                {"status": "error", "error": "No authentication data found"},
                status=400,
            )

        data = form.cleaned_data
        try:
            result = auth_service.sso_login(
                provider=data["provider"],
                token=data["credential"],
                email=data["email"],
                first_name=data["first_name"] or None,
                last_name=data["last_name"] or None,
            )
        except AuthError as exc:
            return render(
                request,
                self.template_name,
                {"status": "error", "error": str(exc)},
                status=400,
            )

        store_auth(request, result)
        return redirect("accounts:dashboard")


class ForgotPasswordView(View):
    template_name = "accounts/forgot_password.html"

    def get(self, request, *args, **kwargs):
        return render(request, self.template_name, {"form": ForgotPasswordForm()})

    def post(self, request, *args, **kwargs):
        form = ForgotPasswordForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {"form": form}, status=400)

        try:
            auth_service.forgot_password(email=form.cleaned_data["email"])
        except AuthError as exc:
            return render(
                request,
                self.template_name,
                {"form": form, "error": str(exc)},
                status=400,
            )
        return render(
            request,
            self.template_name,
            {"form": ForgotPasswordForm(), "sent_to": form.cleaned_data["email"]},
        )


class ResetPasswordView(View):
    template_name = "accounts/reset_password.html"

    def get(self, request, *args, **kwargs):
        token = request.GET.get("token", "")
        form = ResetPasswordForm(initial={"token": token})
        error = "" if token else "Invalid reset link. Please request a new password reset."
        return render(request, self.template_name, {"form": form, "error": error})

    def post(self, request, *args, **kwargs):
        form = ResetPasswordForm(request.POST)
        if not form.is_valid():
            return render(
                request,
                self.template_name,
                {"form": form, "error": _first_error(form)},
                status=400,
            )

        try:
            auth_service.reset_password(
                token=form.cleaned_data["token"],
                new_password=form.cleaned_data["password"],
            )
        except AuthError as exc:
            return render(
                request,
                self.template_name,
                {"form": form, "error": str(exc)},
                status=400,
            )

        messages.success(request, "Your password has been reset. Please sign in.")
        return redirect("accounts:login")


class DashboardView(SignedInRequiredMixin, TemplateView):
    template_name = "accounts/dashboard.html"

    def get_section(self) -> str:
        section = self.request.GET.get("section", "personal-info")
        return section if section in DASHBOARD_SECTIONS else "personal-info"

    def load_profile(self) -> dict:
        try:
            return auth_service.get_profile(get_token(self.request)) or {}
        except AuthError:
            logger.warning("Error loading shopper profile", exc_info=True)
            return {}

    def load_orders(self, profile: dict) -> list[dict]:
        user_id = profile.get("id") or (get_user(self.request) or {}).get("id")
        if not user_id:
            return []
        try:
            orders = get_client(token=get_token(self.request)).get_orders(user_id=user_id)
        except StorefrontServiceError:
            logger.warning("Error loading shopper orders", exc_info=True)
            return []
        return orders if isinstance(orders, list) else []

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        section = kwargs.pop("section", None) or self.get_section()
        profile = self.load_profile()
        user = get_user(self.request) or {}

        initial = CustomerDetailsForm.initial_from_profile(profile or user)
        context.update(
            {
                "section": section,
                "sections": DASHBOARD_SECTIONS,
                "account_user": user,
                "profile": initial,
                "address_form": kwargs.get("address_form")
                or CustomerDetailsForm(initial=initial),
            }
        )
        if section == "orders":
            context["orders"] = self.load_orders(profile)
        return context

    def post(self, request, *args, **kwargs):
        form = CustomerDetailsForm(request.POST)
        if not form.is_valid():
            for error in form.non_field_errors():
                messages.error(request, error)
            return self.render_to_response(
                self.get_context_data(address_form=form, section="address"), status=400
            )

        try:
            auth_service.update_address(get_token(request), form.address_payload())
        except AuthError as exc:
            messages.error(request, str(exc))
        else:
            messages.success(request, "Address saved successfully.")
        return redirect(f"{reverse('accounts:dashboard')}?section=address")

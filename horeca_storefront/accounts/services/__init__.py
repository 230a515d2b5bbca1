from .auth_service import (  # noqa: F401
    AuthError,
    AuthService,
    auth_service,
    clear_auth,
    get_token,
    get_user,
    is_authenticated,
    store_auth,
)

# accounts/urls.py

from django.urls import path

from accounts.views import (
    AccountView,
    DashboardView,
    ForgotPasswordView,
    LoginView,
    LogoutView,
    ResetPasswordView,
    SSOCallbackView,
)

app_name = "accounts"

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("account/", AccountView.as_view(), name="account"),
    path("auth/callback/", SSOCallbackView.as_view(), name="sso-callback"),
    path("forgot-password/", ForgotPasswordView.as_view(), name="forgot-password"),
    path("reset-password/", ResetPasswordView.as_view(), name="reset-password"),
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
]

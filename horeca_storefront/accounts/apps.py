# accounts/apps.py

"""
ACCOUNTS APP CONFIG

Shopper accounts are owned by the backend; this app proxies sign in /
sign up / SSO / password reset and keeps the backend token in the session.
"""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = "Shopper Accounts"

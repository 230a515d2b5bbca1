# checkout/apps.py

"""
CHECKOUT APP CONFIG

Checkout form -> backend order -> hosted payment session redirect,
plus the success / cancel landing pages.
"""

from django.apps import AppConfig


class CheckoutConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "checkout"
    verbose_name = "Checkout"

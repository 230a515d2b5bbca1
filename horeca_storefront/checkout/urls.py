# checkout/urls.py

from django.urls import path

from checkout.views import CheckoutCancelView, CheckoutSuccessView, CheckoutView

app_name = "checkout"

urlpatterns = [
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("checkout/success/", CheckoutSuccessView.as_view(), name="success"),
    path("checkout/cancel/", CheckoutCancelView.as_view(), name="cancel"),
]

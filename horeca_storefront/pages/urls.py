# pages/urls.py

from django.urls import path

from pages.views import AboutView, ContactView, PrivacyView, ServicesView, TermsView

app_name = "pages"

urlpatterns = [
    path("about/", AboutView.as_view(), name="about"),
    path("services/", ServicesView.as_view(), name="services"),
    path("privacy/", PrivacyView.as_view(), name="privacy"),
    path("terms/", TermsView.as_view(), name="terms"),
    path("contact/", ContactView.as_view(), name="contact"),
]

# revalidation/urls.py

from django.urls import path

from revalidation.views import RevalidateWebhookView

urlpatterns = [
    path("revalidate/", RevalidateWebhookView.as_view(), name="revalidate"),
]

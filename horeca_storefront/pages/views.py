# pages/views.py
"""
CONTENT PAGES

- /about/ /services/ /privacy/ /terms/   static templates
- /contact/                              form forwarded to the backend (POST /messages/)
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.urls import reverse_lazy
from django.views.generic import FormView, TemplateView

from catalog.services.api_client import get_client
from catalog.services.exceptions import StorefrontServiceError
from pages.forms import ContactForm

logger = logging.getLogger(__name__)


class AboutView(TemplateView):
    template_name = "pages/about.html"


class ServicesView(TemplateView):
    template_name = "pages/services.html"


class PrivacyView(TemplateView):
    template_name = "pages/privacy.html"


class TermsView(TemplateView):
    template_name = "pages/terms.html"


class ContactView(FormView):
    template_name = "pages/contact.html"
    form_class = ContactForm
    success_url = reverse_lazy("pages:contact")

    def form_valid(self, form):
        try:
            get_client().create_message(form.message_payload())
        except StorefrontServiceError:
            logger.exception("Error submitting contact message")
            messages.error(
                self.request,
                "Failed to send message. Please try again later.",
            )
            return self.render_to_response(self.get_context_data(form=form), status=502)

        messages.success(
            self.request,
            "Message sent successfully! We'll get back to you soon.",
        )
        return super().form_valid(form)

# pages/tests/test_views.py

from unittest import mock

from django.contrib.messages import get_messages
from django.core.cache import cache
from django.test import SimpleTestCase

from catalog.services.exceptions import BackendUnavailableError


class PagesTestCase(SimpleTestCase):
    def setUp(self):
        cache.clear()
        patcher = mock.patch("catalog.services.server_api.get_client")
        patcher.start().return_value.get_categories.return_value = []
        self.addCleanup(patcher.stop)


class StaticPagesTests(PagesTestCase):
    def test_pages_render(self):
        for path in ("/about/", "/services/", "/privacy/", "/terms/", "/contact/"):
            with self.subTest(path=path):
                self.assertEqual(self.client.get(path).status_code, 200)


class ContactViewTests(PagesTestCase):
    """
    Contact form.

    GUARANTEES:
    - Valid messages are forwarded to the backend
    - A blank subject gets the default one
    - Backend failures keep the form and report an error
    """

    @mock.patch("pages.views.get_client")
    def test_message_is_forwarded(self, get_client):
        response = self.client.post(
            "/contact/",
            {"name": "Ana", "email": "ana@example.com", "message": "Need a quote"},
        )

        self.assertRedirects(response, "/contact/", fetch_redirect_response=False)
        get_client.return_value.create_message.assert_called_once_with(
            {
                "name": "Ana",
                "email": "ana@example.com",
                "subject": "Contact Form Submission",
                "message": "Need a quote",
            }
        )
        self.assertIn(
            "Message sent successfully! We'll get back to you soon.",
            [str(m) for m in get_messages(response.wsgi_request)],
        )

    @mock.patch("pages.views.get_client")
    def test_invalid_form_is_not_sent(self, get_client):
        response = self.client.post("/contact/", {"name": "Ana", "email": "nope"})

        self.assertEqual(response.status_code, 200)
        self.assertIn("email", response.context["form"].errors)
        get_client.return_value.create_message.assert_not_called()

    @mock.patch("pages.views.get_client")
    def test_backend_failure(self, get_client):
        get_client.return_value.create_message.side_effect = BackendUnavailableError("down")

        response = self.client.post(
            "/contact/",
            {"name": "Ana", "email": "ana@example.com", "subject": "Hi", "message": "Hello"},
        )

        self.assertEqual(response.status_code, 502)
        self.assertContains(response, "Failed to send message. Please try again later.", status_code=502)

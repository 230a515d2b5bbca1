# accounts/tests/test_auth_service.py

from unittest import mock

from django.test import SimpleTestCase

from accounts.services.auth_service import AuthError, AuthService
from catalog.services.exceptions import BackendApiError, BackendUnavailableError


class AuthServiceTests(SimpleTestCase):
    """
    Backend auth proxy.

    GUARANTEES:
    - Calls the backend auth endpoints with the expected bodies
    - Backend `detail` is surfaced; otherwise a per-action default message
    - Sign out never raises
    """

    def setUp(self):
        self.backend = mock.Mock()
        self.factory = mock.Mock(return_value=self.backend)
        self.service = AuthService(client_factory=self.factory)

    def test_sign_in(self):
        self.backend.request_json.return_value = {"token": "t", "user": {"id": 1}}

        result = self.service.sign_in(email="chef@example.com", password="secret1")

        self.assertEqual(result["token"], "t")
        self.backend.request_json.assert_called_once_with(
            "POST",
            "/auth/signin",
            body={"email": "chef@example.com", "password": "secret1"},
        )

    def test_sign_up_uses_camel_case_names(self):
        self.backend.request_json.return_value = {"token": "t"}

        self.service.sign_up(
            first_name="Ana", last_name="Pop", email="ana@example.com", phone="0700", password="secret1"
        )

        body = self.backend.request_json.call_args.kwargs["body"]
        self.assertEqual(body["firstName"], "Ana")
        self.assertEqual(body["lastName"], "Pop")

    def test_backend_detail_is_surfaced(self):
        self.backend.request_json.side_effect = BackendApiError(
            "Invalid credentials", status_code=401, payload={"detail": "Invalid credentials"}
        )

        with self.assertRaisesMessage(AuthError, "Invalid credentials"):
            self.service.sign_in(email="chef@example.com", password="bad")

    def test_default_message_when_backend_silent(self):
        self.backend.request_json.side_effect = BackendUnavailableError("down")

        with self.assertRaisesMessage(AuthError, "Sign up failed. Please try again."):
            self.service.sign_up(
                first_name="A", last_name="B", email="a@b.ro", phone="1", password="secret1"
            )

    def test_sso_rejects_unknown_provider(self):
        with self.assertRaises(AuthError):
            self.service.sso_login(provider="github", token="x", email="a@b.ro")
        self.backend.request_json.assert_not_called()

    def test_sso_posts_credential(self):
        self.backend.request_json.return_value = {"token": "t"}

        self.service.sso_login(provider="google", token="cred", email="a@b.ro", first_name="Ana")

        self.backend.request_json.assert_called_once_with(
            "POST",
            "/auth/sso",
            body={"provider": "google", "token": "cred", "email": "a@b.ro", "firstName": "Ana"},
        )

    def test_sign_out_is_best_effort(self):
        self.backend.request_json.side_effect = BackendUnavailableError("down")

        self.service.sign_out("tok")

        self.factory.assert_called_once_with(token="tok")

    def test_update_address_drops_blank_fields(self):
        self.backend.request_json.return_value = {}

        self.service.update_address("tok", {"city": "Cluj", "iban": "", "tax_id": None})

        self.backend.request_json.assert_called_once_with(
            "PUT", "/auth/profile/address", body={"city": "Cluj"}
        )

    def test_reset_password(self):
        self.backend.request_json.return_value = {"message": "ok"}

        self.service.reset_password(token="abc", new_password="secret1")

        self.backend.request_json.assert_called_once_with(
            "POST",
            "/auth/reset-password",
            body={"token": "abc", "new_password": "secret1"},
        )

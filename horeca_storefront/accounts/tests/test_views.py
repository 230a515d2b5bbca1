# accounts/tests/test_views.py

from importlib import import_module
from unittest import mock

from django.conf import settings
from django.core.cache import cache
from django.test import SimpleTestCase

from accounts.services.auth_service import AuthError

ADDRESS = {
    "entity_type": "individual",
    "first_name": "Ana",
    "last_name": "Pop",
    "phone": "0700000000",
    "email": "ana@example.com",
    "county": "Cluj",
    "city": "Cluj-Napoca",
    "address": "Str. Memorandumului 1",
}


class AccountViewTestCase(SimpleTestCase):
    def setUp(self):
        cache.clear()
        patcher = mock.patch("catalog.services.server_api.get_client")
        patcher.start().return_value.get_categories.return_value = []
        self.addCleanup(patcher.stop)

        auth_patcher = mock.patch("accounts.views.auth_service")
        self.auth = auth_patcher.start()
        self.addCleanup(auth_patcher.stop)

    def sign_in_session(self, token="tok", user=None):
        engine = import_module(settings.SESSION_ENGINE)
        session = engine.SessionStore()
        session["auth_token"] = token
        session["auth_user"] = user or {"id": 7, "email": "ana@example.com"}
        session.save()
        self.client.cookies[settings.SESSION_COOKIE_NAME] = session.session_key

    def session_data(self):
        engine = import_module(settings.SESSION_ENGINE)
        return engine.SessionStore(self.client.cookies[settings.SESSION_COOKIE_NAME].value)


class LoginViewTests(AccountViewTestCase):
    """
    Sign in.

    GUARANTEES:
    - Backend token + user land in the session
    - ?next= is honoured only for same-site paths
    - Backend errors are shown on the form
    """

    def test_get_renders_both_forms(self):
        response = self.client.get("/login/?next=/cart/")

        self.assertEqual(response.status_code, 200)
        self.assertIn("signup_form", response.context)
        self.assertEqual(response.context["form"].initial["next"], "/cart/")

    def test_success_stores_session_and_follows_next(self):
        self.auth.sign_in.return_value = {"token": "tok", "user": {"id": 7}}

        response = self.client.post(
            "/login/", {"email": "ana@example.com", "password": "secret1", "next": "/cart/"}
        )

        self.assertRedirects(response, "/cart/", fetch_redirect_response=False)
        session = self.session_data()
        self.assertEqual(session["auth_token"], "tok")
        self.assertEqual(session["auth_user"], {"id": 7})

    def test_offsite_next_falls_back_to_dashboard(self):
        self.auth.sign_in.return_value = {"token": "tok", "user": {}}

        response = self.client.post(
            "/login/",
            {"email": "ana@example.com", "password": "secret1", "next": "https://evil.test/"},
        )

        self.assertRedirects(response, "/dashboard/", fetch_redirect_response=False)

    def test_backend_error_is_shown(self):
        self.auth.sign_in.side_effect = AuthError("Invalid credentials")

        response = self.client.post("/login/", {"email": "ana@example.com", "password": "bad"})

        self.assertEqual(response.status_code, 400)
        self.assertContains(response, "Invalid credentials", status_code=400)

    def test_signed_in_shopper_is_sent_to_dashboard(self):
        self.sign_in_session()

        response = self.client.get("/login/")

        self.assertRedirects(response, "/dashboard/", fetch_redirect_response=False)


class SignUpAndLogoutTests(AccountViewTestCase):
    def test_account_page_is_sign_up_for_anonymous(self):
        response = self.client.get("/account/")

        self.assertEqual(response.status_code, 200)
        self.assertIn("form", response.context)

    def test_account_page_sends_signed_in_shopper_to_dashboard(self):
        self.sign_in_session()

        response = self.client.get("/account/")

        self.assertRedirects(response, "/dashboard/", fetch_redirect_response=False)

    def test_sign_up(self):
        self.auth.sign_up.return_value = {"token": "new", "user": {"id": 9}}

        response = self.client.post(
            "/account/",
            {
                "first_name": "Ana",
                "last_name": "Pop",
                "email": "ana@example.com",
                "phone": "0700",
                "password": "secret1",
            },
        )

        self.assertRedirects(response, "/dashboard/", fetch_redirect_response=False)
        self.assertEqual(self.session_data()["auth_token"], "new")

    def test_sign_up_short_password(self):
        response = self.client.post(
            "/account/",
            {
                "first_name": "Ana",
                "last_name": "Pop",
                "email": "ana@example.com",
                "phone": "0700",
                "password": "abc",
            },
        )

        self.assertEqual(response.status_code, 400)
        self.auth.sign_up.assert_not_called()

    def test_logout_clears_session(self):
        self.sign_in_session(token="tok")

        response = self.client.post("/logout/")

        self.assertRedirects(response, "/", fetch_redirect_response=False)
        self.auth.sign_out.assert_called_once_with("tok")
        self.assertNotIn("auth_token", self.session_data())


class SSOCallbackTests(AccountViewTestCase):
    def test_missing_credential(self):
        response = self.client.post("/auth/callback/", {"provider": "google"})

        self.assertEqual(response.status_code, 400)
        self.assertContains(response, "No authentication data found", status_code=400)

    def test_success(self):
        self.auth.sso_login.return_value = {"token": "sso", "user": {"id": 3}}

        response = self.client.post(
            "/auth/callback/",
            {"provider": "google", "credential": "jwt", "email": "ana@example.com"},
        )

        self.assertRedirects(response, "/dashboard/", fetch_redirect_response=False)
        self.auth.sso_login.assert_called_once_with(
            provider="google", token="jwt", email="ana@example.com", first_name=None, last_name=None
        )


class PasswordResetViewTests(AccountViewTestCase):
    def test_forgot_password_confirms_email(self):
        self.auth.forgot_password.return_value = {}

        response = self.client.post("/forgot-password/", {"email": "ana@example.com"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["sent_to"], "ana@example.com")

    def test_reset_without_token(self):
        response = self.client.get("/reset-password/")

        self.assertIn("Invalid reset link", response.context["error"])

    def test_reset_success_redirects_to_login(self):
        self.auth.reset_password.return_value = {}

        response = self.client.post(
            "/reset-password/",
            {"token": "abc", "password": "secret1", "confirm_password": "secret1"},
        )

        self.assertRedirects(response, "/login/", fetch_redirect_response=False)
        self.auth.reset_password.assert_called_once_with(token="abc", new_password="secret1")

    def test_reset_mismatch(self):
        response = self.client.post(
            "/reset-password/",
            {"token": "abc", "password": "secret1", "confirm_password": "secret2"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.context["error"], "Passwords do not match.")
        self.auth.reset_password.assert_not_called()


class DashboardViewTests(AccountViewTestCase):
    """
    Dashboard.

    GUARANTEES:
    - Anonymous shoppers are redirected to login with ?next=
    - Profile prefill splits the full name
    - Address updates go to the backend with the session token
    """

    def test_anonymous_is_redirected(self):
        response = self.client.get("/dashboard/?section=orders")

        self.assertEqual(response.status_code, 302)
        self.assertTrue(response["Location"].startswith("/login/?next="))

    def test_profile_prefill(self):
        self.sign_in_session()
        self.auth.get_profile.return_value = {"full_name": "Ana Pop", "city": "Cluj-Napoca"}

        response = self.client.get("/dashboard/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["section"], "personal-info")
        self.assertEqual(response.context["profile"]["last_name"], "Pop")
        self.auth.get_profile.assert_called_once_with("tok")

    def test_unknown_section_falls_back(self):
        self.sign_in_session()
        self.auth.get_profile.return_value = {}

        response = self.client.get("/dashboard/?section=nope")

        self.assertEqual(response.context["section"], "personal-info")

    @mock.patch("accounts.views.get_client")
    def test_orders_section(self, get_client):
        self.sign_in_session()
        self.auth.get_profile.return_value = {"id": 7, "full_name": "Ana Pop"}
        get_client.return_value.get_orders.return_value = [{"id": 1, "total_amount": 121}]

        response = self.client.get("/dashboard/?section=orders")

        self.assertEqual(response.context["orders"], [{"id": 1, "total_amount": 121}])
        get_client.assert_called_once_with(token="tok")
        get_client.return_value.get_orders.assert_called_once_with(user_id=7)

    def test_profile_failure_renders_empty_profile(self):
        self.sign_in_session()
        self.auth.get_profile.side_effect = AuthError("Failed to load profile.")

        response = self.client.get("/dashboard/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["profile"]["first_name"], "")

    def test_save_address(self):
        self.sign_in_session()

        response = self.client.post("/dashboard/", ADDRESS)

        self.assertRedirects(response, "/dashboard/?section=address", fetch_redirect_response=False)
        token, payload = self.auth.update_address.call_args.args
        self.assertEqual(token, "tok")
        self.assertEqual(payload["city"], "Cluj-Napoca")

    def test_invalid_address(self):
        self.sign_in_session()
        self.auth.get_profile.return_value = {}

        response = self.client.post("/dashboard/", dict(ADDRESS, county=""))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.context["section"], "address")
        self.auth.update_address.assert_not_called()

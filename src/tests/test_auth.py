"""Tests for authentication flows (register, login, profile, token validation)."""

from __future__ import annotations

import time
from unittest import mock

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError
from django.test import TestCase, override_settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.test import APIClient

from authentication.services import INVALID_CREDENTIALS, AuthService, TokenService
from core.exceptions import Conflict
from tests.utils import auth_client, create_user, seed_permissions

User = get_user_model()


@override_settings(BCRYPT_ROUNDS=4)
class AuthServiceTests(TestCase):
    """Service-level behavior of register, login, and validate_user."""

    @classmethod
    def setUpTestData(cls):
        seed_permissions()
        cls.password = "StrongPass123"
        cls.user = create_user("user@example.com", cls.password, name="Existing")

    def setUp(self):
        self.service = AuthService()

    def test_register_returns_profile_without_password_and_token(self):
        result = self.service.register("A", "a@x.com", "123456")

        self.assertEqual(set(result), {"user", "token"})
        self.assertEqual(result["user"]["email"], "a@x.com")
        self.assertEqual(result["user"]["name"], "A")
        self.assertNotIn("password", result["user"])
        self.assertNotIn("password_hash", result["user"])

        payload = TokenService.decode_token(result["token"])
        self.assertEqual(payload["sub"], str(result["user"]["id"]))
        self.assertEqual(payload["email"], "a@x.com")

    def test_register_hashes_password(self):
        self.service.register("A", "a@x.com", "123456")
        user = User.objects.get(email="a@x.com")

        self.assertTrue(user.password_hash)
        self.assertNotEqual(user.password_hash, "123456")
        self.assertTrue(user.check_password("123456"))

    def test_register_grants_default_permissions(self):
        result = self.service.register("A", "a@x.com", "123456")
        self.assertEqual(result["user"]["permissions"], ["reader"])

    @override_settings(DEFAULT_USER_PERMISSIONS=[])
    def test_register_without_default_permissions(self):
        result = self.service.register("A", "a@x.com", "123456")
        self.assertEqual(result["user"]["permissions"], [])

    def test_register_duplicate_email_conflicts_without_insert(self):
        before = User.objects.count()
        with self.assertRaises(Conflict):
            self.service.register("Other", self.user.email, "123456")
        self.assertEqual(User.objects.count(), before)

    def test_register_unique_index_violation_is_conflict(self):
        """A duplicate that slips past the existence check still reports Conflict."""
        with mock.patch.object(User.objects, "create_user", side_effect=IntegrityError("duplicate")):
            with self.assertRaises(Conflict):
                self.service.register("Racer", "racer@example.com", "123456")

    def test_login_success(self):
        result = self.service.login(self.user.email, self.password)

        self.assertEqual(result["user"]["id"], self.user.id)
        self.assertNotIn("password_hash", result["user"])
        self.assertTrue(result["token"])

    def test_login_failures_are_indistinguishable(self):
        with self.assertRaises(AuthenticationFailed) as wrong_password:
            self.service.login(self.user.email, "wrongpass")
        with self.assertRaises(AuthenticationFailed) as unknown_email:
            self.service.login("nobody@example.com", self.password)

        self.assertEqual(str(wrong_password.exception.detail), INVALID_CREDENTIALS)
        self.assertEqual(str(unknown_email.exception.detail), str(wrong_password.exception.detail))

    def test_login_unknown_email_still_runs_bcrypt(self):
        with mock.patch("authentication.services.bcrypt.checkpw", return_value=False) as checkpw:
            with self.assertRaises(AuthenticationFailed):
                self.service.login("nobody@example.com", self.password)

        checkpw.assert_called_once()
        self.assertEqual(checkpw.call_args.args[0], self.password.encode())

    def test_validate_user_resolves_subject(self):
        user = self.service.validate_user({"sub": str(self.user.id), "email": self.user.email})
        self.assertEqual(user, self.user)

    def test_validate_user_rejects_unknown_or_missing_subject(self):
        with self.assertRaises(AuthenticationFailed):
            self.service.validate_user({"sub": "999999"})
        with self.assertRaises(AuthenticationFailed):
            self.service.validate_user({"email": self.user.email})


@override_settings(BCRYPT_ROUNDS=4)
class AuthFlowTests(TestCase):
    """End-to-end tests covering auth endpoints."""

    @classmethod
    def setUpTestData(cls):
        seed_permissions()
        cls.password = "StrongPass123"
        cls.user = create_user("user@example.com", cls.password)

    def setUp(self):
        """Fresh DRF APIClient per test."""
        self.api_client: APIClient = APIClient()

    def test_register_then_duplicate(self):
        """Registration succeeds once; the same email then yields 409."""
        payload = {"name": "A", "email": "a@x.com", "password": "123456"}

        response = self.api_client.post("/auth/register/", payload, format="json")
        body = response.json()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(body["errors"], [])
        self.assertEqual(body["data"]["user"]["email"], "a@x.com")
        self.assertNotIn("password", body["data"]["user"])
        self.assertIn("token", body["data"])

        duplicate = self.api_client.post("/auth/register/", payload, format="json")
        self.assertEqual(duplicate.status_code, 409)
        self.assertIsNone(duplicate.json()["data"])
        self.assertEqual(duplicate.json()["errors"], ["Email already in use"])

    def test_register_validation_error(self):
        """Short passwords and missing names yield 400 with errors populated."""
        response = self.api_client.post(
            "/auth/register/", {"email": "new@example.com", "password": "123"}, format="json"
        )
        body = response.json()

        self.assertEqual(response.status_code, 400)
        self.assertIsNone(body["data"])
        self.assertTrue(body["errors"])

    def test_login_success_returns_user_and_token(self):
        response = self.api_client.post(
            "/auth/login/",
            {"email": self.user.email, "password": self.password},
            format="json",
        )
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"]["user"]["email"], self.user.email)
        self.assertIn("token", body["data"])
        self.assertEqual(body["errors"], [])

    def test_login_wrong_password_and_unknown_email_match(self):
        """Bad password and unknown email produce the same 401 body."""
        wrong_password = self.api_client.post(
            "/auth/login/",
            {"email": self.user.email, "password": "wrongpass"},
            format="json",
        )
        unknown_email = self.api_client.post(
            "/auth/login/",
            {"email": "ghost@example.com", "password": self.password},
            format="json",
        )

        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(unknown_email.status_code, 401)
        self.assertIsNone(wrong_password.json()["data"])
        self.assertEqual(wrong_password.json(), unknown_email.json())

    def test_profile_requires_token(self):
        response = self.api_client.get("/auth/profile/")
        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.json()["data"])

    def test_profile_returns_current_user(self):
        response = auth_client(self.user).get("/auth/profile/")
        body = response.json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["data"]["id"], self.user.id)
        self.assertNotIn("password_hash", body["data"])

    def test_token_from_login_authenticates(self):
        token = self.api_client.post(
            "/auth/login/",
            {"email": self.user.email, "password": self.password},
            format="json",
        ).json()["data"]["token"]

        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(self.api_client.get("/auth/profile/").status_code, 200)

    def test_expired_token_returns_401(self):
        now = int(time.time())
        payload = {"sub": str(self.user.id), "email": self.user.email, "iat": now - 120, "exp": now - 60}
        expired = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {expired}")
        response = self.api_client.get("/auth/profile/")

        self.assertEqual(response.status_code, 401)
        self.assertIsNone(response.json()["data"])

    def test_tampered_token_returns_401(self):
        token = TokenService.generate_token(self.user)
        forged = jwt.encode(jwt.decode(token, options={"verify_signature": False}), "other-secret", algorithm="HS256")

        self.api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {forged}")
        self.assertEqual(self.api_client.get("/auth/profile/").status_code, 401)

    def test_token_for_deleted_user_returns_401(self):
        """A token whose subject no longer exists is rejected."""
        ghost = create_user("ghost@example.com", "GhostPass123")
        client = auth_client(ghost)
        ghost.delete()

        response = client.get("/auth/profile/")
        self.assertEqual(response.status_code, 401)

    def test_public_route_ignores_missing_token(self):
        self.assertEqual(self.api_client.get("/articles/").status_code, 200)

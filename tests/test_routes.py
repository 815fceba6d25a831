"""Integration tests over HTTP: register, login, session cookie, guarded routes, logout, token."""

import unittest

from fastapi.testclient import TestClient

from sessionauth.core.config import Settings
from sessionauth.main import create_app
from sessionauth.stores.memory import InMemoryCredentialStore


def _settings(**overrides: object) -> Settings:
    values = {"BCRYPT_ROUNDS": 4, "SEED_DEMO_USERS": False, "DATABASE_URL": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _register_body(email: str = "a@x.com", password: str = "P1", role: str = "user", **kwargs: str) -> dict:
    body = {
        "email": email,
        "password": password,
        "confirmationPassword": password,
        "role": role,
    }
    body.update(kwargs)
    return body


class _AppTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()
        self.app = create_app(settings=_settings(), store=self.store)
        self.client = TestClient(self.app)

    def register(self, **kwargs: str):
        return self.client.post("/auth/register", json=_register_body(**kwargs))

    def login(self, email: str = "a@x.com", password: str = "P1"):
        return self.client.post("/auth/login", json={"email": email, "password": password})


class TestPublicRoute(_AppTestCase):
    def test_root_is_public(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "This message is public to all!"})


class TestRegister(_AppTestCase):
    def test_register_returns_user_without_password(self) -> None:
        resp = self.register(firstName="Ada", lastName="Lovelace")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {"id": 1, "firstName": "Ada", "lastName": "Lovelace", "email": "a@x.com", "role": "user"},
        )

    def test_duplicate_email_is_409(self) -> None:
        self.register()
        resp = self.register()
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json(), {"detail": "User email must be unique"})
        self.assertEqual(self.store.count(), 1)

    def test_mismatched_confirmation_is_400(self) -> None:
        body = _register_body()
        body["confirmationPassword"] = "P2"
        resp = self.client.post("/auth/register", json=body)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("must match", resp.json()["detail"])
        self.assertEqual(self.store.count(), 0)

    def test_missing_fields_is_400(self) -> None:
        resp = self.client.post("/auth/register", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Request validation failed.")
        self.assertEqual(self.store.count(), 0)

    def test_unknown_role_is_400(self) -> None:
        resp = self.register(role="root")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("detail", resp.json())


class TestLoginAndGuards(_AppTestCase):
    def test_user_scenario(self) -> None:
        reg = self.register(email="a@x.com", password="P1", role="user")
        self.assertEqual(reg.status_code, 200)
        user_id = reg.json()["id"]

        self.assertEqual(self.client.get("/protected").status_code, 403)

        resp = self.login("a@x.com", "P1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"user": {"id": user_id, "role": "user"}, "maxAge": 60})
        self.assertIn("session", resp.cookies)

        protected = self.client.get("/protected")
        self.assertEqual(protected.status_code, 200)
        self.assertEqual(protected.json()["message"], "You can only see this if you are authenticated")

        admin = self.client.get("/admin")
        self.assertEqual(admin.status_code, 403)
        self.assertEqual(admin.json(), {"detail": "Forbidden resource"})

    def test_admin_can_reach_admin_route(self) -> None:
        self.register(email="boss@x.com", role="admin")
        self.login("boss@x.com")
        resp = self.client.get("/admin")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "You can only see this if you are an admin")
        self.assertEqual(self.client.get("/protected").status_code, 200)

    def test_wrong_password_is_401_and_no_session(self) -> None:
        self.register()
        resp = self.login("a@x.com", "wrong")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"detail": "Incorrect username or password"})
        self.assertEqual(self.client.get("/protected").status_code, 403)

    def test_unknown_email_is_401(self) -> None:
        self.assertEqual(self.login("ghost@x.com", "P1").status_code, 401)

    def test_login_missing_password_is_400(self) -> None:
        resp = self.client.post("/auth/login", json={"email": "a@x.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Request validation failed.")

    def test_logout_clears_session(self) -> None:
        self.register()
        self.login()
        self.assertEqual(self.client.get("/protected").status_code, 200)
        resp = self.client.post("/auth/logout")
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self.client.get("/protected").status_code, 403)

    def test_cookie_replayed_after_logout_is_rejected(self) -> None:
        self.register()
        saved = self.login().cookies["session"]
        self.assertEqual(self.client.post("/auth/logout").status_code, 204)
        self.client.cookies.clear()
        resp = self.client.get("/protected", headers={"Cookie": f"session={saved}"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.app.state.sessions.count(), 0)

    def test_stale_session_is_rejected_not_crashed(self) -> None:
        self.register()
        self.login()
        # The account disappears from the backing store after the session was issued.
        self.app.state.auth_service.store = InMemoryCredentialStore()
        resp = self.client.get("/protected")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.client.get("/").status_code, 200)

    def test_forged_cookie_is_ignored(self) -> None:
        self.register()
        resp = self.client.get("/protected", headers={"Cookie": "session=not-a-signed-value"})
        self.assertEqual(resp.status_code, 403)


class TestTokenRoute(_AppTestCase):
    def test_requires_session(self) -> None:
        self.assertEqual(self.client.post("/auth/token").status_code, 403)

    def test_issues_verifiable_token(self) -> None:
        self.register(role="admin")
        self.login()
        resp = self.client.post("/auth/token")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["tokenType"], "bearer")
        claims = self.app.state.token_auth.verify_token(body["accessToken"])
        self.assertEqual(claims["sub"], "1")
        self.assertEqual(claims["role"], "admin")


class TestDemoSeed(unittest.TestCase):
    def test_seeded_admin_exists(self) -> None:
        app = create_app(settings=_settings(SEED_DEMO_USERS=True))
        self.assertEqual(app.state.auth_service.find_by_id(1).email, "joefoo@test.com")


if __name__ == "__main__":
    unittest.main()

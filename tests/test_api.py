import unittest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from fastapi import Depends
from fastapi.testclient import TestClient
from jose import jwt
from passlib.context import CryptContext
from sqlmodel import Session, SQLModel

from backend.app.auth.dependencies import get_token_provider, get_user_service
from backend.app.auth.jwt_provider import JwtConfig, JwtTokenProvider
from backend.app.auth.passwords import PasswordEncoder
from backend.app.core.database import engine, get_session
from backend.app.main import app
from backend.app.models.User import Status, User
from backend.app.user.service import UserService

fast_context = CryptContext(
    schemes=["argon2"], argon2__time_cost=1, argon2__memory_cost=8, argon2__parallelism=1
)


def fast_user_service(
    session: Session = Depends(get_session),
    token_provider: JwtTokenProvider = Depends(get_token_provider),
) -> UserService:
    return UserService(session, token_provider, password_encoder=PasswordEncoder(context=fast_context))


class TestCarpoolApi(unittest.TestCase):

    def setUp(self):
        SQLModel.metadata.drop_all(engine)
        app.dependency_overrides[get_user_service] = fast_user_service
        self.client = TestClient(app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        app.dependency_overrides.clear()

    def signup(self, email="rider@example.com"):
        resp = self.client.post("/users", json={"email": email, "password": "s3cretpass", "name": "Rider"})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def bearer(self, token):
        return {"Authorization": f"Bearer {token}"}

    def test_signup_then_me(self):
        tokens = self.signup()
        self.assertEqual(tokens["token_type"], "bearer")

        resp = self.client.get("/users/me", headers=self.bearer(tokens["access_token"]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "rider@example.com")
        self.assertEqual(resp.json()["role"], "USER")

    def test_lowercase_header_name(self):
        tokens = self.signup()
        resp = self.client.get("/users/me", headers={"authorization": f"Bearer {tokens['access_token']}"})
        self.assertEqual(resp.status_code, 200)

    def test_duplicate_signup(self):
        self.signup()
        resp = self.client.post(
            "/users", json={"email": "rider@example.com", "password": "s3cretpass", "name": "Again"}
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["code"], "DUPLICATE_REGISTRATION")

    def test_me_without_token(self):
        resp = self.client.get("/users/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers["WWW-Authenticate"], "Bearer")

    def test_me_with_other_scheme(self):
        resp = self.client.get("/users/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        self.assertEqual(resp.status_code, 401)

    def test_me_with_malformed_token(self):
        resp = self.client.get("/users/me", headers=self.bearer("garbage"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "MALFORMED_TOKEN")
        self.assertEqual(resp.headers["WWW-Authenticate"], "Bearer")

    def test_me_with_expired_token(self):
        self.signup()
        issued = datetime.now(timezone.utc) - timedelta(hours=1)
        provider = JwtTokenProvider(app.state.jwt_config, clock=lambda: issued)
        token = provider.create_access_token(SimpleNamespace(id=1, username="rider@example.com"))

        resp = self.client.get("/users/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "EXPIRED_TOKEN")

    def test_me_with_foreign_signature(self):
        self.signup()
        provider = JwtTokenProvider(JwtConfig.from_secret("someone-elses-secret-value-here"))
        token = provider.create_access_token(SimpleNamespace(id=1, username="rider@example.com"))

        resp = self.client.get("/users/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "INVALID_SIGNATURE")

    def test_me_for_unknown_identity(self):
        provider = JwtTokenProvider(app.state.jwt_config)
        token = provider.create_access_token(SimpleNamespace(id=99, username="ghost@example.com"))

        resp = self.client.get("/users/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "UNKNOWN_IDENTITY")

    def test_me_with_token_without_expiry(self):
        self.signup()
        key = app.state.jwt_config.key.get_secret_value()
        token = jwt.encode({"sub": "rider@example.com", "iat": 1}, key, algorithm="HS256")

        resp = self.client.get("/users/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "MALFORMED_TOKEN")

    def test_me_for_inactive_user(self):
        tokens = self.signup()
        with Session(engine) as session:
            user = session.get(User, tokens["user_id"])
            user.status = Status.INACTIVE
            session.add(user)
            session.commit()

        resp = self.client.get("/users/me", headers=self.bearer(tokens["access_token"]))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["detail"], "Account is not active")

    def test_login_reissue_logout(self):
        self.signup()

        resp = self.client.post("/auth/login", json={"email": "rider@example.com", "password": "s3cretpass"})
        self.assertEqual(resp.status_code, 200)
        login_tokens = resp.json()

        resp = self.client.post("/auth/reissue", json={"refresh_token": login_tokens["refresh_token"]})
        self.assertEqual(resp.status_code, 200)
        reissued = resp.json()
        self.assertNotEqual(reissued["refresh_token"], login_tokens["refresh_token"])

        resp = self.client.post("/auth/reissue", json={"refresh_token": login_tokens["refresh_token"]})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "UNKNOWN_REFRESH_TOKEN")

        resp = self.client.post("/auth/logout", json={"refresh_token": reissued["refresh_token"]})
        self.assertEqual(resp.status_code, 200)
        resp = self.client.post("/auth/reissue", json={"refresh_token": reissued["refresh_token"]})
        self.assertEqual(resp.status_code, 401)

    def test_login_with_wrong_password(self):
        self.signup()
        resp = self.client.post("/auth/login", json={"email": "rider@example.com", "password": "nope12345"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "INVALID_CREDENTIALS")


if __name__ == "__main__":
    unittest.main()

"""
Test helpers shared by the database-backed and HTTP tests.
"""

from decimal import Decimal
from typing import Optional

from fastapi.testclient import TestClient

from tradedesk.domain.brokerage.entities import User, Wallet
from tradedesk.infrastructure.brokerage.unit_of_work import SqlUnitOfWork
from tradedesk.infrastructure.brokerage.verification_mailer import (
    LoggingVerificationMailer,
)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password-123"
DEFAULT_PASSWORD = "correct-horse-battery"


def make_user(
    engine,
    username: str = "alice",
    balance: Decimal = Decimal("0.00"),
    is_verified: bool = False,
    is_email_verified: bool = True,
    password_hash: str = "not-a-real-hash",
) -> User:
    """Insert a user with a wallet holding ``balance``."""
    with SqlUnitOfWork(engine) as uow:
        user = uow.users.add(
            User(
                username=username,
                email=f"{username}@example.com",
                password_hash=password_hash,
                is_verified=is_verified,
                is_email_verified=is_email_verified,
            )
        )
        uow.wallets.add(Wallet(user_id=user.id, balance=balance))
    return user


def balance_of(engine, user_id: int) -> Decimal:
    with SqlUnitOfWork(engine) as uow:
        return uow.wallets.get_by_user(user_id).balance


def get_user(engine, user_id: int) -> User:
    with SqlUnitOfWork(engine) as uow:
        return uow.users.get(user_id)


class ApiActor:
    """Drives the HTTP API as one logged-in user."""

    def __init__(self, client: TestClient, token: str, user: dict) -> None:
        self.client = client
        self.user = user
        self.headers = {"Authorization": f"Bearer {token}"}

    @property
    def id(self) -> int:
        return self.user["id"]

    def get(self, path: str):
        return self.client.get(f"/api/v1{path}", headers=self.headers)

    def post(self, path: str, json: Optional[dict] = None):
        return self.client.post(f"/api/v1{path}", json=json, headers=self.headers)

    def put(self, path: str, json: Optional[dict] = None):
        return self.client.put(f"/api/v1{path}", json=json, headers=self.headers)

    def delete(self, path: str):
        return self.client.delete(f"/api/v1{path}", headers=self.headers)


def token_from_outbox(mailer: LoggingVerificationMailer, email: str) -> str:
    link = next(link for to, link in reversed(mailer.outbox) if to == email)
    return link.split("token=", 1)[1]


def login(client: TestClient, username: str, password: str) -> ApiActor:
    response = client.post(
        "/api/v1/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    body = response.json()
    return ApiActor(client, body["access_token"], body["user"])


def register(client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    return client.post(
        "/api/v1/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )


def register_and_login(
    client: TestClient,
    mailer: LoggingVerificationMailer,
    username: str = "alice",
    password: str = DEFAULT_PASSWORD,
) -> ApiActor:
    response = register(client, username, password)
    assert response.status_code == 201, response.text
    token = token_from_outbox(mailer, f"{username}@example.com")
    verified = client.post("/api/v1/auth/verify-email", json={"token": token})
    assert verified.status_code == 200, verified.text
    return login(client, username, password)

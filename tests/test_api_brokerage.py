"""
Tests for the brokerage HTTP interface.

Drives the FastAPI app through TestClient against a per-test database.
"""

from decimal import Decimal

import pytest

from tests.helpers import (
    ApiActor,
    balance_of,
    get_user,
    login,
    make_user,
    register,
    register_and_login,
    token_from_outbox,
)
from tradedesk.infrastructure.brokerage.password_hasher import PasslibPasswordHasher


def _verified_actor(client, engine, username: str, balance: str) -> ApiActor:
    """Log in as a KYC-verified user holding ``balance``."""
    make_user(
        engine,
        username,
        balance=Decimal(balance),
        is_verified=True,
        password_hash=PasslibPasswordHasher().hash("pw-123456"),
    )
    return login(client, username, "pw-123456")


class TestAuthEndpoints:
    """Registration, email verification and login."""

    def test_register_returns_profile_without_secrets(self, client) -> None:
        response = register(client, "alice")
        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert body["is_email_verified"] is False
        assert "password" not in body
        assert "password_hash" not in body
        assert "verification_token" not in body

    def test_login_requires_confirmed_email(self, client) -> None:
        register(client, "alice")
        response = client.post(
            "/api/v1/auth/login",
            json={"username": "alice", "password": "correct-horse-battery"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "authentication_failed"

    def test_full_signup(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        me = alice.get("/auth/me")
        assert me.status_code == 200
        assert me.json()["is_email_verified"] is True
        assert me.json()["is_verified"] is False

    def test_verification_token_is_single_use(self, client, mailer) -> None:
        register(client, "alice")
        token = token_from_outbox(mailer, "alice@example.com")
        assert client.post("/api/v1/auth/verify-email", json={"token": token}).status_code == 200
        again = client.post("/api/v1/auth/verify-email", json={"token": token})
        assert again.status_code == 400
        assert again.json()["error"] == "validation_error"

    def test_duplicate_username_conflicts(self, client) -> None:
        register(client, "alice")
        response = register(client, "alice")
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_wrong_password(self, client, mailer) -> None:
        register_and_login(client, mailer)
        response = client.post(
            "/api/v1/auth/login", json={"username": "alice", "password": "nope-nope"}
        )
        assert response.status_code == 401
        assert response.json() == {
            "error": "authentication_failed",
            "detail": "Incorrect username or password",
        }

    def test_register_validation(self, client) -> None:
        response = client.post(
            "/api/v1/auth/register",
            json={"username": "al", "email": "not-an-email", "password": "short"},
        )
        assert response.status_code == 422


class TestAuthorization:
    """Bearer token and admin checks."""

    def test_missing_token(self, client) -> None:
        assert client.get("/api/v1/wallet").status_code == 401

    def test_garbage_token(self, client) -> None:
        response = client.get(
            "/api/v1/wallet", headers={"Authorization": "Bearer not.a.jwt"}
        )
        assert response.status_code == 401

    def test_admin_routes_refuse_customers(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        for path in ("/admin/users", "/admin/dashboard", "/admin/kyc/pending"):
            assert alice.get(path).status_code == 403

    def test_admin_routes_need_token(self, client) -> None:
        assert client.get("/api/v1/admin/users").status_code == 401


class TestKycFlow:
    """KYC submission through admin approval."""

    def test_submit_then_approve(self, client, mailer, admin) -> None:
        alice = register_and_login(client, mailer)
        assert alice.get("/kyc/status").json() == {"status": "none", "kyc": None}

        submitted = alice.post(
            "/kyc", json={"document_type": "passport", "document_id": "P-1"}
        )
        assert submitted.status_code == 201
        kyc_id = submitted.json()["id"]

        pending = admin.get("/admin/kyc/pending").json()
        assert [r["id"] for r in pending] == [kyc_id]

        decided = admin.put(f"/admin/kyc/{kyc_id}", json={"status": "approved"})
        assert decided.status_code == 200
        assert decided.json()["status"] == "approved"

        status = alice.get("/kyc/status").json()
        assert status["status"] == "approved"
        assert status["kyc"]["id"] == kyc_id
        assert alice.get("/auth/me").json()["is_verified"] is True

    def test_second_submission_conflicts(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        payload = {"document_type": "passport", "document_id": "P-1"}
        alice.post("/kyc", json=payload)
        response = alice.post("/kyc", json=payload)
        assert response.status_code == 409

    def test_rejection_needs_reason(self, client, mailer, admin) -> None:
        alice = register_and_login(client, mailer)
        kyc_id = alice.post(
            "/kyc", json={"document_type": "passport", "document_id": "P-1"}
        ).json()["id"]

        assert admin.put(f"/admin/kyc/{kyc_id}", json={"status": "rejected"}).status_code == 400
        assert admin.put(f"/admin/kyc/{kyc_id}", json={"status": "maybe"}).status_code == 400

        rejected = admin.put(
            f"/admin/kyc/{kyc_id}",
            json={"status": "rejected", "rejection_reason": "unreadable"},
        )
        assert rejected.status_code == 200
        assert admin.put(f"/admin/kyc/{kyc_id}", json={"status": "approved"}).status_code == 409


class TestWalletAndTransactions:
    """Deposits, withdrawals and their admin decisions."""

    def test_deposit_is_immediate(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        response = alice.post("/transactions", json={"type": "deposit", "amount": "50"})
        assert response.status_code == 201
        assert response.json()["status"] == "completed"
        assert Decimal(alice.get("/wallet").json()["balance"]) == Decimal("50.00")

    def test_unverified_withdrawal_refused(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        alice.post("/transactions", json={"type": "deposit", "amount": "50"})
        response = alice.post("/transactions", json={"type": "withdrawal", "amount": "10"})
        assert response.status_code == 403
        assert response.json()["error"] == "verification_required"
        assert Decimal(alice.get("/wallet").json()["balance"]) == Decimal("50.00")

    def test_withdrawal_above_balance(self, client, engine) -> None:
        bob = _verified_actor(client, engine, "bob", "10.00")
        response = bob.post("/transactions", json={"type": "withdrawal", "amount": "80"})
        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_funds"

    def test_withdrawal_approval(self, client, engine, admin) -> None:
        bob = _verified_actor(client, engine, "bob", "100.00")
        created = bob.post("/transactions", json={"type": "withdrawal", "amount": "80"})
        assert created.status_code == 201
        tx_id = created.json()["id"]
        assert created.json()["status"] == "pending"
        assert Decimal(bob.get("/wallet").json()["balance"]) == Decimal("100.00")

        queue = admin.get("/admin/transactions/pending").json()
        assert [t["id"] for t in queue] == [tx_id]

        decided = admin.put(f"/admin/transactions/{tx_id}", json={"status": "completed"})
        assert decided.status_code == 200
        assert decided.json()["status"] == "completed"
        assert balance_of(engine, bob.id) == Decimal("20.00")

        again = admin.put(f"/admin/transactions/{tx_id}", json={"status": "rejected"})
        assert again.status_code == 409
        assert again.json()["error"] == "conflict"
        assert balance_of(engine, bob.id) == Decimal("20.00")

    def test_short_withdrawal_stays_pending(self, client, engine, admin) -> None:
        bob = _verified_actor(client, engine, "bob", "100.00")
        first = bob.post("/transactions", json={"type": "withdrawal", "amount": "80"}).json()
        second = bob.post("/transactions", json={"type": "withdrawal", "amount": "80"}).json()
        admin.put(f"/admin/transactions/{first['id']}", json={"status": "completed"})

        response = admin.put(
            f"/admin/transactions/{second['id']}", json={"status": "completed"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_funds"
        history = {t["id"]: t["status"] for t in bob.get("/transactions").json()}
        assert history[second["id"]] == "pending"

    def test_sell_not_supported(self, client, engine) -> None:
        bob = _verified_actor(client, engine, "bob", "100.00")
        response = bob.post(
            "/transactions",
            json={
                "type": "sell",
                "asset_symbol": "AAPL",
                "asset_type": "stock",
                "quantity": "1",
                "price": "10",
            },
        )
        assert response.status_code == 501
        assert response.json()["error"] == "not_supported"

    def test_request_validation(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        assert alice.post("/transactions", json={"type": "swap", "amount": "1"}).status_code == 422
        bad_duration = alice.post(
            "/transactions", json={"type": "deposit", "amount": "1", "duration": 25}
        )
        assert bad_duration.status_code == 422
        zero = alice.post("/transactions", json={"type": "deposit", "amount": "0"})
        assert zero.status_code == 400
        assert zero.json()["error"] == "validation_error"

    @pytest.mark.parametrize("amount", ["1.999", "0.005", "12345678901234567.00"])
    def test_amount_beyond_column_precision(self, client, mailer, amount) -> None:
        alice = register_and_login(client, mailer)
        response = alice.post("/transactions", json={"type": "deposit", "amount": amount})
        assert response.status_code == 422
        assert alice.get("/transactions").json() == []
        assert Decimal(alice.get("/wallet").json()["balance"]) == Decimal("0.00")

    def test_history_is_per_user(self, client, mailer, engine) -> None:
        alice = register_and_login(client, mailer)
        bob = _verified_actor(client, engine, "bob", "0.00")
        alice.post("/transactions", json={"type": "deposit", "amount": "5"})
        assert len(alice.get("/transactions").json()) == 1
        assert bob.get("/transactions").json() == []


class TestPortfolio:
    """Buying assets and listing holdings."""

    def test_buy(self, client, engine) -> None:
        bob = _verified_actor(client, engine, "bob", "100.00")
        response = bob.post(
            "/portfolio",
            json={
                "asset_symbol": "aapl",
                "asset_type": "stock",
                "quantity": "2",
                "price": "10.25",
                "duration": 4,
                "order_type": "market",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert Decimal(body["balance"]) == Decimal("79.50")
        assert body["holding"]["asset_symbol"] == "AAPL"
        assert body["transaction"]["status"] == "completed"
        assert body["transaction"]["duration"] == 4
        assert body["transaction"]["order_type"] == "market"

        holdings = bob.get("/portfolio").json()
        assert len(holdings) == 1
        assert Decimal(holdings[0]["cost_basis"]) == Decimal("20.50")

    def test_buy_over_balance(self, client, engine) -> None:
        bob = _verified_actor(client, engine, "bob", "10.00")
        response = bob.post(
            "/portfolio",
            json={"asset_symbol": "AAPL", "asset_type": "stock", "quantity": "1", "price": "11"},
        )
        assert response.status_code == 400
        assert bob.get("/portfolio").json() == []
        assert bob.get("/transactions").json() == []

    @pytest.mark.parametrize(
        "quantity, price", [("0.000000001", "10000000000"), ("1", "0.123456789")]
    )
    def test_buy_beyond_column_precision(self, client, engine, quantity, price) -> None:
        bob = _verified_actor(client, engine, "bob", "100.00")
        response = bob.post(
            "/portfolio",
            json={
                "asset_symbol": "AAPL",
                "asset_type": "stock",
                "quantity": quantity,
                "price": price,
            },
        )
        assert response.status_code == 422
        assert bob.get("/portfolio").json() == []
        assert Decimal(bob.get("/wallet").json()["balance"]) == Decimal("100.00")

    def test_buy_needs_verification(self, client, mailer) -> None:
        alice = register_and_login(client, mailer)
        alice.post("/transactions", json={"type": "deposit", "amount": "50"})
        response = alice.post(
            "/portfolio",
            json={"asset_symbol": "AAPL", "asset_type": "stock", "quantity": "1", "price": "1"},
        )
        assert response.status_code == 403


class TestWatchlist:
    """Watchlist entries belong to their owner."""

    def test_add_list_delete(self, client, mailer, engine) -> None:
        alice = register_and_login(client, mailer)
        bob = _verified_actor(client, engine, "bob", "0.00")
        created = alice.post(
            "/watchlist",
            json={"asset_symbol": "tsla", "asset_name": "Tesla", "asset_type": "stock"},
        )
        assert created.status_code == 201
        entry_id = created.json()["id"]
        assert created.json()["asset_symbol"] == "TSLA"

        assert bob.delete(f"/watchlist/{entry_id}").status_code == 404
        assert len(alice.get("/watchlist").json()) == 1

        assert alice.delete(f"/watchlist/{entry_id}").status_code == 204
        assert alice.get("/watchlist").json() == []


class TestAdminOverview:
    """User listing and dashboard."""

    def test_users_listing_hides_secrets(self, client, mailer, admin) -> None:
        register_and_login(client, mailer)
        users = admin.get("/admin/users").json()
        assert {u["username"] for u in users} == {"admin", "alice"}
        assert all("password" not in u for u in users)

    def test_dashboard(self, client, engine, admin) -> None:
        bob = _verified_actor(client, engine, "bob", "100.00")
        bob.post("/transactions", json={"type": "withdrawal", "amount": "10"})

        body = admin.get("/admin/dashboard").json()

        assert body["total_users"] == 2
        assert body["verified_users"] == 2
        assert body["verified_percentage"] == 100
        assert body["pending_transactions"]["withdrawal"] == 1
        assert Decimal(body["total_balance"]) == Decimal("100.00")
        assert get_user(engine, bob.id).is_verified is True

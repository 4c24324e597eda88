"""
Tests for the verification email adapters.

SendGrid is exercised through an httpx MockTransport, no network needed.
"""

import json

import httpx

from tradedesk.infrastructure.brokerage.verification_mailer import (
    OUTBOX_SIZE,
    SENDGRID_SEND_URL,
    LoggingVerificationMailer,
    SendGridVerificationMailer,
    verification_link,
)


class TestVerificationLink:
    def test_trailing_slash_ignored(self) -> None:
        assert (
            verification_link("https://app.example.com/", "abc")
            == "https://app.example.com/verify-email?token=abc"
        )


class TestLoggingVerificationMailer:
    """Tests for the development mailer."""

    def test_keeps_link_in_outbox(self) -> None:
        mailer = LoggingVerificationMailer(base_url="http://localhost")
        mailer.send_verification("a@example.com", "tok")
        assert list(mailer.outbox) == [
            ("a@example.com", "http://localhost/verify-email?token=tok")
        ]

    def test_outbox_is_bounded(self) -> None:
        mailer = LoggingVerificationMailer(base_url="http://localhost")
        for i in range(OUTBOX_SIZE + 5):
            mailer.send_verification(f"user{i}@example.com", str(i))
        assert len(mailer.outbox) == OUTBOX_SIZE
        assert mailer.outbox[0][0] == "user5@example.com"

    def test_token_not_logged_at_info(self, caplog) -> None:
        mailer = LoggingVerificationMailer(base_url="http://localhost")
        with caplog.at_level("INFO"):
            mailer.send_verification("a@example.com", "secret-token")
        assert "a@example.com" in caplog.text
        assert "secret-token" not in caplog.text


class TestSendGridVerificationMailer:
    """Tests for SendGrid delivery."""

    def _mailer(self, handler) -> SendGridVerificationMailer:
        return SendGridVerificationMailer(
            api_key="SG.test",
            sender="no-reply@example.com",
            base_url="https://app.example.com",
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

    def test_posts_message(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202)

        self._mailer(handler).send_verification("a@example.com", "tok")

        [request] = seen
        assert str(request.url) == SENDGRID_SEND_URL
        assert request.headers["Authorization"] == "Bearer SG.test"
        body = json.loads(request.content)
        assert body["personalizations"][0]["to"] == [{"email": "a@example.com"}]
        assert body["from"] == {"email": "no-reply@example.com"}
        assert "https://app.example.com/verify-email?token=tok" in body["content"][0]["value"]

    def test_html_body_states_token_lifetime(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(202)

        mailer = SendGridVerificationMailer(
            api_key="SG.test",
            sender="no-reply@example.com",
            base_url="https://app.example.com",
            token_ttl_hours=48,
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        mailer.send_verification("a@example.com", "tok")

        html = seen[0]["content"][1]
        assert html["type"] == "text/html"
        assert "expires in 48 hours" in html["value"]
        assert "24 hours" not in html["value"]

    def test_failure_is_logged_not_raised(self, caplog) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errors": [{"message": "bad key"}]})

        self._mailer(handler).send_verification("a@example.com", "tok")

        assert "Verification email to a@example.com failed" in caplog.text

    def test_transport_error_is_swallowed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        self._mailer(handler).send_verification("a@example.com", "tok")

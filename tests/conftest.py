"""
Shared fixtures.

Every test gets its own file-backed SQLite database under ``tmp_path``.
Environment overrides are applied before the application is imported,
because settings are read at import time.
"""

import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["SENDGRID_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tests.helpers import ADMIN_PASSWORD, ADMIN_USERNAME, ApiActor, login  # noqa: E402
from tradedesk.core.config import Settings  # noqa: E402
from tradedesk.infrastructure.brokerage.password_hasher import (  # noqa: E402
    PasslibPasswordHasher,
)
from tradedesk.infrastructure.brokerage.unit_of_work import SqlUnitOfWork  # noqa: E402
from tradedesk.infrastructure.brokerage.verification_mailer import (  # noqa: E402
    LoggingVerificationMailer,
)
from tradedesk.infrastructure.database import build_engine, init_db  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    """Fresh database with schema and bootstrap administrator."""
    engine = build_engine(f"sqlite:///{tmp_path / 'tradedesk-test.db'}")
    test_settings = Settings(
        _env_file=None,
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
    )
    init_db(engine, test_settings, PasslibPasswordHasher())
    yield engine
    engine.dispose()


@pytest.fixture
def uow(engine) -> SqlUnitOfWork:
    return SqlUnitOfWork(engine)


@pytest.fixture
def mailer() -> LoggingVerificationMailer:
    return LoggingVerificationMailer(base_url="http://testserver")


@pytest.fixture
def client(engine, mailer):
    """TestClient bound to the per-test database.

    The lifespan is not entered, so startup never touches the default engine.
    """
    from tradedesk.interfaces.brokerage.dependencies import get_verification_mailer
    from tradedesk.interfaces.dependencies import get_engine
    from tradedesk.main import app

    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_verification_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(client) -> ApiActor:
    return login(client, ADMIN_USERNAME, ADMIN_PASSWORD)

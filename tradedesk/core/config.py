"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL. PostgreSQL in production, SQLite locally.
        jwt_secret_key: Secret used to sign access tokens.
        jwt_algorithm: JWS algorithm for access tokens.
        access_token_expire_minutes: Lifetime of an access token.
        verification_token_ttl_hours: Lifetime of an email verification token.
        default_currency: Currency of every wallet.
        email_verification_grants_trading: Confirming an email also marks the
            user as verified, bypassing KYC review. Off by default.
        rate_limit_enabled: Toggle for slowapi limits.
        rate_limit_auth: Rate limit for registration and login.
        cors_allowed_origins: Origins allowed to call the API from a browser.
        admin_username / admin_email / admin_password: Bootstrap administrator,
            created at startup when a password is configured.
        public_base_url: Base URL used in verification links.
        sendgrid_api_key: Enables SendGrid delivery of verification emails.
        mail_from: Sender address for outbound email.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "TradeDesk"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./tradedesk.db"

    jwt_secret_key: str = "change-this-to-a-random-secret-key-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    verification_token_ttl_hours: int = 24
    default_currency: str = "USD"
    email_verification_grants_trading: bool = False

    rate_limit_enabled: bool = True
    rate_limit_auth: str = "10/minute"

    cors_allowed_origins: list[str] = ["http://localhost:5173"]

    admin_username: str = "admin"
    admin_email: str = "admin@tradedesk.local"
    admin_password: Optional[str] = None

    public_base_url: str = "http://localhost:5173"
    sendgrid_api_key: Optional[str] = None
    mail_from: str = "no-reply@tradedesk.local"


settings = Settings()

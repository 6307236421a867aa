"""Runtime settings read from environment variables.

Settings are re-read on every call so that a changed environment (tests,
reloads) takes effect without restarting the process.
"""

import os
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_algorithm: str
    token_ttl: timedelta
    bcrypt_rounds: int
    resend_api_key: str | None
    order_email_sender: str
    admin_username: str
    admin_password: str | None


def _optional(name: str) -> str | None:
    value = (os.getenv(name) or "").strip()
    return value or None


def get_settings() -> Settings:
    return Settings(
        jwt_secret=os.getenv("JWT_SECRET", "secret"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl=timedelta(seconds=int(os.getenv("TOKEN_TTL_SECONDS", "86400"))),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
        resend_api_key=_optional("RESEND_API_KEY"),
        order_email_sender=os.getenv("ORDER_EMAIL_SENDER", "Aura Store <orders@aura.store>"),
        admin_username=os.getenv("ADMIN_USERNAME", "admin"),
        admin_password=_optional("ADMIN_PASSWORD"),
    )

"""
Configuration management using Dynaconf with validation.
"""

import re

from dynaconf import Dynaconf, Validator


def validate_database_url(value: str) -> bool:
    """Validate database URL format."""
    if not value:
        return False

    patterns = [
        r"^sqlite\+aiosqlite:///:memory:$",  # SQLite in-memory
        r"^sqlite\+aiosqlite:///.*\.db$",  # SQLite
        r"^postgresql\+asyncpg://.*",  # PostgreSQL
    ]

    return any(re.match(pattern, value) for pattern in patterns)


def validate_url_list(value: list) -> bool:
    """Validate list of URLs."""
    if not isinstance(value, list):
        return False

    url_pattern = r"^https?://.*|^\*$"  # Allow * for development
    return all(re.match(url_pattern, str(url)) for url in value)


def validate_port(value: int) -> bool:
    """Validate port number."""
    return isinstance(value, int) and 1 <= value <= 65535


def validate_currency(value: str) -> bool:
    """Validate a three letter ISO currency code."""
    return isinstance(value, str) and bool(re.fullmatch(r"[a-zA-Z]{3}", value))


core_validators = [
    # Token signing secret
    Validator(
        "SECRET_KEY",
        must_exist=True,
        len_min=32,
        messages={
            "must_exist_true": "SECRET_KEY is required to sign access tokens",
            "len_min": "SECRET_KEY must be at least 32 characters for security",
        },
    ),
    Validator(
        "DATABASE_URL",
        default="sqlite+aiosqlite:///./medicamp.db",
        condition=validate_database_url,
        messages={"condition": "DATABASE_URL must be a valid async SQLAlchemy URL"},
    ),
    # Server settings
    Validator("DEBUG", default=False, is_type_of=bool),
    Validator("DATABASE_ECHO", default=False, is_type_of=bool),
    Validator("HOST", default="127.0.0.1", is_type_of=str),
    Validator(
        "PORT",
        default=5000,
        is_type_of=int,
        condition=validate_port,
        messages={"condition": "PORT must be between 1 and 65535"},
    ),
    Validator(
        "ENVIRONMENT",
        default="development",
        is_in=["development", "testing", "production"],
    ),
    # CORS settings
    Validator(
        "ALLOWED_ORIGINS",
        default=["http://localhost:5173", "https://medicamp-76a03.web.app"],
        is_type_of=list,
        condition=validate_url_list,
        messages={"condition": "ALLOWED_ORIGINS must be a list of valid URLs"},
    ),
    # Access tokens
    Validator("TOKEN_LIFETIME_SECONDS", default=86400, is_type_of=int, gt=0),
    Validator("TOKEN_COOKIE_NAME", default="token", is_type_of=str),
    # Logging
    Validator(
        "LOG_LEVEL",
        default="INFO",
        is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    ),
    Validator("LOG_TO_FILE", default=True, is_type_of=bool),
]

# Stripe is optional; payment intents answer 503 until a key is configured
payment_validators = [
    Validator("STRIPE_SECRET_KEY", is_type_of=str),
    Validator(
        "PAYMENT_CURRENCY",
        default="usd",
        condition=validate_currency,
        messages={"condition": "PAYMENT_CURRENCY must be a 3 letter currency code"},
    ),
]

all_validators = core_validators + payment_validators

settings = Dynaconf(
    envvar_prefix="MEDICAMP",
    env_switcher="MEDICAMP_ENV",
    settings_files=["settings.toml", ".secrets.toml"],
    environments=True,
    load_dotenv=True,
    validators=all_validators,
)

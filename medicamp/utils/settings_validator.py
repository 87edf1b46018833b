"""
Settings validation and health check utilities.

Checks the loaded configuration for problems Dynaconf validators cannot
express (production-only rules, cross-setting consistency) and produces a
report of errors, warnings and passed checks.
"""

import re
import socket
from typing import Any
from urllib.parse import urlparse

from dynaconf import ValidationError

from medicamp.config import settings

SUPPORTED_DATABASE_SCHEMES = ("sqlite+aiosqlite", "postgresql+asyncpg")

PLACEHOLDER_SECRET_PREFIXES = ("development-", "testing-", "change-me")


class SettingsHealthCheck:
    """Settings validation and health checking."""

    def __init__(self):
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.info: list[str] = []

    @property
    def environment(self) -> str:
        return settings.get("ENVIRONMENT", "development")

    def validate_all(self) -> dict[str, Any]:
        """
        Validate all settings and return a report.

        Returns:
            Dictionary with validation results, errors, warnings, and info
        """
        self.errors.clear()
        self.warnings.clear()
        self.info.clear()

        self._validate_security_settings()
        self._validate_database_settings()
        self._validate_server_settings()
        self._validate_payment_settings()
        self._validate_environment_specific()

        return {
            "valid": len(self.errors) == 0,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "summary": self._generate_summary(),
        }

    def _validate_security_settings(self) -> None:
        secret_key = settings.get("SECRET_KEY")
        if not secret_key:
            self.errors.append("SECRET_KEY is not set")
        elif len(secret_key) < 32:
            self.errors.append("SECRET_KEY is too short (minimum 32 characters)")
        elif secret_key.startswith(PLACEHOLDER_SECRET_PREFIXES):
            if self.environment == "production":
                self.errors.append("SECRET_KEY must be changed from default in production")
            else:
                self.warnings.append(
                    "SECRET_KEY is using a placeholder value (change for production)"
                )
        else:
            self.info.append("SECRET_KEY is properly configured")

        lifetime = settings.get("TOKEN_LIFETIME_SECONDS", 86400)
        if not isinstance(lifetime, int) or lifetime <= 0:
            self.errors.append(f"Invalid TOKEN_LIFETIME_SECONDS: {lifetime}")
        else:
            self.info.append(f"Access tokens expire after {lifetime} seconds")

    def _validate_database_settings(self) -> None:
        db_url = settings.get("DATABASE_URL")
        if not db_url:
            self.errors.append("DATABASE_URL is not set")
            return

        parsed = urlparse(db_url)
        if not parsed.scheme:
            self.errors.append("DATABASE_URL missing scheme (e.g., sqlite+aiosqlite)")
            return
        if parsed.scheme not in SUPPORTED_DATABASE_SCHEMES:
            self.errors.append(f"DATABASE_URL uses unsupported scheme: {parsed.scheme}")
            return

        self.info.append(f"Database configured: {parsed.scheme}")

        if parsed.scheme == "sqlite+aiosqlite":
            if not parsed.path or parsed.path == "/":
                self.errors.append("SQLite DATABASE_URL missing database file path")
            elif parsed.path == "/:memory:":
                if self.environment != "testing":
                    self.warnings.append(
                        "In-memory SQLite database loses all data on restart"
                    )
            elif self.environment == "production":
                self.warnings.append("SQLite is not recommended in production")
        else:
            if not parsed.hostname:
                self.errors.append("Database URL missing hostname")
            if not parsed.username:
                self.warnings.append("Database URL missing username")

    def _validate_server_settings(self) -> None:
        host = settings.get("HOST", "127.0.0.1")
        try:
            socket.inet_aton(host)
            self.info.append(f"Server host: {host}")
        except OSError:
            if host == "localhost":
                self.info.append(f"Server host: {host}")
            else:
                self.warnings.append(f"Host may be invalid: {host}")

        port = settings.get("PORT", 5000)
        if not isinstance(port, int) or not (1 <= port <= 65535):
            self.errors.append(f"Invalid PORT: {port}")
        elif port < 1024 and port not in (80, 443):
            self.warnings.append(f"Using privileged port {port} (may require sudo)")
        else:
            self.info.append(f"Server port: {port}")

        allowed_origins = settings.get("ALLOWED_ORIGINS", [])
        if not isinstance(allowed_origins, list):
            self.errors.append("ALLOWED_ORIGINS must be a list")
        elif "*" in allowed_origins:
            # Credentialed CORS cannot use a wildcard origin
            self.errors.append("ALLOWED_ORIGINS cannot contain '*'")
        elif not allowed_origins:
            self.warnings.append("ALLOWED_ORIGINS is empty; browsers will be refused")
        else:
            self.info.append(f"CORS origins configured: {len(allowed_origins)} domains")

    def _validate_payment_settings(self) -> None:
        stripe_key = settings.get("STRIPE_SECRET_KEY")
        if not stripe_key:
            message = "STRIPE_SECRET_KEY not set (payment intents will return 503)"
            if self.environment == "production":
                self.warnings.append(message)
            else:
                self.info.append(message)
        elif not stripe_key.startswith(("sk_", "rk_")):
            self.warnings.append("STRIPE_SECRET_KEY does not look like a Stripe secret key")
        elif self.environment == "production" and stripe_key.startswith("sk_test_"):
            self.warnings.append("Stripe test key configured in production")
        else:
            self.info.append("Stripe secret key configured")

        currency = settings.get("PAYMENT_CURRENCY", "usd")
        if not re.fullmatch(r"[A-Za-z]{3}", str(currency)):
            self.errors.append(f"Invalid PAYMENT_CURRENCY: {currency}")
        else:
            self.info.append(f"Payment currency: {currency.lower()}")

    def _validate_environment_specific(self) -> None:
        debug = settings.get("DEBUG", False)

        if self.environment == "production":
            if debug:
                self.errors.append("DEBUG must be False in production")
            if settings.get("DATABASE_ECHO", False):
                self.warnings.append("DATABASE_ECHO should be False in production")
            self.info.append("Production environment validation completed")
        else:
            self.info.append(f"Environment: {self.environment}")

    def _generate_summary(self) -> str:
        if self.errors:
            return (
                f"Configuration has {len(self.errors)} error(s) "
                f"and {len(self.warnings)} warning(s)"
            )
        elif self.warnings:
            return f"Configuration has {len(self.warnings)} warning(s) but no errors"
        else:
            return f"Configuration is valid ({len(self.info)} checks passed)"


def validate_settings() -> dict[str, Any]:
    """
    Validate all application settings.

    Returns:
        Validation report dictionary
    """
    checker = SettingsHealthCheck()
    return checker.validate_all()


def print_validation_report() -> bool:
    """
    Print the validation report to the console.

    Returns:
        True if validation passed, False if there were errors
    """
    print("Settings Validation Report")
    print("=" * 50)

    try:
        report = validate_settings()
    except ValidationError as e:
        print(f"\nConfiguration validation failed: {str(e)}")
        return False

    print(f"\n{report['summary']}")

    for title, entries in (
        ("ERRORS", report["errors"]),
        ("WARNINGS", report["warnings"]),
        ("PASSED", report["info"]),
    ):
        if entries:
            print(f"\n{title} ({len(entries)}):")
            for i, entry in enumerate(entries, 1):
                print(f"  {i}. {entry}")

    print("\n" + "=" * 50)
    return report["valid"]


if __name__ == "__main__":
    import sys

    sys.exit(0 if print_validation_report() else 1)

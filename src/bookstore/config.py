"""
Configuration management for the bookstore service.

Loads an optional JSON config file and applies environment overrides on top of
sensible defaults.
"""

import json
import os
import secrets
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict, field
import logging
import sys

# List of known weak/default JWT secrets that should be rejected
WEAK_JWT_SECRETS = {
    "your-secret-key-change-in-production",
    "secret",
    "key",
    "password",
    "jwt-secret",
    "secret-key",
    "change-me",
    "default",
    "test",
    "development",
    "dev",
    "demo",
    "example",
    "sample",
}


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _validate_jwt_secret_key(jwt_secret_key: str) -> None:
    """Validate JWT secret key security and reject weak/default keys.

    Args:
        jwt_secret_key: The JWT secret key to validate

    Raises:
        SystemExit: If the secret key is weak, default, or insecure
    """
    if not jwt_secret_key:
        logging.critical(
            "JWT secret key is empty - this is a critical security vulnerability"
        )
        sys.exit(1)

    if len(jwt_secret_key) < 32:
        logging.critical(
            f"JWT secret key is too short ({len(jwt_secret_key)} chars). "
            f"Minimum 32 characters required for security."
        )
        sys.exit(1)

    if jwt_secret_key.lower() in WEAK_JWT_SECRETS:
        logging.critical(
            f"JWT secret key '{jwt_secret_key}' is a known weak/default secret. "
            f"Set BOOKSTORE_JWT_SECRET_KEY environment variable with a secure key."
        )
        sys.exit(1)

    unique_chars = len(set(jwt_secret_key))
    if unique_chars < 8:
        logging.critical(
            f"JWT secret key has insufficient entropy ({unique_chars} unique characters). "
            f"Use a cryptographically secure random key."
        )
        sys.exit(1)

    logging.debug(
        f"JWT secret key validation passed ({len(jwt_secret_key)} chars, {unique_chars} unique)"
    )


@dataclass
class DatabaseConfig:
    """Database configuration."""

    url: str = "sqlite:///bookstore.db"
    echo: bool = False
    log_queries: bool = False  # Slow query logging


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    auto_reload: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Fenix's Bookstore"
    description: str = "Bookstore account and security service"

    web_dir: Optional[str] = None

    # Password hashing
    password_hash_iterations: int = 120_000  # PBKDF2 iterations

    # JWT Configuration - secret key will be auto-generated or from environment
    jwt_secret_key: str = ""
    jwt_access_token_expires_minutes: int = 60 * 3
    jwt_refresh_token_expires_days: int = 30

    # Web security
    security_cache_control: bool = False  # Spring-style no-cache headers on every response
    security_include_hsts: bool = False
    security_ignored_paths: List[str] = field(default_factory=lambda: ["/static/**"])

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"


@dataclass
class BookstoreConfig:
    """Complete configuration for the bookstore service."""

    app: AppConfig
    server: ServerConfig
    database: DatabaseConfig

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "app": asdict(self.app),
            "server": asdict(self.server),
            "database": asdict(self.database),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookstoreConfig":
        """Create from dictionary."""
        return cls(
            app=AppConfig(**data.get("app", {})),
            server=ServerConfig(**data.get("server", {})),
            database=DatabaseConfig(**data.get("database", {})),
        )


class ConfigManager:
    """Manages configuration loading and environment overrides."""

    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[BookstoreConfig] = None

    def get_config_file_path(self) -> Optional[Path]:
        """Get the config file path, if one was configured."""
        config_file = os.getenv("BOOKSTORE_CONFIG_FILE")
        return Path(config_file) if config_file else None

    def _apply_environment(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay BOOKSTORE_* environment variables onto raw config data."""
        app = data.setdefault("app", {})
        server = data.setdefault("server", {})
        database = data.setdefault("database", {})

        db_url = (
            os.getenv("BOOKSTORE_DATABASE_URL")
            or os.getenv("TEST_DATABASE_URL")
            or os.getenv("DATABASE_URL")
        )
        if db_url:
            database["url"] = db_url

        if os.getenv("BOOKSTORE_DEBUG") is not None:
            debug = _env_flag("BOOKSTORE_DEBUG")
            server["debug"] = debug
            app["log_level"] = "DEBUG" if debug else "INFO"

        if os.getenv("BOOKSTORE_WEB_DIR"):
            app["web_dir"] = os.getenv("BOOKSTORE_WEB_DIR")
        if os.getenv("BOOKSTORE_LOG_DIR"):
            app["log_dir"] = os.getenv("BOOKSTORE_LOG_DIR")
        if os.getenv("BOOKSTORE_LOG_TO_FILE") is not None:
            app["log_to_file"] = _env_flag("BOOKSTORE_LOG_TO_FILE")

        jwt_secret_key = os.getenv("BOOKSTORE_JWT_SECRET_KEY")
        if jwt_secret_key:
            app["jwt_secret_key"] = jwt_secret_key
            logging.info(
                "Using JWT secret key from BOOKSTORE_JWT_SECRET_KEY environment variable"
            )
        elif not app.get("jwt_secret_key"):
            app["jwt_secret_key"] = secrets.token_urlsafe(64)  # 512-bit key
            logging.info("Generated new JWT secret key (not from environment)")

        return data

    def load_config(self) -> BookstoreConfig:
        """Load configuration from file (if any) and the environment."""
        self.config_file = self.get_config_file_path()
        data: Dict[str, Any] = {}

        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                logging.info(f"Loaded configuration from {self.config_file}")
            except (OSError, ValueError) as e:
                logging.warning(f"Failed to load config from {self.config_file}: {e}")
                data = {}
        else:
            logging.info("No config file found, using default configuration")

        config = BookstoreConfig.from_dict(self._apply_environment(data))
        _validate_jwt_secret_key(config.app.jwt_secret_key)

        self.config = config
        return config

    def save_config(self, config: Optional[BookstoreConfig] = None) -> bool:
        """Save configuration to the configured file."""
        if config is None:
            config = self.config

        if config is None or self.config_file is None:
            logging.error("No configuration or config file to save to")
            return False

        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)

            logging.info(f"Saved configuration to {self.config_file}")
            return True

        except OSError as e:
            logging.error(f"Failed to save config to {self.config_file}: {e}")
            return False

    def get_web_directory(self) -> Optional[Path]:
        """Get the web directory path."""
        web_dir = get_config().app.web_dir
        return Path(web_dir) if web_dir else None


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> BookstoreConfig:
    """Get the current configuration, loading it on first use."""
    if config_manager.config is None:
        return config_manager.load_config()
    return config_manager.config


def get_web_directory() -> Optional[Path]:
    """Get the web directory."""
    return config_manager.get_web_directory()

# config.py
import os

from dotenv import load_dotenv

load_dotenv()


class ConfigError(RuntimeError):
    """Raised at startup when required configuration is missing."""


def _csv(value: str):
    return [part.strip() for part in value.split(",") if part.strip()]


class Config:
    # --- Database ---
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- JWT (single externally supplied secret) ---
    JWT_SECRET = os.environ.get("JWT_SECRET")
    JWT_ALGORITHM = "HS256"
    JWT_EXP_DELTA_SECONDS = 60 * 60 * 24

    # --- Bootstrap admin ---
    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin123")

    BCRYPT_LOG_ROUNDS = int(os.environ.get("BCRYPT_LOG_ROUNDS", "12"))
    CORS_ORIGINS = _csv(os.environ.get("CORS_ORIGINS", "*"))
    MAX_IMAGE_BYTES = int(os.environ.get("MAX_IMAGE_BYTES", str(2 * 1024 * 1024)))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    PORT = int(os.environ.get("PORT", "5000"))


REQUIRED_KEYS = ("SQLALCHEMY_DATABASE_URI", "JWT_SECRET")
BCRYPT_MAX_PASSWORD_BYTES = 72


def validate_config(config) -> None:
    missing = [key for key in REQUIRED_KEYS if not config.get(key)]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}")
    admin_password = config.get("ADMIN_PASSWORD") or ""
    if not admin_password or len(admin_password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ConfigError(f"ADMIN_PASSWORD must be 1-{BCRYPT_MAX_PASSWORD_BYTES} bytes")

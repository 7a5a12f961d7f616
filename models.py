# models.py
import uuid
from datetime import datetime, timezone
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.types import TypeDecorator, String
from sqlalchemy import JSON
from database import db, bcrypt


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every dialect round-trips unchanged."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ---------- UUID Support for SQLite ----------
class GUID(TypeDecorator):
    """
    Platform-independent GUID/UUID type.
    Uses PostgreSQL UUID type, otherwise stores as string.
    """
    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(UUID(as_uuid=True))
        else:
            return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(value)
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


# ---------- Login credentials ----------
class Credential(db.Model):
    __tablename__ = "credentials"

    id = db.Column(GUID(), primary_key=True, default=uuid.uuid4)
    username = db.Column(db.String(150), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    # Password helpers
    def set_password(self, password: str):
        self.password_hash = bcrypt.generate_password_hash(password).decode("utf-8")

    def check_password(self, password: str) -> bool:
        return bcrypt.check_password_hash(self.password_hash, password)


# ---------- Employees ----------
class Employee(db.Model):
    __tablename__ = "employees"

    id = db.Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    # lower-cased email; the unique index backs case-insensitive uniqueness
    email_key = db.Column(db.String(255), unique=True, nullable=False, index=True)
    mobile = db.Column(db.String(10), nullable=False)
    designation = db.Column(db.String(50), nullable=False)
    gender = db.Column(db.String(1), nullable=False)
    courses = db.Column(JSON, nullable=False, default=list)
    image = db.Column(db.Text, nullable=True)  # data URL
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    def set_email(self, email: str):
        self.email = email
        self.email_key = email.lower()

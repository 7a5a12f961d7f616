# services/auth_service.py
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app
from sqlalchemy.exc import IntegrityError

from config import BCRYPT_MAX_PASSWORD_BYTES
from database import db, bcrypt
from exceptions import InvalidCredentials, InvalidToken, MissingToken, ValidationError
from models import Credential

# Compared against when the username is unknown so both failure paths hash.
_DUMMY_HASH_KEY = "_auth_dummy_hash"


class AuthService:
    @staticmethod
    def _secret() -> str:
        return current_app.config["JWT_SECRET"]

    @staticmethod
    def _algorithm() -> str:
        return current_app.config.get("JWT_ALGORITHM", "HS256")

    @staticmethod
    def _dummy_hash() -> str:
        cached = current_app.extensions.get(_DUMMY_HASH_KEY)
        if cached is None:
            cached = bcrypt.generate_password_hash("not-a-real-password").decode("utf-8")
            current_app.extensions[_DUMMY_HASH_KEY] = cached
        return cached

    @staticmethod
    def create_token(credential_id, username: str) -> str:
        now = datetime.now(timezone.utc)
        expires_in = current_app.config.get("JWT_EXP_DELTA_SECONDS", 60 * 60 * 24)
        payload = {
            "sub": str(credential_id),
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        }
        return jwt.encode(payload, AuthService._secret(), algorithm=AuthService._algorithm())

    @staticmethod
    def verify(token: str) -> dict:
        """Return the token claims; stateless, no database lookup."""
        if not token:
            raise MissingToken()
        try:
            return jwt.decode(
                token,
                AuthService._secret(),
                algorithms=[AuthService._algorithm()],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token expired")
        except jwt.InvalidTokenError:
            raise InvalidToken()

    @staticmethod
    def login(username: str, password: str):
        """
        Check a username/password pair and issue a token.
        Unknown user and wrong password raise the same InvalidCredentials.
        """
        if username is not None and not isinstance(username, str):
            raise ValidationError("username", "Username must be a string")
        if password is not None and not isinstance(password, str):
            raise ValidationError("password", "Password must be a string")
        username = (username or "").strip()
        password = password or ""
        if not username:
            raise ValidationError("username", "Username and password required")
        if not password:
            raise ValidationError("password", "Username and password required")

        # bcrypt refuses longer input; no stored hash can match it anyway
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            current_app.logger.info("Failed login for %r", username)
            raise InvalidCredentials()

        credential = Credential.query.filter_by(username=username).first()
        if credential is None:
            bcrypt.check_password_hash(AuthService._dummy_hash(), password)
            current_app.logger.info("Failed login for %r", username)
            raise InvalidCredentials()
        if not credential.check_password(password):
            current_app.logger.info("Failed login for %r", username)
            raise InvalidCredentials()

        token = AuthService.create_token(credential.id, credential.username)
        current_app.logger.info("User %r logged in", credential.username)
        return token, credential

    @staticmethod
    def ensure_default_admin() -> bool:
        """
        Create the bootstrap admin credential if it does not exist.
        Safe to call repeatedly and from concurrent processes: the unique
        username index decides the winner. Returns True when created here.
        """
        username = current_app.config["ADMIN_USERNAME"]
        if Credential.query.filter_by(username=username).first():
            return False

        admin = Credential(username=username)
        admin.set_password(current_app.config["ADMIN_PASSWORD"])
        db.session.add(admin)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return False
        current_app.logger.info("Default admin user created: %s", username)
        return True

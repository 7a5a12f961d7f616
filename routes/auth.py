# routes/auth.py
from functools import wraps

from flask import Blueprint, request, jsonify, g

from exceptions import MissingToken
from services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__)


# ---------------- Decorators ---------------- #
def _bearer_token():
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def jwt_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise MissingToken()
        g.jwt_payload = AuthService.verify(token)
        return f(*args, **kwargs)
    return decorated


# ---------------- Utilities ---------------- #
def user_summary(user_id, username: str) -> dict:
    return {"id": str(user_id), "username": username}


# ---------------- Routes ---------------- #
@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    token, credential = AuthService.login(data.get("username"), data.get("password"))
    return jsonify({"token": token, "user": user_summary(credential.id, credential.username)}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required
def me():
    claims = g.jwt_payload
    return jsonify({"user": user_summary(claims["sub"], claims.get("username"))}), 200

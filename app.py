# app.py
import logging
import os

from flask import Flask, jsonify, request, current_app
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

# Local imports
from config import Config, validate_config
from database import init_db
from exceptions import ApiError

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def register_error_handlers(app: Flask):
    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if not request.path.startswith("/api/"):
            return exc
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        # details stay in the log; the caller only sees a generic message
        current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Server error"}), 500


def create_app(test_config: dict = None):
    app = Flask(__name__, instance_relative_config=False)
    app.config.from_object(Config)

    # --- Apply test configuration if provided ---
    if test_config:
        app.config.update(test_config)

    # --- Fail fast before touching the database ---
    validate_config(app.config)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # --- Apply CORS ---
    CORS(
        app,
        resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    # --- Initialize database ---
    init_db(app)

    # --- Import and register blueprints ---
    from routes.auth import auth_bp
    from routes.employees import employees_bp
    from routes.ui import ui_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(employees_bp, url_prefix="/api")
    app.register_blueprint(ui_bp)
    register_error_handlers(app)

    # --- Seed the admin before any request can be served ---
    from services.auth_service import AuthService
    with app.app_context():
        AuthService.ensure_default_admin()

    # --- Health check route ---
    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "app": "employee-records"})

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    app = create_app()
    port = int(app.config.get("PORT") or os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    app.run(host="0.0.0.0", port=port, debug=debug)

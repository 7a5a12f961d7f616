# routes/ui.py
from flask import Blueprint, render_template

ui_bp = Blueprint("ui", __name__)


@ui_bp.route("/", methods=["GET"])
def index():
    """Single-page admin UI; all data comes from the /api endpoints."""
    return render_template("index.html", page_size=5)

# database.py
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt

# Import inside functions later to avoid circular import
db = SQLAlchemy()
bcrypt = Bcrypt()


def init_db(app):
    """
    Initialize DB and Bcrypt with the Flask app and create missing tables.
    Call from create_app() in the application factory:
        from database import init_db
        init_db(app)
    """
    db.init_app(app)
    bcrypt.init_app(app)

    with app.app_context():
        import models  # noqa: F401  register mappers before create_all
        db.create_all()

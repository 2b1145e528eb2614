import os
from flask import Flask
from dotenv import load_dotenv

from .config import config_for
from .extensions import db, migrate, cors, limiter
from .common.errors import register_error_handlers
from .common.logging import setup_json_logging, register_request_logging
from .common.security import register_security_headers


def create_app():
    # Charge .env si présent (dev)
    load_dotenv()

    app = Flask(__name__)
    app.config.from_object(config_for(os.getenv("APP_ENV") or os.getenv("FLASK_ENV")))

    setup_json_logging(app)
    register_request_logging(app)
    register_security_headers(app)
    register_error_handlers(app)

    db.init_app(app)
    migrate.init_app(app, db)  # voit la table via notes_api.notes.models
    limiter.init_app(app)

    prefix = app.config["NOTES_URL_PREFIX"]
    cors.init_app(app, resources={
        f"{prefix}/*": {
            "origins": app.config["CORS_ORIGINS"],
            "allow_headers": app.config["CORS_HEADERS"],
            "supports_credentials": False,
        }
    })

    # Un seul NoteStore par app, construit sur l'engine (pool) de Flask-SQLAlchemy
    from .notes.store import NoteStore
    with app.app_context():
        app.extensions["note_store"] = NoteStore(db.engine)

    from .notes.routes import bp as notes_bp
    limiter.limit(app.config["RATELIMIT_NOTES"])(notes_bp)
    app.register_blueprint(notes_bp, url_prefix=prefix)

    from .docs.routes import bp as docs_bp
    app.register_blueprint(docs_bp)

    from .health import bp as health_bp
    app.register_blueprint(health_bp)

    return app

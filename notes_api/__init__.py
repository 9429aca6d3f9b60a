import os
from flask import Flask, jsonify, request
from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import DevConfig, ProdConfig, TestConfig
from .extensions import db, migrate, cors
from .common.errors import register_error_handlers
from .common.logging import setup_json_logging, register_request_logging

API_PREFIX = "/api/v1"


def create_app():
    # Charge .env si présent (dev)
    load_dotenv()

    app = Flask(__name__)

    # Choix config selon env
    env = os.getenv("APP_ENV") or os.getenv("FLASK_ENV", "development")
    if env in ("test", "testing"):
        app.config.from_object(TestConfig)
    elif env == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)

    setup_json_logging(app)
    register_request_logging(app)

    # --- Helpers ---
    def _csv(value, default_if_empty):
        """Convertit une chaîne CSV en liste, sinon retourne la valeur telle quelle ou un défaut."""
        if value is None:
            return default_if_empty
        if isinstance(value, str) and "," in value:
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default_if_empty
        return value

    # --- CORS: whitelist + headers ---
    origins = _csv(app.config.get("CORS_ORIGINS", "*"), "*")
    allow_headers = _csv(app.config.get("CORS_ALLOW_HEADERS"), ["Content-Type"])
    expose_headers = _csv(app.config.get("CORS_EXPOSE_HEADERS"), ["Content-Type"])

    cors.init_app(app, resources={
        API_PREFIX + "/*": {
            "origins": origins,
            "allow_headers": allow_headers,
            "expose_headers": expose_headers,
            "supports_credentials": False,
        }
    })

    # Importer les modèles pour que Flask-Migrate/Alembic voie les tables
    from .authors import models as authors_models  # noqa: F401
    from .notes import models as notes_models      # noqa: F401
    from .tags import models as tags_models        # noqa: F401

    # Handlers d'erreurs JSON uniformes
    register_error_handlers(app)

    # --- Security headers ---
    @app.after_request
    def set_security_headers(resp):
        # API JSON: CSP très restrictif (pas d'HTML attendu)
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "no-referrer"

        # HSTS uniquement si HTTPS (prod / reverse-proxy)
        if (env == "production" or app.config.get("ENFORCE_HTTPS")) and (
            request.is_secure or request.headers.get("X-Forwarded-Proto", "") == "https"
        ):
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"

        return resp

    # --- Blueprints ---
    from .authors.routes import bp as authors_bp
    app.register_blueprint(authors_bp, url_prefix=f"{API_PREFIX}/authors")

    from .notes.routes import bp as notes_bp
    app.register_blueprint(notes_bp, url_prefix=f"{API_PREFIX}/notes")

    from .docs.routes import bp as docs_bp
    app.register_blueprint(docs_bp)

    # Liveness probe (ping DB simple)
    @app.get("/healthz")
    def healthz():
        db_status = "up"
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            app.logger.warning("healthz_db_down", exc_info=True)
            db_status = "down"
        return jsonify({
            "status": "ok",
            "env": env,
            "db": db_status
        })

    return app

from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, GENERIC_ERROR_MESSAGE
from .core.exceptions import AuthenticationError, ConflictError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .database.seed import seed_demo_users
from .plantoes.controller import register as register_plantoes
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_STATUS_FOR_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("escala_plantoes").setLevel(level.upper())


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        code = next((c for exc_type, c in _STATUS_FOR_ERROR if isinstance(e, exc_type)), 400)
        return jsonify({"error": str(e)}), code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        # Detail stays in the log, never in the response body.
        logger.exception("unexpected error on %s %s", request.method, request.path)
        return jsonify({"error": GENERIC_ERROR_MESSAGE}), 500


def get_container(app: Flask) -> Container:
    return app.extensions["escala_plantoes"]


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(str(getattr(settings, "LOG_LEVEL", "INFO")))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    app.json.ensure_ascii = False

    storage = str(getattr(settings, "STORAGE_BACKEND", "mysql"))
    db_config = dict(getattr(settings, "DB_CONFIG"))
    logger.info(
        "settings=%s storage=%s db=%s@%s:%s/%s",
        settings_module,
        storage,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    container = build_container(db_config=db_config, storage=storage)

    if storage == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn)
        logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        seed_demo_users(container.user_service)

    app.extensions["escala_plantoes"] = container

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "message": "Servidor rodando!"})

    register_users(app, container)
    register_plantoes(app, container)
    _register_error_handlers(app)

    return app

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.web import fail, status_for
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, ensure_demo_admin, list_tables

from .attendance.controller import register as register_attendance
from .automation.controller import register as register_automation
from .employees.controller import register as register_employees
from .imports.controller import register as register_imports
from .notifications.controller import register as register_notifications
from .qr.controller import register as register_qr
from .reports.controller import register as register_reports
from .roster.controller import register as register_roster
from .settings.controller import register as register_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), status_for(e))

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return fail("An unexpected error occurred", 500)


def create_app(settings=None, container: Container | None = None) -> Flask:
    settings = settings or load_settings()
    debug = bool(getattr(settings, "DEBUG", False))
    configure_logging(debug)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_MB", 10)) * 1024 * 1024

    if container is None:
        container = build_container(settings)
        db = container.conn.config
        logger.info("Using database %s@%s:%s/%s", db.user, db.host, db.port, db.database)

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_admin(container.conn)
            logger.info("Demo admin ready")
        if getattr(settings, "RUN_REPORT_WORKER", False):
            container.report_worker.start()

    app.extensions["container"] = container
    register_error_handlers(app)

    register_users(app, container)
    register_employees(app, container)
    register_imports(app, container)
    register_qr(app, container)
    register_attendance(app, container)
    register_roster(app, container)
    register_reports(app, container)
    register_notifications(app, container)
    register_settings(app, container)
    register_automation(app, container)

    return app

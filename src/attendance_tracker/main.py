from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .common.responses import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import ensure_demo_data, ensure_indexes, list_collections
from .database.connection import DatabaseConnection, MongoConfig
from .sessions.controller import register as register_sessions
from .timetables.controller import register as register_timetables
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        mongo_uri = getattr(settings, "MONGO_URI")
        db_name = getattr(settings, "MONGO_DB_NAME")
        logger.info("settings=%s db=%s", settings_module, db_name)

        conn = DatabaseConnection.get_instance(MongoConfig(uri=mongo_uri, database=db_name))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_indexes(conn)
            logger.debug("indexes ready (collections=%s)", list_collections(conn))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(conn)

        container = build_container(mongo_uri=mongo_uri, db_name=db_name)

    app.extensions["attendance_container"] = container

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    register_error_handlers(app)
    register_users(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_timetables(app, container)

    return app

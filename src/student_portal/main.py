from __future__ import annotations

import importlib
import signal
import threading
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS
from werkzeug.serving import make_server

from .academics.controller import register as register_academics
from .attendance.controller import register as register_attendance
from .common.http import error
from .common.logging import configure_logging, get_logger
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_students, list_tables
from .database.connection import DBConfig
from .errors import register_error_handlers
from .health.controller import register as register_health
from .justifications.controller import register as register_justifications
from .payments.controller import register as register_payments
from .schedules.controller import register as register_schedules
from .students.controller import register as register_students

logger = get_logger("main")

REPO_ROOT = Path(__file__).resolve().parents[2]
EXTENSION_KEY = "student_portal"

_SETTINGS_KEYS = (
    "DEBUG",
    "TESTING",
    "MAX_CONTENT_LENGTH",
    "API_PREFIX",
    "HOST",
    "PORT",
    "LOG_LEVEL",
)


def _bootstrap_database(settings, db_target: DBConfig) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_target, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_target)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_target, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_students(db_target)
        logger.info("Demo seed ready")


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    for key in _SETTINGS_KEYS:
        if hasattr(settings, key):
            app.config[key] = getattr(settings, key)
    app.config["SHUTTING_DOWN"] = False

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    CORS(
        app,
        origins=getattr(settings, "CORS_ORIGINS", "*"),
        methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Disposition"],
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        pool_size = int(getattr(settings, "DB_POOL_SIZE"))
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        _bootstrap_database(settings, DBConfig.from_dict(db_config, pool_size=pool_size))

        container = build_container(
            db_config=db_config,
            pool_size=pool_size,
            legacy_base_url=getattr(settings, "LEGACY_BASE_URL"),
            upload_timeout=getattr(settings, "LEGACY_UPLOAD_TIMEOUT", None),
            probe_timeout=getattr(settings, "LEGACY_PROBE_TIMEOUT", None),
            profile_images_dir=getattr(settings, "PROFILE_IMAGES_DIR"),
            justification_max_files=int(getattr(settings, "JUSTIFICATION_MAX_FILES")),
            max_file_size=int(getattr(settings, "MAX_FILE_SIZE")),
        )
    app.extensions[EXTENSION_KEY] = container

    @app.before_request
    def _reject_while_shutting_down():
        if app.config.get("SHUTTING_DOWN"):
            return error("Servidor en proceso de apagado", 503)

    register_error_handlers(app)

    register_health(app, container)
    register_students(app, container)
    register_academics(app, container)
    register_attendance(app, container)
    register_payments(app, container)
    register_schedules(app, container)
    register_justifications(app, container)

    return app


def run() -> None:
    """Serve until SIGINT/SIGTERM, then drain: listener first, pool last."""
    app = create_app()
    container: Container = app.extensions[EXTENSION_KEY]
    if container.conn is not None:
        container.conn.warm_up()

    host = app.config.get("HOST", "0.0.0.0")
    port = int(app.config.get("PORT", 8080))
    server = make_server(host, port, app, threaded=True)

    stop = threading.Event()

    def _handle_stop(signum, frame):
        logger.info("Received signal %s, shutting down", signal.Signals(signum).name)
        stop.set()

    signal.signal(signal.SIGTERM, _handle_stop)
    signal.signal(signal.SIGINT, _handle_stop)

    listener = threading.Thread(target=server.serve_forever, name="http-listener", daemon=True)
    listener.start()
    logger.info("Listening on %s:%d", host, port)

    stop.wait()
    app.config["SHUTTING_DOWN"] = True

    server.shutdown()
    listener.join()
    logger.info("HTTP listener closed")

    container.close()
    logger.info("Shutdown complete")


if __name__ == "__main__":
    run()

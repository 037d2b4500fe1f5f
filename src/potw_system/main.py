from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .access.controller import register as register_access
from .analytics.controller import register as register_analytics
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .results.controller import register as register_results
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users
from .votes.controller import register as register_votes

ROOT_DIR = Path(__file__).resolve().parents[2]


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Tests pass a ready ``container`` (in-memory repositories); otherwise one is
    built from the settings module selected by ``APP_ENV``.
    """
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(ROOT_DIR / "templates"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=ROOT_DIR / "database" / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=ROOT_DIR / "database" / "seed.sql")
            ensure_demo_users(db_config)
            app.logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            allowed_domain=getattr(settings, "ALLOWED_EMAIL_DOMAIN"),
            retry_attempts=getattr(settings, "DB_RETRY_ATTEMPTS"),
            retry_max_wait=getattr(settings, "DB_RETRY_MAX_WAIT"),
            cooldown_seconds=getattr(settings, "DB_COOLDOWN_SECONDS"),
        )

    app.extensions["potw_container"] = container

    register_access(app, container)
    register_users(app, container)
    register_sessions(app, container)
    register_votes(app, container)
    register_results(app, container)
    register_analytics(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin_onboarding.controller import register as register_admin_onboarding
from .audit.controller import register as register_audit
from .common.http import register_error_handlers
from .common.logging_config import setup_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .organization.controller import register as register_organization
from .system_onboarding.controller import register as register_system_onboarding
from .user_onboarding.controller import register as register_user_onboarding
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory. Pass ``container`` to run over pre-built repositories (tests)."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")

    # pytest owns the root handlers under test
    if not app.config["TESTING"]:
        setup_logging(
            level=str(getattr(settings, "LOG_LEVEL", "INFO")),
            json_output=str(getattr(settings, "LOG_FORMAT", "json")).lower() == "json",
        )
    logger.info(
        "Starting with settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)
        container = build_container(db_config=db_config)

    register_error_handlers(app)
    register_users(app, container)
    register_system_onboarding(app, container)
    register_user_onboarding(app, container)
    register_admin_onboarding(app, container)
    register_organization(app, container)
    register_audit(app, container)

    return app

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.cameco_hris.cameco_hris.common.logging_config import setup_logging
from src.cameco_hris.cameco_hris.database.bootstrap import DEMO_ACCOUNTS, ensure_demo_users

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    setup_logging(json_output=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)
    for _, username, _, password, role in DEMO_ACCOUNTS:
        logger.info("  %-12s %-16s password=%s", role, username, password)
    logger.info("Seeded demo accounts -> %s/%s", db_config.get("host"), db_config.get("database"))


if __name__ == "__main__":
    main()

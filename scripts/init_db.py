from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.courier_hrms.courier_hrms.database.bootstrap import apply_schema, ensure_demo_admin, list_tables


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply database/schema.sql to the configured MySQL database.")
    parser.add_argument("--with-admin", action="store_true", help="also create the bootstrap admin (ADMIN_MOBILE/ADMIN_PASSWORD)")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.with_admin:
        ensure_demo_admin(db_config)

    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(list_tables(db_config))})"
    )


if __name__ == "__main__":
    main()

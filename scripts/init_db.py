from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from payroll_engine.config import get_settings_module
from payroll_engine.database.bootstrap import apply_schema, list_tables
from payroll_engine.database.connection import DatabaseConnection, DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    executed = apply_schema(db, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db)
    print(
        "OK: Applied schema.sql -> "
        f"{db.config.user}@{db.config.host}:{db.config.port}/{db.config.database} "
        f"(statements={executed}, tables={len(tables)})"
    )


if __name__ == "__main__":
    main()

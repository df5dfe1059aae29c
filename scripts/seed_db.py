"""Create the default setting gaji version when the table is still empty."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from payroll_engine.config import get_settings_module
from payroll_engine.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(storage_backend="mysql", db_config=settings.DB_CONFIG)

    version = container.policy_store.bootstrap_default()
    print(f"OK: setting gaji aktif v{version.setting_id} ({settings.DB_CONFIG.get('database')})")


if __name__ == "__main__":
    main()

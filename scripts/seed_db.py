from __future__ import annotations

import importlib
from pathlib import Path

from potw_system.config import get_settings_module
from potw_system.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_users(db_config)

    print(f"OK: seeded {db_config.get('database')} with {len(DEMO_USERS)} demo users:")
    for u in DEMO_USERS:
        print(f"  {u.email} / {u.password}{' (admin)' if u.is_admin else ''}")


if __name__ == "__main__":
    main()

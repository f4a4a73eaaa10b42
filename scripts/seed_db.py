from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_db_config

from src.campus_events.campus_events.database.bootstrap import apply_seed_sql, describe_target


def main() -> None:
    db_config = get_db_config()
    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    print(f"OK: Seeded demo data -> {describe_target(db_config)}")


if __name__ == "__main__":
    main()

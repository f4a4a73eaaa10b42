from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_db_config

from src.campus_events.campus_events.database.bootstrap import apply_schema, describe_target, list_tables


def main() -> None:
    db_config = get_db_config()
    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = sorted(list_tables(db_config))
    print(f"OK: Applied schema.sql -> {describe_target(db_config)} (tables={len(tables)}: {', '.join(tables)})")


if __name__ == "__main__":
    main()

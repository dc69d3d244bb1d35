from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv  # noqa: E402

from config import get_settings_module  # noqa: E402
from src.attendance_payroll.attendance_payroll.database.bootstrap import apply_schema  # noqa: E402
from src.attendance_payroll.attendance_payroll.database.connection import DBConfig, DatabaseConnection  # noqa: E402


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))

    statements = apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    print(f"OK: applied {len(statements)} statements to {conn.config.user}@{conn.config.host}/{conn.config.database}")


if __name__ == "__main__":
    main()

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_tracker.config import get_settings_module
from attendance_tracker.database.bootstrap import ensure_demo_data, ensure_indexes
from attendance_tracker.database.connection import DatabaseConnection, MongoConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(MongoConfig(uri=settings.MONGO_URI, database=settings.MONGO_DB_NAME))

    ensure_indexes(conn)
    ensure_demo_data(conn)
    print(f"OK: Seeded database -> {settings.MONGO_URI}/{settings.MONGO_DB_NAME}")
    conn.close()


if __name__ == "__main__":
    main()

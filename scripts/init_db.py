from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_tracker.config import get_settings_module
from attendance_tracker.database.bootstrap import ensure_indexes, list_collections
from attendance_tracker.database.connection import DatabaseConnection, MongoConfig


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(MongoConfig(uri=settings.MONGO_URI, database=settings.MONGO_DB_NAME))

    ensure_indexes(conn)
    collections = list_collections(conn)
    print(f"OK: Indexes ready -> {settings.MONGO_URI}/{settings.MONGO_DB_NAME} (collections={len(collections)})")
    conn.close()


if __name__ == "__main__":
    main()

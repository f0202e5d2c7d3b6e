import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "attendance_db")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will create the unique indexes on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users and subjects on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

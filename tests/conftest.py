import os

# Must run before scheduleboard.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SEED_DEFAULTS", "false")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

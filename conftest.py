import os

# Load .env.test for tests when present, so a developer can point the
# suite at their own PostgreSQL without exporting variables
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=True)

# Defaults for a local PostgreSQL; anything already exported wins
os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("HOST", "localhost")
os.environ.setdefault("DATABASE", "events_dev_db")
os.environ.setdefault("TEST_DB", "events_test_db")
os.environ.setdefault("DATABASE_USER", "postgres")
os.environ.setdefault("DATABASE_PASSWORD", "postgres")

from libs.common.config import get_settings  # noqa: E402

# Clear cached settings to reload with new env vars
get_settings.cache_clear()

pytest_plugins = ["libs.testing.db_suite", "pytester"]

"""Shared test configuration.

Environment is set before any ``car_inventory`` import so the cached
settings and the module-level engine never point at a real database.
"""

import os
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="car_inventory_tests_"))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR / 'app.db'}")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("UPLOAD_DIR", str(_TEST_DIR / "uploads"))
os.environ.setdefault("SEED_CATALOGS_ON_STARTUP", "false")

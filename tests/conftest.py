import os
from pathlib import Path

import pytest

_DB_PATH = Path(__file__).resolve().parent / "test_mathtutor.db"

# Must be set before db.py is imported anywhere
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", f"sqlite:///{_DB_PATH}")

from db import Base, engine  # noqa: E402
import models  # noqa: E402,F401


@pytest.fixture(scope="session", autouse=True)
def _schema():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)
    engine.dispose()
    _DB_PATH.unlink(missing_ok=True)

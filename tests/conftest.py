import os
import tempfile

# point the app at a throwaway database before inventory_api is imported
_tmpdir = tempfile.mkdtemp(prefix="inventory_api_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ["LOCK_DIR"] = os.path.join(_tmpdir, "locks")

import pytest

from inventory_api.db import SessionLocal, init_db


@pytest.fixture(autouse=True)
def clean_db():
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

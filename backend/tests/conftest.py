"""
Point the app at a throwaway SQLite file before anything imports it,
then build the schema once per test run.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="liftlog-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"

import pytest

from liftlog.db import Base, engine
from liftlog import models  # noqa: F401  # registers ORM mappings with Base.metadata


@pytest.fixture(autouse=True, scope="session")
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

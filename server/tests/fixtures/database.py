"""Database fixtures for testing.

Tests run against TEST_DATABASE_URL when it is set (e.g. a PostgreSQL test
database). Otherwise a throwaway SQLite file is used, with foreign keys
enforced so the folder delete policy behaves the same.
"""

import os
import pytest
from typing import Generator
from sqlalchemy.engine import Engine, Connection

from promptkeeper_server.core.database import (
    create_test_engine,
    drop_db,
    get_connection,
    init_db,
)


@pytest.fixture(scope="session")
def db_engine(tmp_path_factory) -> Generator[Engine, None, None]:
    """Create a database engine and schema for the entire test session.

    Session-scoped so the schema is created once.
    """
    database_url = os.getenv("TEST_DATABASE_URL")
    if not database_url:
        db_file = tmp_path_factory.mktemp("db") / "promptkeeper_test.db"
        database_url = f"sqlite:///{db_file}"

    engine = create_test_engine(database_url)
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def db_connection(db_engine: Engine) -> Generator[Connection, None, None]:
    """Provide a database connection for a test.

    Function-scoped so each test gets a fresh connection.
    Automatically commits on success, rolls back on failure.

    Keep writes made through this connection short-lived: anything the code
    under test must see has to be committed first, e.g. with
    ``db_connection.commit()``.
    """
    with get_connection(db_engine) as conn:
        yield conn

"""Pytest fixtures for forageconfig tests."""

import pytest

from forageconfig.catalog import load_catalog
from forageconfig.testing import isolated_context

POSTGRES_GAV = "io.kaoto.forage:forage-jdbc-postgresql:1.0-SNAPSHOT"
MARIADB_GAV = "io.kaoto.forage:forage-jdbc-mariadb:1.0-SNAPSHOT"
JDBC_BASE_GAV = "io.kaoto.forage:forage-jdbc:1.0-SNAPSHOT"
JDBC_SPRING_BOOT_GAV = "io.kaoto.forage:forage-jdbc-starter:1.0-SNAPSHOT"
JDBC_QUARKUS_GAV = "io.kaoto.forage:forage-quarkus-jdbc-deployment:1.0-SNAPSHOT"


@pytest.fixture(scope="session")
def catalog():
    """The packaged catalog."""
    return load_catalog()


@pytest.fixture
def context(tmp_path):
    """A context rooted at tmp_path with an empty environment."""
    return isolated_context(tmp_path)


@pytest.fixture
def pg_batch():
    """Input batch describing one PostgreSQL data source named myPG."""
    return {
        "forage.jdbc.db.kind": "postgresql",
        "forage.jdbc.url": "jdbc:postgresql://localhost:5432/pg",
        "kind": "postgresql",
        "forage.bean.name": "myPG",
    }


@pytest.fixture
def mariadb_batch():
    """Input batch describing one MariaDB data source named myMariaDB."""
    return {
        "forage.jdbc.db.kind": "mariadb",
        "forage.jdbc.url": "jdbc:mariadb://localhost:3306/maria",
        "kind": "mariadb",
        "forage.bean.name": "myMariaDB",
    }

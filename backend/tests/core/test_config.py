"""Settings — verifies environment-driven configuration."""

import pytest
from pydantic import ValidationError

from crudkit.config import Settings


def test_postgres_url_is_converted_to_asyncpg():
    settings = Settings(database_url="postgresql://user:pw@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://user:pw@host:5432/db"


def test_other_urls_are_kept():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def test_batch_size_default():
    assert Settings().date_dimension_batch_size == 1000


@pytest.mark.parametrize("size", [0, -5])
def test_batch_size_must_be_positive(size):
    with pytest.raises(ValidationError):
        Settings(date_dimension_batch_size=size)


def test_batch_size_from_environment_is_validated(monkeypatch):
    monkeypatch.setenv("DATE_DIMENSION_BATCH_SIZE", "0")
    with pytest.raises(ValidationError):
        Settings()

"""Tests for Settings and the composition root."""

import pytest

from catalog.application.product_service import ProductService
from catalog.infrastructure import bootstrap
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)

_ENV_VARS = (
    "STORAGE_BACKEND",
    "DATABASE_URL",
    "DATABASE_CREATE_SCHEMA",
    "HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.storage_backend == "memory"
        assert settings.database_url == ""
        assert settings.database_create_schema is False
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "SQL")
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        monkeypatch.setenv("DATABASE_CREATE_SCHEMA", "true")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.storage_backend == "sql"
        assert settings.database_url == "sqlite://"
        assert settings.database_create_schema is True
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "redis")
        with pytest.raises(ValueError, match="Invalid STORAGE_BACKEND"):
            Settings()

    def test_sql_backend_requires_database_url(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "sql")
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Settings()


class TestBootstrap:

    def test_memory_backend(self):
        repo = bootstrap.product_repository(Settings())
        assert isinstance(repo, InMemoryProductRepository)

    def test_sql_backend(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "sql")
        monkeypatch.setenv("DATABASE_URL", "sqlite://")
        monkeypatch.setenv("DATABASE_CREATE_SCHEMA", "true")
        repo = bootstrap.product_repository(Settings())
        try:
            assert isinstance(repo, SqlProductRepository)
            assert repo.get_all() == []
        finally:
            repo.close()

    def test_product_service_reads_settings(self):
        service = bootstrap.product_service()
        assert isinstance(service, ProductService)
        assert service.get_all_products() == []

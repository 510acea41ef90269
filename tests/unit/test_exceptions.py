"""
Unit tests for MDB_CRUD exceptions.
"""

import pytest

from mdb_crud.exceptions import (
    ConfigurationError,
    InvalidSearchRequestError,
    MongoCrudError,
)


class TestMongoCrudError:
    """Test base MongoCrudError."""

    def test_basic_error(self):
        error = MongoCrudError("Test error")

        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.context == {}

    def test_error_with_context(self):
        error = MongoCrudError("Test error", context={"collection": "users", "operation": "find"})

        assert "Test error" in str(error)
        assert "collection=users" in str(error)
        assert "operation=find" in str(error)

    def test_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            raise MongoCrudError("boom")


class TestConfigurationError:
    """Test ConfigurationError."""

    def test_config_key_and_value(self):
        error = ConfigurationError("Invalid port", config_key="port", config_value=0)

        assert error.config_key == "port"
        assert error.config_value == 0
        assert error.context == {"config_key": "port", "config_value": 0}
        assert isinstance(error, MongoCrudError)

    def test_without_value(self):
        error = ConfigurationError("mongo_uri is required", config_key="mongo_uri")

        assert "config_value" not in error.context


class TestInvalidSearchRequestError:
    """Test InvalidSearchRequestError."""

    def test_context(self):
        error = InvalidSearchRequestError(
            "No clauses", collection_name="users", clause_keys=["must", "should"]
        )

        assert error.collection_name == "users"
        assert error.clause_keys == ["must", "should"]
        assert error.context == {"collection": "users", "clause_keys": ["must", "should"]}
        assert "collection=users" in str(error)

    def test_minimal(self):
        error = InvalidSearchRequestError("No clauses")

        assert error.collection_name is None
        assert str(error) == "No clauses"

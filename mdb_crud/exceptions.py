"""
Custom exceptions for MDB_CRUD.

Store failures (``pymongo.errors.PyMongoError``) are never wrapped by the
CRUD layer; these types cover the errors the package raises itself.
"""

from typing import Any, Dict, List, Optional


class MongoCrudError(RuntimeError):
    """
    Base exception for MDB_CRUD errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (collection,
                 operation, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(MongoCrudError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value


class InvalidSearchRequestError(MongoCrudError):
    """
    Raised when a search request carries no clause group at all.

    Attributes:
        message: Error message
        collection_name: Collection the search targeted (if available)
        clause_keys: Clause groups that were accepted by the search builder
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        collection_name: Optional[str] = None,
        clause_keys: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if collection_name:
            context["collection"] = collection_name
        if clause_keys:
            context["clause_keys"] = clause_keys
        super().__init__(message, context=context)
        self.collection_name = collection_name
        self.clause_keys = clause_keys

"""Typed failures raised by the catalog repositories."""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for catalog failures."""


class NotFoundError(CatalogError):
    """Raised when a film, user, classification or genre does not exist."""


class ValidationFailure(CatalogError):
    """Raised when query arguments are outside their domain."""

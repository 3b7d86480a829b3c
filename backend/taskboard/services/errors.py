"""Domain errors raised by the record services."""

from __future__ import annotations


class NotFoundError(Exception):
    """The addressed record, supervisor or column does not exist."""


class ConflictError(Exception):
    """The record already exists."""

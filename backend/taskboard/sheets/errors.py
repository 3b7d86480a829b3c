"""Spreadsheet adapter exceptions."""

from __future__ import annotations


class SheetsError(Exception):
    """A spreadsheet read/write failed."""

    def __init__(self, message: str, range_: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.range = range_


class SheetAccessError(SheetsError):
    """The spreadsheet is unreachable: credentials, permissions or network."""


class SheetsConfigError(SheetsError):
    """The spreadsheet backend cannot be built from the current settings."""

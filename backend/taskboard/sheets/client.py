"""Spreadsheet client: reads and writes A1 ranges as arrays of arrays.

Two implementations:
- GoogleSheetsClient: Google Sheets API v4 via a service account.
- InMemorySheetsClient (sheets/memory.py): local development and tests.

Values are written USER_ENTERED and read back as formatted strings, so every
cell a service sees is a ``str``.
"""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Callable

from taskboard.config import Settings
from taskboard.sheets.errors import SheetAccessError, SheetsConfigError, SheetsError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
_TOKEN_URI = "https://oauth2.googleapis.com/token"

Row = list[Any]


class SheetsClient(ABC):
    """Range-level access to one spreadsheet document."""

    backend: str = "abstract"

    @abstractmethod
    async def read_range(self, range_: str) -> list[list[str]]:
        """Return the values in ``range_``. Trailing empty rows/cells are dropped."""

    @abstractmethod
    async def write_range(self, range_: str, values: list[Row]) -> None:
        """Overwrite cells starting at the top-left of ``range_``."""

    @abstractmethod
    async def append_range(self, range_: str, values: list[Row]) -> str:
        """Append rows after the last row of the table. Returns the updated range."""

    @abstractmethod
    async def clear_range(self, range_: str) -> None:
        """Clear the values in ``range_``."""

    @abstractmethod
    async def get_metadata(self) -> dict:
        """Spreadsheet properties and tab list."""


class GoogleSheetsClient(SheetsClient):
    """Google Sheets API v4 client.

    The discovery client is blocking; every call runs in the default executor.
    """

    backend = "google"

    def __init__(self, spreadsheet_id: str, credentials: Any) -> None:
        from googleapiclient.discovery import build

        self.spreadsheet_id = spreadsheet_id
        self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)

    def _values(self):
        return self._service.spreadsheets().values()

    async def _call(self, action: str, range_: str | None, fn: Callable[[], Any]) -> Any:
        from googleapiclient.errors import HttpError

        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, fn)
        except HttpError as e:
            status = e.resp.status if e.resp is not None else 0
            reason = getattr(e, "reason", "") or str(e)
            logger.error("Sheets %s failed for %s (HTTP %s): %s", action, range_ or "-", status, reason)
            message = f"Failed to {action} Google Sheets: {reason}"
            if status in (401, 403, 429) or status >= 500:
                raise SheetAccessError(message, range_) from e
            raise SheetsError(message, range_) from e
        except (OSError, TimeoutError) as e:
            logger.error("Sheets %s failed for %s: %s", action, range_ or "-", e)
            raise SheetAccessError(f"Failed to {action} Google Sheets: {e}", range_) from e
        except Exception as e:
            # google.auth RefreshError / TransportError land here
            if type(e).__module__.startswith("google.auth"):
                logger.error("Sheets credentials error on %s: %s", action, e)
                raise SheetAccessError(f"Google credentials error: {e}", range_) from e
            raise

    async def read_range(self, range_: str) -> list[list[str]]:
        response = await self._call(
            "read from",
            range_,
            lambda: self._values().get(spreadsheetId=self.spreadsheet_id, range=range_).execute(),
        )
        return response.get("values", [])

    async def write_range(self, range_: str, values: list[Row]) -> None:
        await self._call(
            "write to",
            range_,
            lambda: self._values().update(
                spreadsheetId=self.spreadsheet_id,
                range=range_,
                valueInputOption="USER_ENTERED",
                body={"values": values},
            ).execute(),
        )

    async def append_range(self, range_: str, values: list[Row]) -> str:
        response = await self._call(
            "append to",
            range_,
            lambda: self._values().append(
                spreadsheetId=self.spreadsheet_id,
                range=range_,
                valueInputOption="USER_ENTERED",
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            ).execute(),
        )
        return response.get("updates", {}).get("updatedRange", "")

    async def clear_range(self, range_: str) -> None:
        await self._call(
            "clear",
            range_,
            lambda: self._values().clear(spreadsheetId=self.spreadsheet_id, range=range_, body={}).execute(),
        )

    async def get_metadata(self) -> dict:
        return await self._call(
            "get metadata from",
            None,
            lambda: self._service.spreadsheets().get(spreadsheetId=self.spreadsheet_id).execute(),
        )


def load_credentials(cfg: Settings):
    """Service account credentials from a key file or inline email/private key."""
    from google.oauth2 import service_account

    key_file = cfg.google_application_credentials
    if key_file and os.path.exists(key_file):
        return service_account.Credentials.from_service_account_file(key_file, scopes=SCOPES)

    if cfg.google_service_account_email and cfg.google_private_key:
        info = {
            "type": "service_account",
            "client_email": cfg.google_service_account_email,
            "private_key": cfg.private_key,
            "token_uri": _TOKEN_URI,
        }
        return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)

    raise SheetsConfigError(
        "Google credentials not configured. Set either GOOGLE_APPLICATION_CREDENTIALS "
        "or GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY"
    )


def create_sheets_client(cfg: Settings) -> SheetsClient:
    """Build the configured backend. Raises SheetsConfigError when Google is misconfigured."""
    if cfg.sheets_backend == "memory":
        from taskboard.sheets.layout import default_tabs
        from taskboard.sheets.memory import InMemorySheetsClient

        logger.info("Using in-memory spreadsheet backend")
        return InMemorySheetsClient(default_tabs(cfg))

    if not cfg.google_sheet_id:
        raise SheetsConfigError("GOOGLE_SHEET_ID is not set")
    try:
        credentials = load_credentials(cfg)
    except SheetsConfigError:
        raise
    except (ValueError, OSError) as e:
        raise SheetsConfigError(f"Invalid Google credentials: {e}") from e
    return GoogleSheetsClient(cfg.google_sheet_id, credentials)

"""Supervisors service: the roster.

The roster is the set of supervisor columns in the Discussions tab header.
Rank lives in Task Rotation; the on-LOA flag is derived from active LOA
records. Both lookups are best-effort: when they fail the roster is still
returned, with empty ranks or no one on leave.
"""

from __future__ import annotations

import logging

from taskboard.models.supervisor import Supervisor
from taskboard.services.discussions import DiscussionsService
from taskboard.services.errors import ConflictError, NotFoundError
from taskboard.services.loa import LOAService
from taskboard.services.rotation import RotationSheet
from taskboard.services.rows import cell, pad_row
from taskboard.sheets.a1 import build_range, column_letter
from taskboard.sheets.client import SheetsClient
from taskboard.sheets.errors import SheetsError
from taskboard.sheets.layout import DISCUSSION_HEADERS, DISCUSSION_LAST_COL

logger = logging.getLogger(__name__)

_MAX_COLUMNS = 26  # A:Z


class SupervisorsService:
    def __init__(
        self,
        sheets: SheetsClient,
        discussions: DiscussionsService,
        loa: LOAService,
        rotation: RotationSheet,
    ) -> None:
        self.sheets = sheets
        self.discussions = discussions
        self.loa = loa
        self.rotation = rotation

    def _range(self, cells: str) -> str:
        return build_range(self.discussions.sheet, cells)

    async def _names_on_loa(self) -> set[str]:
        try:
            return {r.supervisor_name for r in await self.loa.get_active_loa()}
        except SheetsError as e:
            logger.warning("LOA lookup failed, treating roster as present: %s", e)
            return set()

    async def _ranks(self) -> dict[str, str]:
        try:
            return await self.rotation.ranks()
        except SheetsError as e:
            logger.warning("Rank lookup failed: %s", e)
            return {}

    async def get_all_supervisors(self) -> list[Supervisor]:
        names = await self.discussions.get_supervisor_names()
        on_loa = await self._names_on_loa()
        ranks = await self._ranks()
        return [
            Supervisor(name=name, rank=ranks.get(name, ""), active=True, on_loa=name in on_loa)
            for name in names
        ]

    async def get_supervisor(self, name: str) -> Supervisor | None:
        target = name.strip()
        supervisors = await self.get_all_supervisors()
        return next((s for s in supervisors if s.name == target), None)

    async def add_supervisor(self, name: str, rank: str = "") -> Supervisor:
        """Add a roster column to the Discussions header."""
        name = (name or "").strip()
        if not name:
            raise ValueError("Supervisor name is required")

        rows = await self.sheets.read_range(self._range(f"A1:{DISCUSSION_LAST_COL}1"))
        headers = list(rows[0]) if rows else list(DISCUSSION_HEADERS)
        if name in (h.strip() for h in headers):
            raise ConflictError("Supervisor already exists")
        if len(headers) >= _MAX_COLUMNS:
            raise ValueError("Discussions sheet has no free supervisor column")

        headers.append(name)
        await self.sheets.write_range(
            self._range(f"A1:{column_letter(len(headers))}1"), [headers]
        )
        logger.info("Added supervisor column %s", column_letter(len(headers)))

        try:
            await self.rotation.upsert_rank(name, rank or "")
        except SheetsError as e:
            logger.warning("Could not add supervisor to Task Rotation: %s", e)

        return Supervisor(name=name, rank=rank or "", active=True, on_loa=name in await self._names_on_loa())

    async def update_supervisor(self, name: str, rank: str) -> Supervisor:
        """Set the supervisor's rank in Task Rotation."""
        if await self.get_supervisor(name) is None:
            raise NotFoundError("Supervisor not found")
        await self.rotation.upsert_rank(name.strip(), rank or "")
        updated = await self.get_supervisor(name)
        if updated is None:
            raise NotFoundError("Supervisor not found")
        return updated

    async def remove_supervisor(self, name: str) -> None:
        """Drop the supervisor's column from every Discussions row."""
        full_range = self._range(f"A:{DISCUSSION_LAST_COL}")
        rows = await self.sheets.read_range(full_range)
        if not rows:
            raise NotFoundError("No data found in discussions sheet")

        headers = rows[0]
        target = name.strip()
        index = next(
            (i for i in range(len(DISCUSSION_HEADERS), len(headers)) if cell(headers, i).strip() == target),
            None,
        )
        if index is None:
            raise NotFoundError("Supervisor not found")

        for row in rows:
            if index < len(row):
                del row[index]

        # Padded rows overwrite the vacated last column in the same write
        await self.sheets.write_range(
            self._range(f"A1:{DISCUSSION_LAST_COL}"), [pad_row(r, _MAX_COLUMNS) for r in rows]
        )
        logger.info("Removed supervisor column %s", column_letter(index + 1))

"""Supervisor and LOA models."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from taskboard.models.base import CamelModel

LOAStatus = Literal["Active", "Completed"]
LOA_ACTIVE = "Active"
LOA_COMPLETED = "Completed"


class Supervisor(CamelModel):
    """A roster member. Name is the join key across every tab."""

    name: str
    rank: str = ""
    active: bool = True
    on_loa: bool = Field(default=False, alias="onLOA")


class LOARecord(CamelModel):
    """One row of the LOA Tracking tab. ``id`` is ``loa-<row number>``."""

    id: str
    supervisor_name: str
    start_date: str = ""
    end_date: str = ""
    reason: str = ""
    status: LOAStatus = LOA_ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == LOA_ACTIVE

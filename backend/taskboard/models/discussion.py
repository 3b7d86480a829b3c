"""Discussion model: one topic and each supervisor's feedback flag."""

from __future__ import annotations

from pydantic import Field

from taskboard.models.base import CamelModel

FEEDBACK_TRUE = frozenset({"TRUE", "YES"})


def feedback_received(cell: str | None) -> bool:
    return (cell or "").strip().upper() in FEEDBACK_TRUE


class Discussion(CamelModel):
    id: str
    date_posted: str = ""
    topic: str
    link: str = ""
    supervisor_feedback: dict[str, bool] = Field(default_factory=dict)

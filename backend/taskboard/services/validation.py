"""Tasks tab structure check.

Reads the header row and a handful of data rows and reports what does not
match the layout the Tasks service expects, with a suggestion per issue.
"""

from __future__ import annotations

import logging

from pydantic import Field

from taskboard.models.base import CamelModel
from taskboard.models.task import TASK_STATUSES
from taskboard.services.rows import cell
from taskboard.sheets.a1 import build_range
from taskboard.sheets.client import SheetsClient
from taskboard.sheets.errors import SheetsError
from taskboard.sheets.layout import TASK_HEADERS

logger = logging.getLogger(__name__)

_SAMPLE_ROWS = 9
_REPORTED_STATUS_ROWS = 3


class SheetData(CamelModel):
    headers: list[str] = Field(default_factory=list)
    sample_rows: list[list[str]] = Field(default_factory=list)


class ValidationReport(CamelModel):
    valid: bool
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    sheet_data: SheetData = Field(default_factory=SheetData)


def _suggestion_for_error(message: str, sheet: str) -> str | None:
    lowered = message.lower()
    if "unable to parse range" in lowered or "not found" in lowered:
        return f'The "{sheet}" sheet tab may not exist. Check that you have a tab named exactly "{sheet}" (case-sensitive)'
    if "permission" in lowered:
        return (
            "The service account may not have access to the spreadsheet. Share the sheet with "
            "the service account email and give it Editor permissions"
        )
    if "credentials" in lowered:
        return "Google Sheets credentials are not configured. Check the .env file or the credentials JSON file"
    return None


class SheetValidationService:
    def __init__(self, sheets: SheetsClient, tasks_sheet: str = "Tasks") -> None:
        self.sheets = sheets
        self.tasks_sheet = tasks_sheet

    async def validate_tasks_sheet(self) -> ValidationReport:
        issues: list[str] = []
        suggestions: list[str] = []
        data = SheetData()

        try:
            header_rows = await self.sheets.read_range(build_range(self.tasks_sheet, "A1:Z1"))
            if not header_rows:
                issues.append("No headers found in row 1")
                suggestions.append(f"Add column headers in row 1: {', '.join(TASK_HEADERS)}")
                return ValidationReport(valid=False, issues=issues, suggestions=suggestions)

            headers = header_rows[0]
            data.headers = headers
            actual = [cell(headers, i).strip() for i in range(len(TASK_HEADERS))]
            if actual != TASK_HEADERS:
                issues.append("Header row does not match expected structure")
                suggestions.append(f"Current headers in columns A-G: [{', '.join(actual)}]")
                suggestions.append(f"Expected headers: [{', '.join(TASK_HEADERS)}]")
                suggestions.append(
                    "Update row 1 to have the correct headers, or update the tab layout to match your sheet"
                )

            rows = await self.sheets.read_range(build_range(self.tasks_sheet, f"A2:Z{_SAMPLE_ROWS + 1}"))
            data.sample_rows = rows[:3]
            logger.info("Validating %r: %d sample rows", self.tasks_sheet, len(rows))
            if not rows:
                issues.append("No data rows found (sheet appears empty)")
                suggestions.append("Add task data starting from row 2")
                return ValidationReport(valid=False, issues=issues, suggestions=suggestions, sheet_data=data)

            valid_keys = {s.casefold() for s in TASK_STATUSES}
            invalid_status = 0
            empty_owner = 0
            for index, row in enumerate(rows, start=2):
                if not cell(row, 0).strip():
                    continue
                if not cell(row, 1).strip():
                    empty_owner += 1
                status = cell(row, 2).strip()
                if status and status.casefold() not in valid_keys:
                    invalid_status += 1
                    if invalid_status <= _REPORTED_STATUS_ROWS:
                        issues.append(
                            f'Row {index}: Invalid status "{status}" (valid options: {", ".join(TASK_STATUSES)})'
                        )

            if empty_owner:
                issues.append(f'{empty_owner} tasks have empty "Task Owner" values')
                suggestions.append('Fill in the "Task Owner" column (column B) with supervisor names')
            if invalid_status:
                issues.append(f"{invalid_status} tasks have invalid status values")
                suggestions.append(f"Ensure status values (column C) are one of: {', '.join(TASK_STATUSES)}")

        except SheetsError as e:
            logger.error("Error validating sheet: %s", e)
            issues.append(f"Failed to read sheet: {e}")
            hint = _suggestion_for_error(str(e), self.tasks_sheet)
            if hint:
                suggestions.append(hint)
            return ValidationReport(valid=False, issues=issues, suggestions=suggestions)

        return ValidationReport(valid=not issues, issues=issues, suggestions=suggestions, sheet_data=data)

    async def get_tasks_summary(self) -> str:
        report = await self.validate_tasks_sheet()
        return format_report(report, self.tasks_sheet)


def format_report(report: ValidationReport, sheet: str = "Tasks") -> str:
    """Plain-text rendering of a validation report."""
    lines = [f"=== {sheet} Sheet Summary ===", ""]
    if report.sheet_data.headers:
        lines += [f"Headers (Row 1): {' | '.join(report.sheet_data.headers[:10])}", ""]
    if report.sheet_data.sample_rows:
        lines.append("Sample Data (First 3 rows):")
        for index, row in enumerate(report.sheet_data.sample_rows, start=2):
            lines.append(f"Row {index}: {' | '.join(row[:len(TASK_HEADERS)])}")
        lines.append("")
    if report.issues:
        lines.append("Issues Found:")
        lines += [f"  - {issue}" for issue in report.issues]
        lines.append("")
    if report.suggestions:
        lines.append("Suggestions:")
        lines += [f"  * {s}" for s in report.suggestions]
        lines.append("")
    lines.append("Sheet structure is valid!" if report.valid else "Sheet needs attention before it can be used.")
    return "\n".join(lines) + "\n"

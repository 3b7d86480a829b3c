"""Check the Tasks tab layout before pointing the API at a spreadsheet.

Reads the header row and a few data rows through the configured backend
and prints what needs fixing. Exits 1 when the sheet needs attention.

Usage:
    # Uses GOOGLE_SHEET_ID and the service account from .env
    uv run python backend/scripts/validate_sheet.py

    # Another spreadsheet or tab
    uv run python backend/scripts/validate_sheet.py --sheet-id 1AbC... --tab "Tasks (copy)"

    # Machine-readable report
    uv run python backend/scripts/validate_sheet.py --json
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskboard.config import settings
from taskboard.services.validation import SheetValidationService, format_report
from taskboard.sheets.client import create_sheets_client
from taskboard.sheets.errors import SheetsConfigError

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
logger = logging.getLogger("validate_sheet")


async def run(tab: str, as_json: bool) -> bool:
    sheets = create_sheets_client(settings)
    report = await SheetValidationService(sheets, tab).validate_tasks_sheet()
    if as_json:
        print(report.model_dump_json(by_alias=True, indent=2))
    else:
        print(format_report(report, tab))
    return report.valid


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate the Tasks tab of the task board spreadsheet")
    parser.add_argument("--sheet-id", default=None, help="Spreadsheet ID (defaults to GOOGLE_SHEET_ID)")
    parser.add_argument("--tab", default=settings.tasks_sheet, help="Tasks tab name")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    args = parser.parse_args()

    if args.sheet_id:
        settings.google_sheet_id = args.sheet_id

    try:
        valid = asyncio.run(run(args.tab, args.json))
    except SheetsConfigError as e:
        logger.error("%s", e)
        sys.exit(2)
    sys.exit(0 if valid else 1)


if __name__ == "__main__":
    main()

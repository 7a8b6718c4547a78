"""
CSV rendering and parsing for license export and import.
"""

import csv
import io
from datetime import date
from typing import Iterable, List

from django.conf import settings

from core.domain.exceptions import ValidationError
from licenses.application.dto.license_dto import ExportRow

EXPORT_HEADER = ["Email", "Status", "Date Added", "Activated At"]


def render_export(rows: Iterable[ExportRow]) -> str:
    """Render export rows as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for row in rows:
        writer.writerow([row.email, row.status, row.date_added, row.activated_at])
    return buffer.getvalue()


def export_filename(today: date = None) -> str:
    """``{PRODUCT_SLUG}-licenses-YYYY-MM-DD.csv``."""
    today = today or date.today()
    return f"{settings.PRODUCT_SLUG}-licenses-{today.isoformat()}.csv"


def parse_upload(uploaded) -> List[List[str]]:
    """
    Read an uploaded CSV file into rows.

    Args:
        uploaded: Django UploadedFile

    Returns:
        Rows including the header row; blank lines are skipped

    Raises:
        ValidationError: If the file is not UTF-8 text
    """
    try:
        text = uploaded.read().decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValidationError("File must be a UTF-8 encoded CSV") from e
    return [row for row in csv.reader(io.StringIO(text)) if any(cell.strip() for cell in row)]

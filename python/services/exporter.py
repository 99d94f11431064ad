"""
Selection export formatting.
Builds the downloadable text payloads of liked filenames.
"""

import json
from datetime import datetime, timezone
from typing import List, Optional

from models.domain.gallery import ExportFormat

MEDIA_TYPES = {
    ExportFormat.JSON: "application/json",
    ExportFormat.CSV: "text/csv",
}


def to_csv(filenames: List[str]) -> str:
    """
    Header line then one filename per line.

    Filenames are written as-is; commas and quotes are not escaped.
    """
    return "\n".join(["filename", *filenames])


def to_json(
    filenames: List[str],
    exported_at: Optional[datetime] = None,
    gallery_title: Optional[str] = None
) -> str:
    """JSON document with export time, count and filenames in gallery order."""
    payload = {"exportedAt": iso_timestamp(exported_at or datetime.now(timezone.utc))}
    if gallery_title is not None:
        payload["galleryTitle"] = gallery_title
    payload["totalSelected"] = len(filenames)
    payload["filenames"] = list(filenames)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render(
    export_format: ExportFormat,
    filenames: List[str],
    exported_at: Optional[datetime] = None,
    gallery_title: Optional[str] = None
) -> str:
    if export_format is ExportFormat.CSV:
        return to_csv(filenames)
    return to_json(filenames, exported_at=exported_at, gallery_title=gallery_title)


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def download_filename(export_format: ExportFormat, on: Optional[datetime] = None) -> str:
    """File name offered to the browser, e.g. selected-photos-2024-05-01.csv."""
    day = (on or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
    return f"selected-photos-{day}.{export_format.value}"

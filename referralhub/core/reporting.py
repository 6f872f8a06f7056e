"""
CSV / JSON export helpers used by the download endpoints
"""

import csv
import io
import json
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Header line first, then one line per row in the given column order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def dated_filename(prefix: str, ext: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.{ext}"


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def json_download_response(payload: Any, filename: str) -> Response:
    body = json.dumps(jsonable_encoder(payload), indent=2)
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

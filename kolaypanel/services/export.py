"""
CSV disa aktarma yardimcilari.

Tum tablolar ayni formatta indirilir: baslik satiri + her kayit icin bir
satir, virgulle ayrilmis, her alan cift tirnak icinde (ic tirnaklar ikilenir).
Dosya adi: <varlik>_export_<YYYY-MM-DD>.csv
"""

import csv
from datetime import date
from io import StringIO
from typing import Any, Iterable, Sequence

from starlette.responses import Response


def build_csv(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Baslik + satirlar. None degerler bos alan olarak yazilir."""
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if cell is None else cell for cell in row])
    return output.getvalue()


def export_filename(entity: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"{entity}_export_{today.isoformat()}.csv"


def csv_response(entity: str, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> Response:
    """CSV icerigini indirilebilir dosya olarak dondur."""
    return Response(
        content=build_csv(headers, rows),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(entity)}"',
        },
    )

"""Spreadsheet and CSV export of report rows."""

from __future__ import annotations

import csv
import io
from typing import Iterable, Optional

import pandas as pd

from ..core.constants import EXPORT_FILE_PREFIX, EXPORT_SHEET_NAME
from .model import ReportRow

EXPORT_COLUMNS = [
    "Dátum",
    "Stavba",
    "Pracovník",
    "Pozícia",
    "Začiatok",
    "Koniec",
    "Obed",
    "Odpracované hodiny",
    "Zapísal",
]


def export_rows(rows: Iterable[ReportRow]) -> list[dict]:
    return [
        {
            "Dátum": r.work_date,
            "Stavba": r.site_name,
            "Pracovník": r.worker_name,
            "Pozícia": r.worker_role,
            "Začiatok": r.start_time,
            "Koniec": r.end_time,
            "Obed": r.lunch_duration,
            "Odpracované hodiny": round(r.hours, 2),
            "Zapísal": r.foreman_name,
        }
        for r in rows
    ]


def export_filename(date_from: Optional[str], date_to: Optional[str], ext: str = "xlsx") -> str:
    return f"{EXPORT_FILE_PREFIX}_{date_from or 'od-zaciatku'}_{date_to or 'doteraz'}.{ext}"


def write_xlsx(rows: Iterable[ReportRow]) -> bytes:
    df = pd.DataFrame(export_rows(rows), columns=EXPORT_COLUMNS)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
    return output.getvalue()


def write_csv(rows: Iterable[ReportRow]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    for row in export_rows(rows):
        writer.writerow(row)
    # BOM so Excel opens diacritics correctly.
    return out.getvalue().encode("utf-8-sig")

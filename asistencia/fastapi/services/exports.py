"""
Backup export/import and spreadsheet downloads.

The JSON backup keeps the camelCase record shape used by the front end, so
a file exported here can be imported back without changes.
"""

import io
import json
import logging
from typing import Iterable, List, Set, Tuple

import pandas as pd
from openpyxl.utils import get_column_letter
from pydantic import ValidationError

from asistencia.fastapi.core.utils import current_timestamp, date_from_timestamp, format_time
from asistencia.fastapi.schemas.attendance import AttendanceRecordExport

logger = logging.getLogger(__name__)

CSV_HEADER = ["Fecha", "Trabajador", "Evento", "Hora"]

SUNAFIL_COLUMNS = {
    "empresa": "Empresa",
    "ruc": "RUC",
    "periodo": "Periodo",
    "trabajador": "Trabajador",
    "documento": "Documento",
    "dias_trabajados": "Días trabajados",
    "horas_totales": "Horas totales",
    "horas_regulares": "Horas regulares",
    "horas_extras": "Horas extras",
}

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def export_records_json(records: Iterable) -> str:
    """
    Serialize records as a pretty-printed backup document.

    Returns:
        JSON text ``{"exportDate", "totalRecords", "records"}``
    """
    items = [
        AttendanceRecordExport.model_validate(record).model_dump(by_alias=True, mode="json")
        for record in records
    ]
    document = {
        "exportDate": current_timestamp(),
        "totalRecords": len(items),
        "records": items,
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def export_records_csv(records: Iterable) -> str:
    """One row per record: date, worker name, event type and HH:MM:SS."""
    data = [
        [record.date, record.worker_name,
         getattr(record.event_type, "value", record.event_type), format_time(record.timestamp)]
        for record in records
    ]
    df = pd.DataFrame(data, columns=CSV_HEADER)
    return df.to_csv(index=False, lineterminator="\n")


def sunafil_report_xlsx(rows: Iterable) -> bytes:
    """Build an Excel workbook from SUNAFIL report rows."""
    data = [row.model_dump() if hasattr(row, "model_dump") else dict(row) for row in rows]
    df = pd.DataFrame(data, columns=list(SUNAFIL_COLUMNS.keys()))
    df = df.rename(columns=SUNAFIL_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="SUNAFIL")

        worksheet = writer.sheets["SUNAFIL"]
        for i, col in enumerate(df.columns):
            values = df[col].astype(str).map(len)
            width = max(values.max() if len(values) else 0, len(col)) + 2
            worksheet.column_dimensions[get_column_letter(i + 1)].width = width

    output.seek(0)
    return output.getvalue()


def parse_import_payload(payload) -> Tuple[List[AttendanceRecordExport], int]:
    """
    Validate a backup document.

    Args:
        payload: JSON text or an already decoded dict

    Returns:
        (valid records, number of invalid entries)

    Raises:
        ValueError: If the document is not JSON or has no ``records`` list
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ValueError(f"Archivo JSON inválido: {e}")

    if not isinstance(payload, dict) or not isinstance(payload.get("records"), list):
        raise ValueError("El archivo no contiene una lista 'records'")

    valid = []
    invalid = 0
    for item in payload["records"]:
        try:
            record = AttendanceRecordExport.model_validate(item)
        except ValidationError:
            invalid += 1
            continue

        record_date = date_from_timestamp(record.timestamp)
        if not record.id or not record.worker_id or record_date is None:
            invalid += 1
            continue

        # Stored dates follow the timestamp, whatever the file says
        record.date = record_date
        valid.append(record)

    if invalid:
        logger.warning("Import skipped %d invalid records", invalid)
    return valid, invalid


def merge_imported_records(
    existing_ids: Set[str],
    records: Iterable[AttendanceRecordExport],
) -> Tuple[List[AttendanceRecordExport], int]:
    """
    Drop records whose id is already stored (or repeated within the file).

    Returns:
        (new records, number of duplicates)
    """
    seen = set(existing_ids)
    fresh = []
    duplicates = 0
    for record in records:
        if record.id in seen:
            duplicates += 1
            continue
        seen.add(record.id)
        fresh.append(record)
    return fresh, duplicates

"""
Google Sheets mirror of attendance records.

Every saved record is appended to two yearly spreadsheets: a detailed log
(tab ``DETALLE``) and the SUNAFIL labour-inspection log (tab ``SUNAFIL``).
The mirror is append-only and has no idempotency key; a record sent twice
shows up twice. Retries belong to the pending-sync queue, not to this class.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

import gspread
from google.oauth2.service_account import Credentials

from asistencia.fastapi.core.utils import format_iso_utc, format_sheet_date, format_time, to_local
from asistencia.fastapi.schemas.sync import SyncRecord

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

DETAILED_PREFIX = "Registros_Detallados_"
SUNAFIL_PREFIX = "Reporte_SUNAFIL_"

DETAILED_TAB = "DETALLE"
SUNAFIL_TAB = "SUNAFIL"

DETAILED_HEADERS = ["ID", "Fecha", "Hora", "Trabajador", "Evento", "Ubicación", "Notas"]
SUNAFIL_HEADERS = ["Trabajador", "Timestamp ISO", "Fecha", "Hora", "Evento", "ID evento"]


class SheetsSyncError(Exception):
    """Raised when the mirror cannot be reached or rejects a row."""


def build_sheets_client(settings) -> gspread.Client:
    """
    Authorize a gspread client with the service-account settings.

    Raises:
        SheetsSyncError: If the client email or private key is missing
    """
    if not settings.GOOGLE_CLIENT_EMAIL or not settings.GOOGLE_PRIVATE_KEY:
        raise SheetsSyncError("Faltan GOOGLE_CLIENT_EMAIL / GOOGLE_PRIVATE_KEY")

    info = {
        "type": "service_account",
        "client_email": settings.GOOGLE_CLIENT_EMAIL,
        "private_key": settings.GOOGLE_PRIVATE_KEY_PEM,
        "token_uri": "https://oauth2.googleapis.com/token",
    }
    credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
    return gspread.authorize(credentials)


def detailed_row(record: SyncRecord) -> list:
    return [
        record.id,
        format_sheet_date(record.timestamp),
        format_time(record.timestamp),
        record.worker_name,
        record.event_type.value,
        record.location,
        record.notes or "",
    ]


def sunafil_row(record: SyncRecord) -> list:
    return [
        record.worker_name,
        format_iso_utc(record.timestamp),
        format_sheet_date(record.timestamp),
        format_time(record.timestamp),
        record.event_type.value,
        record.id,
    ]


class SheetsMirror:
    """
    Appends records to the yearly DETALLE / SUNAFIL spreadsheets.

    Args:
        client: An authorized ``gspread.Client`` (or anything with the same
            ``open``/``open_by_key``/``create`` methods)
        settings: Application settings (fixed sheet ids, Drive folder)
    """

    def __init__(self, client, settings):
        self.client = client
        self.settings = settings
        self._resolved: Dict[int, Tuple[object, object]] = {}

    def _open_or_create(self, title: str):
        folder_id = self.settings.GOOGLE_DRIVE_FOLDER_ID or None
        try:
            return self.client.open(title, folder_id=folder_id)
        except gspread.exceptions.SpreadsheetNotFound:
            logger.info("Creating spreadsheet %s", title)
            return self.client.create(title, folder_id=folder_id)

    @staticmethod
    def _ensure_tab(spreadsheet, tab: str, headers: list):
        try:
            worksheet = spreadsheet.worksheet(tab)
        except gspread.exceptions.WorksheetNotFound:
            worksheet = spreadsheet.add_worksheet(title=tab, rows=1000, cols=len(headers))

        # Header row is written once
        if not any(worksheet.row_values(1)):
            worksheet.update(range_name="A1", values=[headers])
        return worksheet

    def ensure_sheets(self, year: int):
        """
        Resolve the worksheets for a year, creating what is missing.

        Fixed spreadsheet ids from settings win over the yearly files.

        Returns:
            (DETALLE worksheet, SUNAFIL worksheet)
        """
        if year in self._resolved:
            return self._resolved[year]

        detailed_id = self.settings.GOOGLE_DETAILED_SHEET_ID
        sunafil_id = self.settings.GOOGLE_SUNAFIL_SHEET_ID

        if detailed_id and sunafil_id:
            detailed = self.client.open_by_key(detailed_id)
            sunafil = self.client.open_by_key(sunafil_id)
        else:
            detailed = self._open_or_create(f"{DETAILED_PREFIX}{year}")
            sunafil = self._open_or_create(f"{SUNAFIL_PREFIX}{year}")

        worksheets = (
            self._ensure_tab(detailed, DETAILED_TAB, DETAILED_HEADERS),
            self._ensure_tab(sunafil, SUNAFIL_TAB, SUNAFIL_HEADERS),
        )
        self._resolved[year] = worksheets
        return worksheets

    def sync_record(self, record) -> None:
        """
        Append one record to both tabs.

        Raises:
            SheetsSyncError: If the record has no usable timestamp or the
                Sheets API call fails
        """
        record = SyncRecord.model_validate(record)
        local = to_local(record.timestamp)
        if local is None:
            raise SheetsSyncError(f"Timestamp inválido en el registro {record.id}")

        try:
            detailed, sunafil = self.ensure_sheets(local.year)
            detailed.append_row(detailed_row(record), value_input_option="USER_ENTERED")
            sunafil.append_row(sunafil_row(record), value_input_option="USER_ENTERED")
        except SheetsSyncError:
            raise
        except Exception as e:
            logger.error("Error syncing record %s: %s", record.id, e)
            raise SheetsSyncError(str(e)) from e

        logger.info("Record %s synced to DETALLE and SUNAFIL", record.id)

    def sync_records(self, records: Iterable) -> Tuple[int, int]:
        """
        Append records one by one, continuing past failures.

        Returns:
            (synced count, failed count)
        """
        ok = 0
        fail = 0
        for record in records:
            try:
                self.sync_record(record)
                ok += 1
            except Exception as e:
                logger.warning("Sync failed for a record in batch: %s", e)
                fail += 1
        return ok, fail


def build_sheets_mirror(settings) -> Optional[SheetsMirror]:
    """Mirror for the app, or None when the mirror is disabled."""
    if not settings.SHEETS_ENABLED:
        logger.info("Google Sheets mirror disabled")
        return None
    return SheetsMirror(build_sheets_client(settings), settings)

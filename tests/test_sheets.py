from types import SimpleNamespace

import gspread
import pytest

from asistencia.fastapi.services.sheets import (
    DETAILED_HEADERS,
    SUNAFIL_HEADERS,
    SheetsMirror,
    SheetsSyncError,
    build_sheets_client,
)


class FakeWorksheet:
    def __init__(self, title, rows=None):
        self.title = title
        self.rows = list(rows or [])
        self.header_writes = 0

    def row_values(self, index):
        return self.rows[index - 1] if len(self.rows) >= index else []

    def update(self, range_name=None, values=None):
        self.header_writes += 1
        if self.rows:
            self.rows[0] = values[0]
        else:
            self.rows.append(values[0])

    def append_row(self, row, value_input_option=None):
        assert value_input_option == "USER_ENTERED"
        self.rows.append(row)


class FakeSpreadsheet:
    def __init__(self, title):
        self.title = title
        self.tabs = {}

    def worksheet(self, name):
        if name not in self.tabs:
            raise gspread.exceptions.WorksheetNotFound(name)
        return self.tabs[name]

    def add_worksheet(self, title, rows, cols):
        self.tabs[title] = FakeWorksheet(title)
        return self.tabs[title]


class FakeClient:
    def __init__(self):
        self.files = {}
        self.created = []

    def open(self, title, folder_id=None):
        if title not in self.files:
            raise gspread.exceptions.SpreadsheetNotFound(title)
        return self.files[title]

    def create(self, title, folder_id=None):
        self.created.append((title, folder_id))
        self.files[title] = FakeSpreadsheet(title)
        return self.files[title]

    def open_by_key(self, key):
        return self.files.setdefault(key, FakeSpreadsheet(key))


def settings(**overrides):
    values = dict(
        GOOGLE_DRIVE_FOLDER_ID="folder-1",
        GOOGLE_DETAILED_SHEET_ID="",
        GOOGLE_SUNAFIL_SHEET_ID="",
        GOOGLE_CLIENT_EMAIL="",
        GOOGLE_PRIVATE_KEY="",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


RECORD = {
    "id": "1705323600000abcdefghi",
    "workerName": "Juan Pérez",
    "eventType": "ENTRADA",
    "timestamp": 1705323600000,
    "location": "Oficina Principal",
}


def test_creates_yearly_files_with_headers():
    client = FakeClient()
    mirror = SheetsMirror(client, settings())
    mirror.sync_record(RECORD)

    assert ("Registros_Detallados_2024", "folder-1") in client.created
    assert ("Reporte_SUNAFIL_2024", "folder-1") in client.created

    detailed = client.files["Registros_Detallados_2024"].tabs["DETALLE"]
    sunafil = client.files["Reporte_SUNAFIL_2024"].tabs["SUNAFIL"]
    assert detailed.rows[0] == DETAILED_HEADERS
    assert sunafil.rows[0] == SUNAFIL_HEADERS


def test_row_contents():
    client = FakeClient()
    SheetsMirror(client, settings()).sync_record(RECORD)

    detailed = client.files["Registros_Detallados_2024"].tabs["DETALLE"]
    sunafil = client.files["Reporte_SUNAFIL_2024"].tabs["SUNAFIL"]
    assert detailed.rows[1] == [
        RECORD["id"], "15/01/2024", "08:00:00", "Juan Pérez", "ENTRADA", "Oficina Principal", "",
    ]
    assert sunafil.rows[1] == [
        "Juan Pérez", "2024-01-15T13:00:00.000Z", "15/01/2024", "08:00:00", "ENTRADA", RECORD["id"],
    ]


def test_headers_are_written_once():
    client = FakeClient()
    existing = FakeSpreadsheet("Registros_Detallados_2024")
    existing.tabs["DETALLE"] = FakeWorksheet("DETALLE", rows=[DETAILED_HEADERS, ["old row"]])
    client.files[existing.title] = existing

    mirror = SheetsMirror(client, settings())
    mirror.sync_record(RECORD)
    mirror.sync_record(dict(RECORD, id="second"))

    assert existing.tabs["DETALLE"].header_writes == 0
    assert len(existing.tabs["DETALLE"].rows) == 4


def test_fixed_sheet_ids_win():
    client = FakeClient()
    mirror = SheetsMirror(client, settings(GOOGLE_DETAILED_SHEET_ID="det", GOOGLE_SUNAFIL_SHEET_ID="sun"))
    mirror.sync_record(RECORD)

    assert client.created == []
    assert len(client.files["det"].tabs["DETALLE"].rows) == 2


def test_bad_timestamp_is_an_error():
    mirror = SheetsMirror(FakeClient(), settings())
    with pytest.raises(SheetsSyncError):
        mirror.sync_record(dict(RECORD, timestamp="ayer"))


def test_batch_continues_past_failures():
    mirror = SheetsMirror(FakeClient(), settings())
    ok, fail = mirror.sync_records([RECORD, dict(RECORD, timestamp="ayer"), dict(RECORD, id="r3")])
    assert (ok, fail) == (2, 1)


def test_client_requires_credentials():
    with pytest.raises(SheetsSyncError):
        build_sheets_client(settings())

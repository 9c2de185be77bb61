import io
import json

import pandas as pd
import pytest

from asistencia.fastapi.models.attendance import AttendanceEventType as E
from asistencia.fastapi.services.exports import (
    CSV_HEADER,
    export_records_csv,
    export_records_json,
    merge_imported_records,
    parse_import_payload,
    sunafil_report_xlsx,
)
from asistencia.fastapi.services.reports import sunafil_report
from tests.conftest import make_record


@pytest.fixture
def records():
    return [
        make_record("w1", E.ENTRADA, "2024-01-15T08:00:00-05:00", record_id="r1"),
        make_record("w1", E.SALIDA, "2024-01-15T17:00:00-05:00", record_id="r2"),
    ]


def test_json_export_shape(records):
    document = json.loads(export_records_json(records))
    assert document["totalRecords"] == 2
    assert "exportDate" in document
    first = document["records"][0]
    assert first["workerId"] == "w1"
    assert first["eventType"] == "ENTRADA"
    assert first["workerName"] == "Juan Pérez"


def test_json_export_is_indented(records):
    assert '\n  "totalRecords": 2' in export_records_json(records)


def test_csv_export(records):
    lines = export_records_csv(records).splitlines()
    assert lines[0] == ",".join(CSV_HEADER)
    assert lines[1] == "2024-01-15,Juan Pérez,ENTRADA,08:00:00"


def test_csv_export_without_records_is_just_the_header():
    assert export_records_csv([]) == "Fecha,Trabajador,Evento,Hora\n"


def test_reimport_of_export_adds_nothing(records):
    valid, invalid = parse_import_payload(export_records_json(records))
    assert invalid == 0
    fresh, duplicates = merge_imported_records({"r1", "r2"}, valid)
    assert fresh == []
    assert duplicates == 2


def test_import_keeps_only_new_ids(records):
    document = json.loads(export_records_json(records))
    document["records"].append({
        "id": "r3",
        "workerId": "w1",
        "eventType": "ENTRADA",
        "timestamp": "2024-01-16T08:00:00-05:00",
    })
    valid, _ = parse_import_payload(document)
    fresh, duplicates = merge_imported_records({"r1", "r2"}, valid)
    assert [r.id for r in fresh] == ["r3"]
    assert fresh[0].date == "2024-01-16"
    assert duplicates == 2


def test_import_counts_invalid_entries():
    document = {"records": [
        {"id": "x1", "workerId": "w1", "eventType": "SIESTA", "timestamp": "2024-01-15T08:00:00-05:00"},
        {"id": "x2", "workerId": "w1", "eventType": "ENTRADA", "timestamp": "ayer"},
        {"workerId": "w1", "eventType": "ENTRADA", "timestamp": "2024-01-15T08:00:00-05:00"},
    ]}
    valid, invalid = parse_import_payload(document)
    assert valid == []
    assert invalid == 3


def test_import_rejects_non_backup_documents():
    with pytest.raises(ValueError):
        parse_import_payload("{not json")
    with pytest.raises(ValueError):
        parse_import_payload({"data": []})


def test_duplicate_ids_inside_one_file():
    document = {"records": [
        {"id": "r9", "workerId": "w1", "eventType": "ENTRADA", "timestamp": "2024-01-15T08:00:00-05:00"},
        {"id": "r9", "workerId": "w1", "eventType": "ENTRADA", "timestamp": "2024-01-15T08:00:00-05:00"},
    ]}
    valid, _ = parse_import_payload(document)
    fresh, duplicates = merge_imported_records(set(), valid)
    assert len(fresh) == 1
    assert duplicates == 1


def test_sunafil_xlsx(records):
    rows = sunafil_report(records, "2024-01-01", "2024-01-31")
    content = sunafil_report_xlsx(rows)
    df = pd.read_excel(io.BytesIO(content), sheet_name="SUNAFIL")
    assert list(df["Trabajador"]) == ["Juan Pérez"]
    assert df["Horas totales"][0] == pytest.approx(9)

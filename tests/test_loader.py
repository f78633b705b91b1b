import asyncio
import math

import httpx
import pytest

from parking_api.services import loader
from parking_api.services.aggregator import aggregate
from parking_api.services.loader import RecordLoadError, load_records, parse_records

from .conftest import SAMPLE_CSV


def test_parse_sample_drops_rows_without_bay_id():
    records = parse_records(SAMPLE_CSV)

    assert len(records) == 6
    assert [r.bay_id for r in records] == ["B-001", "B-002", "B-001", "B-003", "B-004", "B-002"]


def test_parse_keeps_rows_with_unparsable_numbers():
    records = parse_records(SAMPLE_CSV)

    no_lat = records[3]
    assert math.isnan(no_lat.latitude)
    assert no_lat.longitude == pytest.approx(115.95242)

    no_duration = records[5]
    assert math.isnan(no_duration.duration_seconds)


def test_parse_empty_text_fields_become_none():
    records = parse_records(SAMPLE_CSV)

    assert records[3].license_plate is None
    assert records[4].arrival_time is None
    assert records[1].license_plate == "NULL"


def test_parse_ignores_column_order_and_extra_columns():
    csv = (
        "duration_seconds,zone,arrival_time,bay_id,longitude,license_plate,latitude\n"
        "7200,north,2024-01-01T10:00:00,B-9,115.9,XYZ999,-31.9\n"
    )
    [record] = parse_records(csv)

    assert record.bay_id == "B-9"
    assert record.license_plate == "XYZ999"
    assert record.latitude == pytest.approx(-31.9)
    assert record.longitude == pytest.approx(115.9)
    assert record.arrival_time == "2024-01-01T10:00:00"
    assert record.duration_seconds == 7200


def test_parse_missing_columns_are_treated_as_empty():
    csv = "bay_id,duration_seconds\nB-1,60\n"
    [record] = parse_records(csv)

    assert record.license_plate is None
    assert record.arrival_time is None
    assert math.isnan(record.latitude)
    assert math.isnan(record.longitude)
    assert record.duration_seconds == 60


def test_parse_without_bay_id_column_yields_nothing():
    csv = "license_plate,duration_seconds\nABC123,60\n"
    assert parse_records(csv) == []


def test_parse_keeps_whitespace_bay_id():
    csv = 'bay_id,license_plate,duration_seconds\n"   ",ABC123,100\n,ABC123,100\nB-1,ABC123,100\n'
    records = parse_records(csv)

    assert [r.bay_id for r in records] == ["   ", "B-1"]


def test_empty_bay_id_row_gives_no_summary():
    csv = "bay_id,license_plate,latitude,longitude,arrival_time,duration_seconds\n,ABC123,1,2,,100\n"
    records = parse_records(csv)

    assert records == []
    assert aggregate(records) is None


def test_parse_header_only_is_empty():
    csv = "bay_id,license_plate,latitude,longitude,arrival_time,duration_seconds\n"
    assert parse_records(csv) == []


def test_parse_accepts_bytes():
    records = parse_records(SAMPLE_CSV.encode("utf-8"))
    assert len(records) == 6


def test_parse_empty_document_raises():
    with pytest.raises(RecordLoadError):
        parse_records(b"")


def test_load_records_from_file(tmp_path):
    path = tmp_path / "parking.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")

    records = asyncio.run(load_records(str(path)))

    assert len(records) == 6


def test_load_records_missing_file_yields_empty_list(tmp_path, caplog):
    records = asyncio.run(load_records(str(tmp_path / "nope.csv")))

    assert records == []
    assert "Failed to load parking data" in caplog.text


def test_load_records_unparsable_file_yields_empty_list(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_bytes(b"")

    assert asyncio.run(load_records(str(path))) == []


HEADER = "bay_id,license_plate,latitude,longitude,arrival_time,duration_seconds\n"


def test_parse_row_with_extra_fields_keeps_the_file():
    csv = (
        HEADER
        + "B-1,AAA111,-31.9,115.9,2024-01-01T08:00:00,100\n"
        + "B-2,BBB222,-31.9,115.9,2024-01-01T09:00:00,200,extra\n"
        + "B-3,CCC333,-31.9,115.9,2024-01-01T10:00:00,300\n"
    )
    records = parse_records(csv)

    assert [r.bay_id for r in records] == ["B-1", "B-2", "B-3"]
    assert records[1].duration_seconds == 200


def test_parse_row_with_missing_fields_keeps_the_row():
    csv = HEADER + "B-1,AAA111,-31.9\n"
    [record] = parse_records(csv)

    assert record.arrival_time is None
    assert math.isnan(record.longitude)
    assert math.isnan(record.duration_seconds)


def test_parse_partly_numeric_cell_is_nan():
    csv = HEADER + "B-1,AAA111,-31.93abc, 115.9 ,,12s\n"
    [record] = parse_records(csv)

    assert math.isnan(record.latitude)
    assert record.longitude == pytest.approx(115.9)
    assert math.isnan(record.duration_seconds)


def _mock_http(monkeypatch, handler):
    """Route loader's AsyncClient through a MockTransport; returns the kwargs it was built with."""
    real_client = httpx.AsyncClient
    seen = {}

    def build_client(**kwargs):
        seen.update(kwargs)
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(loader.httpx, "AsyncClient", build_client)
    return seen


def test_load_records_from_url(monkeypatch):
    def handler(request):
        assert request.url == "https://data.example.org/parking.csv"
        return httpx.Response(200, text=SAMPLE_CSV)

    seen = _mock_http(monkeypatch, handler)

    records = asyncio.run(load_records("https://data.example.org/parking.csv", timeout=3.0))

    assert len(records) == 6
    assert seen["timeout"] == 3.0


def test_load_records_url_not_found_yields_empty_list(monkeypatch, caplog):
    _mock_http(monkeypatch, lambda request: httpx.Response(404, text="missing"))

    records = asyncio.run(load_records("https://data.example.org/parking.csv"))

    assert records == []
    assert "Failed to load parking data from https://data.example.org/parking.csv" in caplog.text


def test_load_records_url_connection_error_yields_empty_list(monkeypatch, caplog):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _mock_http(monkeypatch, handler)

    records = asyncio.run(load_records("http://data.example.org/parking.csv"))

    assert records == []
    assert "connection refused" in caplog.text

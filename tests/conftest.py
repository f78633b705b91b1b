import pytest
from fastapi.testclient import TestClient

from parking_api.main import app
from parking_api.models import ParkingRecord

SAMPLE_CSV = """bay_id,license_plate,latitude,longitude,arrival_time,duration_seconds
B-001,1ABC234,-31.93205,115.95221,2024-03-04T08:15:00,5400
B-002,NULL,-31.93211,115.95230,2024-03-04T09:02:00,1200
B-001,1XYZ987,-31.93205,115.95221,2024-03-04T13:40:00,90000
B-003,,not-a-number,115.95242,2024-03-05T07:55:00,300
B-004,1QWE456,-31.93226,115.95251,,86400
,1NOBAY1,-31.93226,115.95251,2024-03-05T10:00:00,100
B-002,1RTY321,-31.93211,115.95230,2024-03-05T17:20:00,
"""


def make_record(
    bay_id="B-1",
    license_plate="ABC123",
    latitude=-31.93,
    longitude=115.95,
    arrival_time="2024-01-01T10:00:00",
    duration_seconds=100.0,
):
    return ParkingRecord(
        bay_id=bay_id,
        license_plate=license_plate,
        latitude=latitude,
        longitude=longitude,
        arrival_time=arrival_time,
        duration_seconds=duration_seconds,
    )


def _client(monkeypatch, tmp_path, source):
    monkeypatch.setenv("PARKING_DATA_SOURCE", str(source))
    monkeypatch.setenv("PARKING_MAP_CONFIG", str(tmp_path / "missing-map.yaml"))
    monkeypatch.delenv("PARKING_TIMEZONE", raising=False)
    return TestClient(app)


@pytest.fixture
def client(monkeypatch, tmp_path):
    csv_path = tmp_path / "parking-data.csv"
    csv_path.write_text(SAMPLE_CSV, encoding="utf-8")
    with _client(monkeypatch, tmp_path, csv_path) as c:
        yield c


@pytest.fixture
def empty_client(monkeypatch, tmp_path):
    with _client(monkeypatch, tmp_path, tmp_path / "does-not-exist.csv") as c:
        yield c

"""Shared fixtures for traverse tests."""
import pytest

from common.logging_config import AuditLogger
from common.types import GeoPoint, LineRecord, PointRecord
from traverse.interpreter import TraverseInterpreter


SAMPLE_RECORDS = """\
# sample traverse, one call of every kind
H,P,Memo,Latitude,Longitude
H,L,Memo,Bearing,Distance,Direction
H,C,Memo,Distance,Direction,Radius,Delta,TurnForCenter
H,F,Memo,Name,Args...
H,V,Memo,Name

P,1,37.413523321,-121.820213695
L,1,N0°0'0"E,100.00,TRUE
C,1,157.08,TRUE,100.00,?,
F,1,bearingToDegrees,S89°59'59"E
V,1,east
L,2,$east,50.00,FALSE
"""


@pytest.fixture
def interpreter():
    return TraverseInterpreter()


@pytest.fixture
def origin():
    return GeoPoint(37.4, -121.8)


@pytest.fixture
def east_leg_records(origin):
    """Fixed point followed by a 100 ft leg due east."""
    return [
        PointRecord(latitude=origin.latitude, longitude=origin.longitude, memo="1"),
        LineRecord(bearing="N90°0'0\"E", distance=100, direction="TRUE", memo="1"),
    ]


@pytest.fixture
def sample_text():
    return SAMPLE_RECORDS


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.csv"
    path.write_text(SAMPLE_RECORDS, encoding="utf-8")
    return path


@pytest.fixture
def audit():
    return AuditLogger()

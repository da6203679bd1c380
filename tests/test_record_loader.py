"""Tests for data_ingestion/record_loader.py"""
import pytest

from common.exceptions import RecordFileError, UnknownRecordTypeError
from common.types import ArcRecord, FunctionRecord, LineRecord, PointRecord, SymbolRef, VariableRecord
from data_ingestion.record_loader import (
    RecordFileConfig,
    column_to_field,
    load_records,
    parse_records,
)


class TestColumnNames:
    @pytest.mark.parametrize("column,field", [
        ("Memo", "memo"),
        ("TurnForCenter", "turn_for_center"),
        ("Latitude", "latitude"),
        (" Delta ", "delta"),
    ])
    def test_mapping(self, column, field):
        assert column_to_field(column) == field


class TestSampleFile:
    def test_record_kinds_in_order(self, sample_text):
        records = parse_records(sample_text)
        assert [type(r) for r in records] == [
            PointRecord, LineRecord, ArcRecord, FunctionRecord, VariableRecord, LineRecord,
        ]

    def test_point(self, sample_text):
        point = parse_records(sample_text)[0]
        assert point == PointRecord(latitude=37.413523321, longitude=-121.820213695, memo="1")

    def test_line(self, sample_text):
        line = parse_records(sample_text)[1]
        assert line.bearing == "N0°0'0\"E"
        assert line.distance == 100.0
        assert line.direction == "TRUE"

    def test_curve_optional_columns(self, sample_text):
        arc = parse_records(sample_text)[2]
        assert arc.delta == "?"
        assert arc.turn_for_center is None
        assert arc.radius == 100.0

    def test_function_args(self, sample_text):
        func = parse_records(sample_text)[3]
        assert func.name == "bearingToDegrees"
        assert func.args == ("S89°59'59\"E",)

    def test_reference_cell(self, sample_text):
        line = parse_records(sample_text)[5]
        assert line.bearing == SymbolRef("east")
        assert line.label == "L2"

    def test_load_from_file(self, sample_file, sample_text):
        assert load_records(sample_file) == parse_records(sample_text)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_records(tmp_path / "nope.csv")


class TestParsing:
    def test_blank_and_comment_lines(self):
        text = "\n# note\nH,V,Memo,Name\n\nV,1,x\n"
        assert parse_records(text) == [VariableRecord(name="x", memo="1")]

    def test_rest_column_drops_trailing_empties(self):
        text = "H,F,Memo,Name,Args...\nF,1,adjustDegrees,$b,10,,\n"
        assert parse_records(text)[0].args == (SymbolRef("b"), "10")

    def test_function_without_args(self):
        text = "H,F,Memo,Name,Args...\nF,1,resetState\n"
        assert parse_records(text)[0].args == ()

    def test_explicit_turn(self):
        text = "H,C,Memo,Distance,Direction,Radius,Delta,TurnForCenter\nC,3,39.27,FALSE,25,90°0'0\",-90\n"
        arc = parse_records(text)[0]
        assert arc.turn_for_center == -90.0
        assert arc.delta == "90°0'0\""
        assert arc.label == "C3"

    def test_unknown_column_ignored(self):
        text = "H,V,Memo,Name,Colour\nV,1,x,red\n"
        assert parse_records(text) == [VariableRecord(name="x", memo="1")]

    def test_custom_delimiter(self):
        config = RecordFileConfig(delimiter=";")
        text = "H;P;Memo;Latitude;Longitude\nP;1;1.5;2.5\n"
        assert parse_records(text, config)[0] == PointRecord(latitude=1.5, longitude=2.5, memo="1")


class TestErrors:
    def test_record_before_header(self):
        with pytest.raises(RecordFileError, match="line 1: Unknown type: P"):
            parse_records("P,1,1.0,2.0\n")

    def test_header_without_kind(self):
        with pytest.raises(RecordFileError):
            parse_records("H\n")

    def test_unsupported_kind(self):
        with pytest.raises(UnknownRecordTypeError):
            parse_records("H,X,Memo,Name\nX,1,foo\n")

    def test_bad_number(self):
        with pytest.raises(RecordFileError, match="line 2"):
            parse_records("H,P,Memo,Latitude,Longitude\nP,1,north,2.0\n")

    def test_missing_required_cell(self):
        with pytest.raises(RecordFileError, match="Incomplete"):
            parse_records("H,L,Memo,Bearing,Distance,Direction\nL,1,N0°0'0\"E\n")

    def test_line_number_attribute(self):
        with pytest.raises(RecordFileError) as excinfo:
            parse_records("# c\nH,P,Memo,Latitude,Longitude\nP,1,x,y\n")
        assert excinfo.value.line_number == 3

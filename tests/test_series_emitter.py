from __future__ import annotations

import logging

import pytest

from appliance_logger.models import DescriptorKind, RenderedField
from appliance_logger.services import SeriesEmitter

from conftest import DRYER, FRIDGE, WASHER, FakeSink, as_values

TS = 1_700_000_000


def _enum(key: str, raw, label) -> RenderedField:
    return RenderedField(key, DescriptorKind.ENUM, raw, label=label)


def _ref(key: str, raw, label) -> RenderedField:
    return RenderedField(key, DescriptorKind.REFERENCE, raw, label=label)


def test_offline_washer_emits_state_and_apcourse(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_offline(WASHER, TS)

    assert [(p.series, p.value) for p in points] == [
        ("state", 0),
        ("state_description", "-"),
        ("apcourse", 0),
        ("apcourse_description", "-"),
    ]
    assert sink.writes == [points]


def test_offline_dryer_emits_course_instead_of_apcourse(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_offline(DRYER, TS)

    assert as_values(points) == {
        "state": 0,
        "state_description": "-",
        "course": 0,
        "course_description": "-",
    }


def test_offline_other_device_emits_state_only(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_offline(FRIDGE, TS)

    assert as_values(points) == {"state": 0, "state_description": "-"}


def test_points_carry_device_tags_and_timestamp(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_offline(FRIDGE, TS)

    for point in points:
        assert point.timestamp == TS
        assert point.tags == {
            "device_id": "r-1",
            "device_name": "Fridge",
            "device_type": "REFRIGERATOR",
            "device_model_id": "GBB7",
        }
    assert points[0].to_influx() == {
        "measurement": "state",
        "tags": dict(points[0].tags),
        "time": TS,
        "fields": {"value": 0},
    }


def test_state_enum_emits_code_and_description(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_snapshot(WASHER, [_enum("State", 4, "Cooling")], TS)

    assert [(p.series, p.value) for p in points] == [("state", 4), ("state_description", "Cooling")]


def test_other_enum_fields_are_not_stored(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_snapshot(WASHER, [_enum("Error", "0", "No Error")], TS)

    assert points == []
    assert sink.writes == []


def test_course_reference_emits_lowercased_series(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_snapshot(WASHER, [_ref("APCourse", "8", "Cotton")], TS)

    assert as_values(points) == {"apcourse": "8", "apcourse_description": "Cotton"}


def test_reference_without_course_in_key_is_not_stored(sink: FakeSink) -> None:
    points = SeriesEmitter(sink).emit_snapshot(WASHER, [_ref("Detergent", "1", "Normal")], TS)

    assert points == []


def test_range_bitmask_and_undecodable_fields_are_logged_only(sink: FakeSink, caplog) -> None:
    fields = [
        RenderedField("Remain_Time_H", DescriptorKind.RANGE, 1, min=0, max=24),
        RenderedField("Option1", DescriptorKind.BITMASK, "1", label="ChildLock"),
        RenderedField("Mystery", DescriptorKind.UNKNOWN, "x"),
    ]

    with caplog.at_level(logging.INFO):
        points = SeriesEmitter(sink).emit_snapshot(WASHER, fields, TS)

    assert points == []
    assert "- RANGE Remain_Time_H: 1 (0 - 24)" in caplog.text
    assert "- BIT: Option1: 1 ChildLock" in caplog.text
    assert "- UNDECODABLE Mystery: x" in caplog.text


def test_snapshot_is_committed_in_one_flush(sink: FakeSink) -> None:
    fields = [_enum("State", "2", "Running"), _ref("APCourse", "8", "Cotton"), _ref("SmartCourse", "3", None)]

    SeriesEmitter(sink).emit_snapshot(WASHER, fields, TS)

    assert len(sink.writes) == 1
    assert [p.series for p in sink.writes[0]] == [
        "state", "state_description",
        "apcourse", "apcourse_description",
        "smartcourse", "smartcourse_description",
    ]


def test_repeated_series_keeps_last_value(sink: FakeSink, caplog) -> None:
    fields = [_enum("State", "2", "Running"), _enum("State", "4", "Cooling")]

    with caplog.at_level(logging.WARNING):
        points = SeriesEmitter(sink).emit_snapshot(WASHER, fields, TS)

    assert as_values(points) == {"state": "4", "state_description": "Cooling"}
    assert len(points) == 2
    assert "repeated" in caplog.text


@pytest.mark.parametrize(
    "emit",
    [
        lambda e: e.emit_offline(WASHER, TS),
        lambda e: e.emit_offline(DRYER, TS),
        lambda e: e.emit_offline(FRIDGE, TS),
        lambda e: e.emit_snapshot(WASHER, [_enum("State", 4, "Cooling")], TS),
        lambda e: e.emit_snapshot(WASHER, [_ref("APCourse", "8", "Cotton")], TS),
    ],
)
def test_dry_run_never_writes_but_still_logs(emit, caplog) -> None:
    sink = FakeSink()

    with caplog.at_level(logging.DEBUG):
        points = emit(SeriesEmitter(sink, dry_run=True))

    assert points
    assert sink.writes == []
    assert "dry run" in caplog.text


def test_dry_run_needs_no_sink() -> None:
    points = SeriesEmitter(None, dry_run=True).emit_offline(WASHER, TS)

    assert len(points) == 4


def test_sink_is_required_outside_dry_run() -> None:
    with pytest.raises(ValueError):
        SeriesEmitter(None)

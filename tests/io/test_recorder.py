# tests/io/test_recorder.py
import io
import json
import time

from transfer_audit.app.protocols import AnnotationSink
from transfer_audit.domain.entities.geography import Point, TransitStop
from transfer_audit.io.recorder import AnnotationRecorder, AsyncSink, JsonlSink, MemorySink

A = TransitStop("A", Point(0.0, 0.0), node=1, name="Alpha")
B = TransitStop("B", Point(50.0, 0.0), node=2)


def test_recorder_is_an_annotation_sink():
    assert isinstance(AnnotationRecorder(MemorySink()), AnnotationSink)


def test_annotations_carry_stop_ids_and_sequence():
    sink = MemorySink()
    rec = AnnotationRecorder(sink, run_id="r-1")
    rec.report_routing_too_long(A, B, 50.0, 480.0, 9.6)
    rec.report_could_not_be_routed(B, A, 50.0)

    too_long, not_routed = sink.annotations
    assert (too_long.run_id, too_long.seq, too_long.origin_id) == ("r-1", 1, "A")
    assert too_long.origin_name == "Alpha" and too_long.destination_id == "B"
    assert "9.6 times" in too_long.message()
    assert not_routed.seq == 2 and not_routed.name == "TransferCouldNotBeRouted"
    assert "could not be routed" in not_routed.message()
    assert sink.named("TransferCouldNotBeRouted") == [not_routed]


def test_jsonl_sink_writes_one_object_per_line():
    fp = io.StringIO()
    rec = AnnotationRecorder(JsonlSink(fp))
    rec.report_routing_too_long(A, B, 50.0, 480.0, 9.6)
    rec.report_could_not_be_routed(A, B, 50.0)

    rows = [json.loads(line) for line in fp.getvalue().splitlines()]
    assert [r["name"] for r in rows] == ["TransferRoutingDistanceTooLong", "TransferCouldNotBeRouted"]
    assert rows[0]["street_distance_m"] == 480.0 and rows[0]["ratio"] == 9.6
    assert rows[1]["message"].startswith("Transfer between stop A and stop B")


class _Broken:
    def write(self, ann):
        raise OSError("disk full")


def test_failing_sink_does_not_starve_others(caplog):
    good = MemorySink()
    rec = AnnotationRecorder(_Broken(), good)
    rec.report_could_not_be_routed(A, B, 50.0)
    assert len(good.annotations) == 1
    assert "_Broken failed" in caplog.text


class _SlowSink(MemorySink):
    def write(self, ann):
        time.sleep(0.0005)
        super().write(ann)


def test_async_sink_keeps_every_annotation_past_queue_capacity():
    slow = _SlowSink()
    sink = AsyncSink(slow, maxsize=8)
    rec = AnnotationRecorder(sink)
    for i in range(200):
        rec.report_could_not_be_routed(A, B, float(i))
    sink.stop()
    assert len(slow.annotations) == 200
    assert [a.direct_distance_m for a in slow.annotations] == [float(i) for i in range(200)]

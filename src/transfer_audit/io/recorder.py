# transfer_audit/io/recorder.py
import json
import logging
import queue
import sys
import threading
from dataclasses import asdict
from typing import Protocol

from transfer_audit.domain.entities.geography import TransitStop
from transfer_audit.io.annotations import (
    Annotation,
    TransferCouldNotBeRouted,
    TransferRoutingDistanceTooLong,
)

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, ann: Annotation) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, ann: Annotation) -> None:
        self.fp.write(json.dumps({**asdict(ann), "message": ann.message()}) + "\n")


class MemorySink:
    def __init__(self):
        self.annotations: list[Annotation] = []

    def write(self, ann: Annotation) -> None:
        self.annotations.append(ann)

    def named(self, name: str) -> list[Annotation]:
        return [a for a in self.annotations if a.name == name]


# Async sink (writes on a background thread; blocks the producer when the queue is full)
class AsyncSink:
    _STOP = object()

    def __init__(self, sink: Sink, maxsize: int = 10000):
        self.sink, self.q = sink, queue.Queue(maxsize=maxsize)
        self._t = threading.Thread(target=self._run, daemon=True)
        self._t.start()

    def write(self, ann: Annotation) -> None:
        self.q.put(ann)

    def _run(self):
        while True:
            ann = self.q.get()
            if ann is self._STOP:
                return
            try:
                self.sink.write(ann)
            except Exception:
                logger.exception("sink write failed for %s", ann.name)

    def stop(self):
        # queued annotations are written before the sentinel is reached
        self.q.put(self._STOP)
        self._t.join()


class AnnotationRecorder:
    """AnnotationSink that shapes findings into annotation records and fans them out."""

    def __init__(self, *sinks: Sink, run_id: str = "local"):
        self.sinks = sinks or (JsonlSink(),)
        self.run_id = run_id
        self._seq = 0

    def emit(self, ann: Annotation) -> None:
        for s in self.sinks:
            try:
                s.write(ann)
            except Exception:
                logger.exception("sink %s failed to write %s", type(s).__name__, ann.name)

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def report_routing_too_long(
        self,
        origin: TransitStop,
        destination: TransitStop,
        direct_distance_m: float,
        street_distance_m: float,
        ratio: float,
    ) -> None:
        self.emit(
            TransferRoutingDistanceTooLong(
                run_id=self.run_id,
                seq=self._next_seq(),
                name="TransferRoutingDistanceTooLong",
                origin_id=origin.stop_id,
                origin_name=origin.name,
                destination_id=destination.stop_id,
                destination_name=destination.name,
                direct_distance_m=direct_distance_m,
                street_distance_m=street_distance_m,
                ratio=ratio,
            )
        )

    def report_could_not_be_routed(
        self,
        origin: TransitStop,
        destination: TransitStop,
        direct_distance_m: float,
    ) -> None:
        self.emit(
            TransferCouldNotBeRouted(
                run_id=self.run_id,
                seq=self._next_seq(),
                name="TransferCouldNotBeRouted",
                origin_id=origin.stop_id,
                origin_name=origin.name,
                destination_id=destination.stop_id,
                destination_name=destination.name,
                direct_distance_m=direct_distance_m,
            )
        )

# transfer_audit/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from transfer_audit.analysis.hooks import NoopHooks
from transfer_audit.analysis.transfer_analyzer import DirectTransferAnalyzer, TransferReport
from transfer_audit.config.models import AuditModel, SinkJsonlModel, SinkMemoryModel
from transfer_audit.domain.graph import TransitGraph
from transfer_audit.io.analysis_logging import AnalysisLogging
from transfer_audit.io.recorder import AnnotationRecorder, AsyncSink, JsonlSink, MemorySink
from transfer_audit.runtime.resources import load_graph_from_path


@dataclass
class App:
    graph: TransitGraph
    analyzer: DirectTransferAnalyzer
    recorder: AnnotationRecorder
    _files: list = field(default_factory=list)

    def run(self) -> TransferReport:
        try:
            return self.analyzer.analyze(self.graph)
        finally:
            self.close()

    def close(self) -> None:
        for s in self.recorder.sinks:
            if isinstance(s, AsyncSink):
                s.stop()
        for f in self._files:
            f.close()
        self._files.clear()


def make_sink(cfg: SinkJsonlModel | SinkMemoryModel, files: list):
    if isinstance(cfg, SinkJsonlModel):
        if cfg.path is None:
            sink = JsonlSink()
        else:
            fp = open(cfg.path, "w", encoding="utf-8")
            files.append(fp)
            sink = JsonlSink(fp)
        return AsyncSink(sink) if cfg.background else sink
    elif isinstance(cfg, SinkMemoryModel):
        return MemorySink()
    else:
        raise TypeError(cfg)


def build(
    cfg: AuditModel | Mapping,
    *,
    graph: TransitGraph | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, AuditModel) else AuditModel.model_validate(cfg)

    # 1) Graph (an in-memory graph wins over the configured file)
    if graph is None:
        graph = load_graph_from_path(model.graph.file, model.graph.fmt)

    # 2) Annotation sinks
    files: list = []
    try:
        sinks = [make_sink(s, files) for s in model.sinks]
    except Exception:
        for f in files:
            f.close()
        raise
    recorder = AnnotationRecorder(*sinks, run_id=model.run_id)

    # 3) Hooks & analyzer
    hooks = (
        AnalysisLogging(run_id=model.run_id, level=model.log.level)
        if use_logging and model.log.enabled
        else NoopHooks()
    )
    analyzer = DirectTransferAnalyzer(
        model.analyzer.radius_m,
        sink=recorder,
        hooks=hooks,
        jobs=model.analyzer.jobs,
        progress_every=model.analyzer.progress_every,
    )
    return App(graph, analyzer, recorder, files)

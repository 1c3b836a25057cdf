import os
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    enabled: bool = True


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    file: str
    fmt: Literal["pickle", "graphml", "json"] = "pickle"

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


# ----------------- ANALYZER ---------------------


class AnalyzerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    radius_m: float = Field(gt=0)  # direct search radius; street search uses 5x
    jobs: int = Field(default=1, ge=1)
    progress_every: int = Field(default=1000, ge=1)


# ----------------- SINKS ---------------------


class SinkJsonlModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["jsonl"] = "jsonl"
    path: str | None = None  # None => stdout
    background: bool = False


class SinkMemoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


SinkUnion = Annotated[SinkJsonlModel | SinkMemoryModel, Field(discriminator="kind")]


# ------------------------------------------------------------------


class AuditModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    run_id: str = "local"
    graph: GraphByPath
    analyzer: AnalyzerModel
    log: LogModel = LogModel()
    sinks: list[SinkUnion] = Field(default_factory=lambda: [SinkJsonlModel()])


def load_config(path: str | Path) -> AuditModel:
    return AuditModel.model_validate_json(Path(path).read_text(encoding="utf-8"))

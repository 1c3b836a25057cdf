# transfer_audit/domain/findings.py
from __future__ import annotations

from dataclasses import dataclass, field

from transfer_audit.domain.entities.geography import TransitStop

MIN_RATIO_TO_LOG = 2
MIN_STREET_DISTANCE_TO_LOG = 100  # meters


def distance_ratio(direct_distance_m: float, street_distance_m: float) -> float:
    """street / direct, defined as 0 for coincident stops."""
    return street_distance_m / direct_distance_m if direct_distance_m != 0 else 0.0


@dataclass(frozen=True)
class RoutingTooLong:
    origin: TransitStop
    destination: TransitStop
    direct_distance_m: float
    street_distance_m: float
    ratio: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "ratio", distance_ratio(self.direct_distance_m, self.street_distance_m)
        )

    @property
    def reportable(self) -> bool:
        return self.ratio > MIN_RATIO_TO_LOG and self.street_distance_m > MIN_STREET_DISTANCE_TO_LOG


@dataclass(frozen=True)
class RoutingNotFound:
    origin: TransitStop
    destination: TransitStop
    direct_distance_m: float


# ------------- Ranking -----------------------------


def rank_too_long(findings: list[RoutingTooLong]) -> list[RoutingTooLong]:
    """Worst ratio first; ties keep accumulation order."""
    return sorted(findings, key=lambda f: f.ratio, reverse=True)


def rank_not_found(findings: list[RoutingNotFound]) -> list[RoutingNotFound]:
    """Closest misses first; ties keep accumulation order."""
    return sorted(findings, key=lambda f: f.direct_distance_m)

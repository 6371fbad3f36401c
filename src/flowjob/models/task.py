from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .enums import (
    KINEMATIC_QUANTITIES,
    CentralityEstimator,
    EventQuantity,
    TrackQuantity,
    VariantKind,
)
from .histogram import WeightHistogram

# Fields that tell the four variants of one centrality bin apart.
VARIANT_FIELDS = frozenset({"name", "use_nested_loops", "weight_histograms"})


class Binning(BaseModel):
    """Histogram binning: uniform (n_bins, lower, upper) or explicit edges."""

    model_config = {"frozen": True}

    n_bins: int = Field(ge=1)
    lower: float
    upper: float
    edges: Optional[tuple[float, ...]] = None

    @model_validator(mode="after")
    def validate_range(self):
        if self.lower >= self.upper:
            raise ValueError(f"lower bound {self.lower} must be below upper bound {self.upper}")
        if self.edges is not None:
            if len(self.edges) != self.n_bins + 1:
                raise ValueError("edges must hold n_bins + 1 values")
            if any(b <= a for a, b in zip(self.edges, self.edges[1:])):
                raise ValueError("edges must be strictly increasing")
        return self

    @classmethod
    def uniform(cls, n_bins: int, lower: float, upper: float) -> "Binning":
        return cls(n_bins=n_bins, lower=lower, upper=upper)

    @classmethod
    def from_edges(cls, edges) -> "Binning":
        edges = tuple(float(e) for e in edges)
        if len(edges) < 2:
            raise ValueError("need at least two bin edges")
        return cls(n_bins=len(edges) - 1, lower=edges[0], upper=edges[-1], edges=edges)


class CutRange(BaseModel):
    model_config = {"frozen": True}

    min: float
    max: float

    @model_validator(mode="after")
    def validate_order(self):
        if self.min > self.max:
            raise ValueError(f"cut minimum {self.min} exceeds maximum {self.max}")
        return self


class AnalysisTaskConfig(BaseModel):
    """Complete configuration of one task variant for one centrality bin."""

    model_config = {"frozen": True}

    name: str
    centrality_min: float = Field(ge=0, le=100)
    centrality_max: float = Field(ge=0, le=100)
    track_binning: dict[TrackQuantity, Binning] = {}
    track_cuts: dict[TrackQuantity, CutRange] = {}
    event_binning: dict[EventQuantity, Binning] = {}
    event_cuts: dict[EventQuantity, CutRange] = {}
    correlators: tuple[tuple[int, ...], ...] = ()
    filter_bit: int = Field(default=128, ge=0)
    centrality_estimator: CentralityEstimator = CentralityEstimator.V0M
    fixed_multiplicity: Optional[int] = Field(default=None, ge=1)
    use_nested_loops: bool = False
    weight_histograms: tuple[WeightHistogram, ...] = ()

    @model_validator(mode="after")
    def validate_task(self):
        if self.centrality_min >= self.centrality_max:
            raise ValueError(
                f"centrality interval [{self.centrality_min}, {self.centrality_max}) is empty"
            )
        quantities = [h.quantity for h in self.weight_histograms]
        if len(set(quantities)) != len(quantities):
            raise ValueError("at most one weight histogram per quantity")
        for q in quantities:
            if q not in KINEMATIC_QUANTITIES:
                raise ValueError(f"weight histograms are only supported for phi, pt and eta, not {q.value}")
        return self

    @property
    def has_weights(self) -> bool:
        return bool(self.weight_histograms)

    @property
    def variant_kind(self) -> VariantKind:
        return VariantKind.from_flags(self.use_nested_loops, self.has_weights)

    def weight_histogram(self, quantity: TrackQuantity) -> Optional[WeightHistogram]:
        for hist in self.weight_histograms:
            if hist.quantity == quantity:
                return hist
        return None

    def configuration_fields(self) -> dict:
        """Every cut, binning and correlator setting, without the variant flags."""
        return self.model_dump(exclude=set(VARIANT_FIELDS))

import numpy as np
from pydantic import BaseModel, Field, model_validator

from .enums import TrackQuantity


class WeightHistogram(BaseModel):
    """Uniformly binned step function of per-track weights over one quantity."""

    model_config = {"frozen": True}

    name: str
    quantity: TrackQuantity
    n_bins: int = Field(ge=1)
    lower: float
    upper: float
    contents: tuple[float, ...]

    @model_validator(mode="after")
    def validate_bins(self):
        if self.lower >= self.upper:
            raise ValueError(f"lower edge {self.lower} must be below upper edge {self.upper}")
        if len(self.contents) != self.n_bins:
            raise ValueError(f"expected {self.n_bins} bin contents, got {len(self.contents)}")
        if any(w <= 0 for w in self.contents):
            raise ValueError("weights must be positive")
        return self

    def edges(self) -> np.ndarray:
        return np.linspace(self.lower, self.upper, self.n_bins + 1)

    def centers(self) -> np.ndarray:
        edges = self.edges()
        return 0.5 * (edges[:-1] + edges[1:])

    def weight_at(self, value: float) -> float:
        """Weight of the bin holding value; 1.0 outside [lower, upper)."""
        if not self.lower <= value < self.upper:
            return 1.0
        width = (self.upper - self.lower) / self.n_bins
        index = min(int((value - self.lower) // width), self.n_bins - 1)
        return self.contents[index]

    def to_numpy(self) -> tuple[np.ndarray, np.ndarray]:
        """(contents, edges) pair, the layout uproot writes as a TH1D."""
        return np.asarray(self.contents, dtype=np.float64), self.edges()

"""Synthetic kinematic weight histograms for the weighted task variants."""

from __future__ import annotations

import logging
import math
import os

import numpy as np

from flowjob.models.enums import TrackQuantity
from flowjob.models.histogram import WeightHistogram

logger = logging.getLogger(__name__)

# (name, quantity, n_bins, lower, upper, boost_low, boost_high, weight)
DEFAULT_WEIGHT_SPECS = (
    ("phi_weight", TrackQuantity.PHI, 100, 0.0, 2 * math.pi, 2 * math.pi / 6, 2 * math.pi / 3, 1.4),
    ("pt_weight", TrackQuantity.PT, 100, 0.2, 5.0, 0.4, 1.2, 1.6),
    ("eta_weight", TrackQuantity.ETA, 100, -0.8, 0.8, -0.1, 0.4, 2.4),
)


def generate_weight_histogram(
    name: str,
    quantity: TrackQuantity,
    n_bins: int,
    lower: float,
    upper: float,
    boost_low: float,
    boost_high: float,
    weight: float,
) -> WeightHistogram:
    """Histogram with `weight` in every bin whose center lies strictly inside
    (boost_low, boost_high) and 1.0 everywhere else. Not normalized.
    """
    if n_bins < 1:
        raise ValueError(f"n_bins must be positive, got {n_bins}")
    if lower >= upper:
        raise ValueError(f"lower bound {lower} must be below upper bound {upper}")
    if weight <= 0:
        raise ValueError(f"weight must be positive, got {weight}")

    edges = np.linspace(lower, upper, n_bins + 1)
    centers = 0.5 * (edges[:-1] + edges[1:])
    boosted = (centers > boost_low) & (centers < boost_high)
    contents = np.where(boosted, weight, 1.0)

    logger.debug(
        "Weight histogram %s: %d/%d bins boosted to %.2f",
        name, int(boosted.sum()), n_bins, weight,
    )
    return WeightHistogram(
        name=name,
        quantity=quantity,
        n_bins=n_bins,
        lower=lower,
        upper=upper,
        contents=tuple(float(w) for w in contents),
    )


def default_weight_histograms() -> tuple[WeightHistogram, ...]:
    """The phi, pT and eta weights attached to the weighted variants."""
    return tuple(generate_weight_histogram(*spec) for spec in DEFAULT_WEIGHT_SPECS)


def write_weight_histograms(output_path: str, histograms) -> str:
    """Write histograms as TH1D objects (keyed by name) into a ROOT file."""
    import uproot

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with uproot.recreate(output_path) as f:
        for hist in histograms:
            f[hist.name] = hist.to_numpy()

    logger.info("Wrote %d weight histograms to %s", len(histograms), output_path)
    return output_path

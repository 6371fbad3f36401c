"""Literal binning and cut tables applied to every base task.

Each row is (n_bins, lower, upper, cut_min, cut_max): the first three define
the control-histogram binning, the last two the analysis cut, which may be
tighter than the binning range.
"""

import math

from flowjob.models.enums import EventQuantity, TrackQuantity
from flowjob.models.task import Binning, CutRange

TWO_PI = 2 * math.pi

TRACK_TABLE: dict[TrackQuantity, tuple[int, float, float, float, float]] = {
    TrackQuantity.PT: (1000, 0.0, 10.0, 0.2, 5.0),
    TrackQuantity.PHI: (360, 0.0, TWO_PI, 0.0, TWO_PI),
    TrackQuantity.ETA: (1000, -1.0, 1.0, -0.8, 0.8),
    TrackQuantity.CHARGE: (2, -2.0, 2.0, -2.0, 2.0),
    TrackQuantity.TPC_CLUSTERS: (160, 0.0, 160.0, 70.0, 160.0),
    TrackQuantity.ITS_CLUSTERS: (6, 0.0, 6.0, 2.0, 6.0),
    TrackQuantity.CHI2_PER_NDF: (1000, 0.0, 10.0, 0.1, 4.0),
    TrackQuantity.DCA_Z: (1000, -10.0, 10.0, -3.2, 3.2),
    TrackQuantity.DCA_XY: (1000, -10.0, 10.0, -2.4, 2.4),
}

EVENT_TABLE: dict[EventQuantity, tuple[int, float, float, float, float]] = {
    EventQuantity.CENTRALITY: (100, 0.0, 100.0, 0.0, 100.0),
    EventQuantity.MULT_TPC: (1000, 0.0, 5000.0, 2.0, 3000.0),
    EventQuantity.MULT_V0: (1000, 0.0, 50000.0, 10.0, 50000.0),
    EventQuantity.MULT_SPD: (1000, 0.0, 5000.0, 2.0, 5000.0),
    EventQuantity.MULT_GLOBAL: (1000, 0.0, 5000.0, 2.0, 3000.0),
    EventQuantity.VERTEX_X: (1000, -20.0, 20.0, -10.0, 10.0),
    EventQuantity.VERTEX_Y: (1000, -20.0, 20.0, -10.0, 10.0),
    EventQuantity.VERTEX_Z: (1000, -20.0, 20.0, -10.0, 10.0),
}

# Coarser pT and eta binning used by the default flow configuration.
PT_EDGES = (0.2, 0.34, 0.5, 0.7, 1.0, 2.0, 5.0)
ETA_EDGES = (-0.8, -0.4, 0.0, 0.4, 0.8)

DEFAULT_CORRELATORS: tuple[tuple[int, ...], ...] = ((-2, 2),)
DEFAULT_FILTER_BIT = 128
DEFAULT_FIXED_MULTIPLICITY = 30


def table_binning(table: dict) -> dict:
    return {q: Binning.uniform(n, lo, hi) for q, (n, lo, hi, _, _) in table.items()}


def table_cuts(table: dict) -> dict:
    return {q: CutRange(min=cmin, max=cmax) for q, (_, _, _, cmin, cmax) in table.items()}

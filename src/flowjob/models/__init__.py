from .binding import OutputBinding
from .chain import InputChain
from .enums import (
    KINEMATIC_QUANTITIES,
    AnalysisMode,
    CentralityEstimator,
    EventQuantity,
    InputHandler,
    RunMode,
    TrackQuantity,
    VariantKind,
)
from .grid import GridPluginConfig
from .histogram import WeightHistogram
from .task import AnalysisTaskConfig, Binning, CutRange

__all__ = [
    "AnalysisMode",
    "AnalysisTaskConfig",
    "Binning",
    "CentralityEstimator",
    "CutRange",
    "EventQuantity",
    "GridPluginConfig",
    "InputChain",
    "InputHandler",
    "KINEMATIC_QUANTITIES",
    "OutputBinding",
    "RunMode",
    "TrackQuantity",
    "VariantKind",
    "WeightHistogram",
]

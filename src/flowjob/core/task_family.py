"""Task-family builder: four analysis-task variants per centrality bin.

For every centrality bin one base task is configured from the default tables
and the caller's options. Three further variants are derived from it:

    Qvector                 base task
    NestedLoops             base + nested-loop evaluation
    QVectorWithWeights      base + phi/pT/eta weight histograms
    NestedLoopsWithWeights  base + nested loops + the same weight histograms

Every variant is built from a deep copy of the base configuration; only the
variant flags are set afterwards, so all four share identical cuts and binning
and the two weighted variants hold the very same histogram objects.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field

from flowjob.adapters.base import AnalysisManagerAdapter
from flowjob.core import defaults
from flowjob.core.correlators import validate_correlators
from flowjob.core.weights import default_weight_histograms
from flowjob.models.binding import OutputBinding
from flowjob.models.enums import CentralityEstimator, EventQuantity, TrackQuantity, VariantKind
from flowjob.models.histogram import WeightHistogram
from flowjob.models.task import AnalysisTaskConfig, Binning, CutRange

logger = logging.getLogger(__name__)

FAMILY_ORDER = (
    VariantKind.QVECTOR,
    VariantKind.NESTED_LOOPS,
    VariantKind.QVECTOR_WITH_WEIGHTS,
    VariantKind.NESTED_LOOPS_WITH_WEIGHTS,
)


class ManagerSetupError(RuntimeError):
    """The analysis manager cannot accept or write the configured tasks."""


class FamilyOptions(BaseModel):
    """Settings shared by every task of every centrality bin."""

    track_binning: dict[TrackQuantity, Binning] = Field(
        default_factory=lambda: {
            TrackQuantity.PT: Binning.from_edges(defaults.PT_EDGES),
            TrackQuantity.ETA: Binning.from_edges(defaults.ETA_EDGES),
        }
    )
    track_cuts: dict[TrackQuantity, CutRange] = {}
    event_cuts: dict[EventQuantity, CutRange] = {}
    correlators: tuple[tuple[int, ...], ...] = defaults.DEFAULT_CORRELATORS
    filter_bit: int = defaults.DEFAULT_FILTER_BIT
    centrality_estimator: CentralityEstimator = CentralityEstimator.V0M
    fixed_multiplicity: Optional[int] = defaults.DEFAULT_FIXED_MULTIPLICITY
    require_balanced_correlators: bool = True

    @classmethod
    def from_settings(cls, settings) -> "FamilyOptions":
        return cls(
            filter_bit=settings.filter_bit,
            centrality_estimator=settings.centrality_estimator,
            fixed_multiplicity=settings.fixed_multiplicity,
            require_balanced_correlators=settings.require_balanced_correlators,
        )


def task_name(basename: str, kind: VariantKind, centrality_min: float, centrality_max: float) -> str:
    """Unique task (and output container) name for one variant of one bin."""
    return f"{basename}{kind.value}_{centrality_min:.1f}-{centrality_max:.1f}"


def build_base_task(
    basename: str,
    centrality_min: float,
    centrality_max: float,
    options: Optional[FamilyOptions] = None,
) -> AnalysisTaskConfig:
    """Configure the plain Q-vector task of one centrality bin."""
    options = options or FamilyOptions()
    correlators = validate_correlators(
        options.correlators, require_zero_sum=options.require_balanced_correlators,
    )

    track_binning = defaults.table_binning(defaults.TRACK_TABLE)
    track_binning.update(options.track_binning)
    track_cuts = defaults.table_cuts(defaults.TRACK_TABLE)
    track_cuts.update(options.track_cuts)
    event_binning = defaults.table_binning(defaults.EVENT_TABLE)
    event_cuts = defaults.table_cuts(defaults.EVENT_TABLE)
    event_cuts.update(options.event_cuts)
    # The bin itself always defines the centrality cut.
    event_cuts[EventQuantity.CENTRALITY] = CutRange(min=centrality_min, max=centrality_max)

    return AnalysisTaskConfig(
        name=task_name(basename, VariantKind.QVECTOR, centrality_min, centrality_max),
        centrality_min=centrality_min,
        centrality_max=centrality_max,
        track_binning=track_binning,
        track_cuts=track_cuts,
        event_binning=event_binning,
        event_cuts=event_cuts,
        correlators=correlators,
        filter_bit=options.filter_bit,
        centrality_estimator=options.centrality_estimator,
        fixed_multiplicity=options.fixed_multiplicity,
    )


def build_variant(
    base: AnalysisTaskConfig,
    kind: VariantKind,
    basename: str,
    weights: tuple[WeightHistogram, ...] = (),
) -> AnalysisTaskConfig:
    """Derive one variant from the base task.

    The base configuration is deep-copied first; the name, the nested-loop
    flag and (for weighted kinds) the weight histograms are set on the copy.
    The histogram tuple itself is not copied.
    """
    if kind.with_weights and not weights:
        raise ValueError(f"variant {kind.value} needs weight histograms")
    return base.model_copy(
        deep=True,
        update={
            "name": task_name(basename, kind, base.centrality_min, base.centrality_max),
            "use_nested_loops": kind.nested_loops,
            "weight_histograms": tuple(weights) if kind.with_weights else (),
        },
    )


def build_task_family(
    basename: str,
    centrality_min: float,
    centrality_max: float,
    options: Optional[FamilyOptions] = None,
    weights: tuple[WeightHistogram, ...] = (),
) -> list[AnalysisTaskConfig]:
    """The four variants of one centrality bin, in registration order."""
    weights = tuple(weights) or default_weight_histograms()

    base = build_base_task(basename, centrality_min, centrality_max, options)
    family = [base]
    for kind in FAMILY_ORDER[1:]:
        family.append(build_variant(base, kind, basename, weights))
    return family


def add_task_family(
    manager: Optional[AnalysisManagerAdapter],
    family: list[AnalysisTaskConfig],
    output_file: str,
) -> list[OutputBinding]:
    """Register tasks with the manager and connect their containers.

    Nothing is registered unless the manager exists and has an input event
    handler.
    """
    if manager is None:
        logger.error("No analysis manager to connect to")
        raise ManagerSetupError("No analysis manager to connect to")
    if manager.input_event_handler is None:
        logger.error("Tasks require an input event handler")
        raise ManagerSetupError("Tasks require an input event handler")

    bindings = []
    for task in family:
        manager.add_task(task)
        logger.info("Added to manager: %s", task.name)
        cinput = manager.get_common_input_container()
        coutput = manager.create_container(task.name, output_file)
        manager.connect_input(task.name, 0, cinput)
        manager.connect_output(task.name, 1, coutput)
        bindings.append(OutputBinding(
            task_name=task.name,
            input_container=cinput,
            output_container=coutput,
            output_file=output_file,
        ))
    return bindings

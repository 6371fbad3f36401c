"""Job driver: configure the analysis manager for one run and start it.

Steps, in order:
  1. input: local chain or grid plugin
  2. event handlers (AOD/ESD, plus MC truth for simulated input)
  3. helper tasks: physics selection (ESD only) and multiplicity selection
  4. one task family per centrality bin
  5. debug level
  6. init + start (run_analysis only)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from flowjob.adapters.base import AnalysisManagerAdapter
from flowjob.config import ConfigurationError, Settings
from flowjob.core.chain import create_chain
from flowjob.core.grid_handler import create_grid_plugin
from flowjob.core.task_family import FamilyOptions, add_task_family, build_task_family
from flowjob.core.weights import default_weight_histograms
from flowjob.models.binding import OutputBinding
from flowjob.models.chain import InputChain
from flowjob.models.enums import AnalysisMode, InputHandler
from flowjob.models.grid import GridPluginConfig
from flowjob.models.histogram import WeightHistogram
from flowjob.models.task import AnalysisTaskConfig

logger = logging.getLogger(__name__)

DEFAULT_RUN_NUMBER = 137161
PHYSICS_SELECTION_TASK = "PhysicsSelection"
MULT_SELECTION_TASK = "MultSelection"
MINIMUM_BIAS_TRIGGER = "kINT7"


class AnalysisStartError(RuntimeError):
    """The analysis manager refused to initialise the task tree."""


@dataclass
class JobPlan:
    """Everything configured on the manager for one run."""
    run_number: int
    mode: AnalysisMode
    centrality_bins: list[tuple[int, int]]
    tasks: list[AnalysisTaskConfig] = field(default_factory=list)
    bindings: list[OutputBinding] = field(default_factory=list)
    weights: tuple[WeightHistogram, ...] = ()
    chain: Optional[InputChain] = None
    grid_plugin: Optional[GridPluginConfig] = None


def parse_centrality_edges(text: str) -> list[tuple[int, int]]:
    """'0 10 100' -> [(0, 10), (10, 100)]."""
    try:
        edges = [int(token) for token in text.split()]
    except ValueError as exc:
        raise ConfigurationError(f"CENTRALITY_BIN_EDGES: {exc}") from exc
    if len(edges) < 2:
        raise ConfigurationError(
            f"CENTRALITY_BIN_EDGES needs at least two edges, got {text!r}"
        )
    if any(e < 0 or e > 100 for e in edges):
        raise ConfigurationError(f"CENTRALITY_BIN_EDGES must lie within [0, 100], got {text!r}")
    if any(hi <= lo for lo, hi in zip(edges, edges[1:])):
        raise ConfigurationError(f"CENTRALITY_BIN_EDGES must be strictly increasing, got {text!r}")
    return list(zip(edges, edges[1:]))


def setup_analysis(
    settings: Settings,
    manager: AnalysisManagerAdapter,
    run_number: int = DEFAULT_RUN_NUMBER,
    n_events: int = 100,
    offset: int = 0,
    options: Optional[FamilyOptions] = None,
    weights: tuple[WeightHistogram, ...] = (),
) -> JobPlan:
    """Configure manager for one run; nothing is started.

    n_events and offset only apply to local running, where they count input
    files taken from the data directory.
    """
    bins = parse_centrality_edges(settings.centrality_bin_edges_raw)
    options = options or FamilyOptions.from_settings(settings)
    weights = tuple(weights) or default_weight_histograms()
    plan = JobPlan(
        run_number=run_number,
        mode=settings.analysis_mode,
        centrality_bins=bins,
        weights=weights,
    )

    if settings.analysis_mode == AnalysisMode.LOCAL:
        plan.chain = create_chain(settings.data_dir, n_events, offset, aod=settings.run_over_aod)
    else:
        plan.grid_plugin = create_grid_plugin(settings, run_number)
        manager.set_grid_handler(plan.grid_plugin)

    manager.set_input_event_handler(InputHandler.AOD if settings.run_over_aod else InputHandler.ESD)
    if not settings.run_over_data:
        manager.set_mc_handler()

    # Offline trigger check is already applied when the AODs are produced.
    if not settings.run_over_aod:
        manager.add_helper_task(PHYSICS_SELECTION_TASK, mc=not settings.run_over_data)
    manager.add_helper_task(MULT_SELECTION_TASK, trigger=MINIMUM_BIAS_TRIGGER)

    for index, (low, high) in enumerate(bins):
        logger.info("Wagon for centrality bin %d: %.1f-%.1f", index, low, high)
        family = build_task_family(settings.task_basename, low, high, options, weights)
        plan.bindings.extend(add_task_family(manager, family, settings.output_file))
        plan.tasks.extend(family)

    manager.set_debug_level(settings.debug_level)
    logger.info(
        "Configured %d tasks in %d centrality bins for run %d (%s)",
        len(plan.tasks), len(bins), run_number, settings.analysis_mode.value,
    )
    return plan


def run_analysis(
    settings: Settings,
    manager: AnalysisManagerAdapter,
    run_number: int = DEFAULT_RUN_NUMBER,
    n_events: int = 100,
    offset: int = 0,
    options: Optional[FamilyOptions] = None,
    weights: tuple[WeightHistogram, ...] = (),
) -> JobPlan:
    """Configure, initialise and start the analysis."""
    wall_start = time.perf_counter()
    cpu_start = time.process_time()

    plan = setup_analysis(settings, manager, run_number, n_events, offset, options, weights)
    if not manager.init_analysis():
        logger.error("Analysis manager failed to initialise %d tasks", len(plan.tasks))
        raise AnalysisStartError("analysis manager failed to initialise")
    manager.start_analysis(plan.mode, plan.chain)

    logger.info(
        "Analysis started: real time %.2fs, CPU time %.2fs",
        time.perf_counter() - wall_start, time.process_time() - cpu_start,
    )
    return plan

"""Analysis manager that records the configured job and writes it to disk.

start_analysis() produces, in the output directory:

  manifest.json   tasks, containers, connections, handlers, grid plugin, chain
  weights.root    every distinct weight histogram, as TH1D
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

from flowjob import __version__
from flowjob.core.task_family import ManagerSetupError
from flowjob.core.weights import write_weight_histograms
from flowjob.models.chain import InputChain
from flowjob.models.enums import AnalysisMode, InputHandler
from flowjob.models.grid import GridPluginConfig
from flowjob.models.task import AnalysisTaskConfig

from .base import COMMON_INPUT_CONTAINER, AnalysisManagerAdapter

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"
WEIGHTS_FILE = "weights.root"


class ManifestAnalysisManager(AnalysisManagerAdapter):
    def __init__(self, output_dir: str, name: str = "FlowAnalysisManager"):
        self.output_dir = output_dir
        self.name = name
        self._input_handler: Optional[InputHandler] = None
        self.mc_handler = False
        self.grid_plugin: Optional[GridPluginConfig] = None
        self.helper_tasks: list[dict[str, Any]] = []
        self.tasks: list[AnalysisTaskConfig] = []
        self.containers: dict[str, str] = {}
        self.connections: list[dict[str, Any]] = []
        self.debug_level = 0
        self.initialized = False

    @property
    def input_event_handler(self) -> Optional[InputHandler]:
        return self._input_handler

    def set_input_event_handler(self, handler: InputHandler) -> None:
        self._input_handler = handler

    def set_mc_handler(self) -> None:
        self.mc_handler = True

    def set_grid_handler(self, plugin: GridPluginConfig) -> None:
        self.grid_plugin = plugin

    def add_helper_task(self, name: str, **options: Any) -> None:
        self.helper_tasks.append({"name": name, **options})

    def add_task(self, task: AnalysisTaskConfig) -> None:
        if any(t.name == task.name for t in self.tasks):
            raise ValueError(f"task {task.name} already registered")
        self.tasks.append(task)

    def get_common_input_container(self) -> str:
        return COMMON_INPUT_CONTAINER

    def create_container(self, name: str, output_file: str) -> str:
        if name in self.containers or name == COMMON_INPUT_CONTAINER:
            raise ValueError(f"container {name} already exists")
        self.containers[name] = output_file
        return name

    def connect_input(self, task_name: str, slot: int, container: str) -> None:
        self._connect("input", task_name, slot, container)

    def connect_output(self, task_name: str, slot: int, container: str) -> None:
        self._connect("output", task_name, slot, container)

    def _connect(self, direction: str, task_name: str, slot: int, container: str) -> None:
        if not any(t.name == task_name for t in self.tasks):
            raise ValueError(f"unknown task {task_name}")
        if container != COMMON_INPUT_CONTAINER and container not in self.containers:
            raise ValueError(f"unknown container {container}")
        self.connections.append({
            "task": task_name, "direction": direction, "slot": slot, "container": container,
        })

    def set_debug_level(self, level: int) -> None:
        self.debug_level = level

    def init_analysis(self) -> bool:
        if self._input_handler is None:
            logger.error("Cannot initialise %s: no input event handler", self.name)
            return False
        if not self.tasks:
            logger.error("Cannot initialise %s: no tasks registered", self.name)
            return False
        connected = {(c["task"], c["direction"]) for c in self.connections}
        for task in self.tasks:
            if (task.name, "input") not in connected or (task.name, "output") not in connected:
                logger.error("Task %s is not fully connected", task.name)
                return False
        self.initialized = True
        return True

    def start_analysis(self, mode: AnalysisMode, chain: Optional[InputChain] = None) -> None:
        if not self.initialized:
            raise RuntimeError("start_analysis() called before a successful init_analysis()")
        if mode == AnalysisMode.GRID and self.grid_plugin is None:
            raise RuntimeError("grid mode requires a grid handler")
        if mode == AnalysisMode.LOCAL and chain is None:
            raise RuntimeError("local mode requires an input chain")

        os.makedirs(self.output_dir, exist_ok=True)
        histograms = self._distinct_histograms()
        weights_path = os.path.join(self.output_dir, WEIGHTS_FILE)
        if histograms:
            write_weight_histograms(weights_path, histograms)

        manifest = self.to_manifest(mode, chain)
        manifest_path = os.path.join(self.output_dir, MANIFEST_FILE)
        with open(manifest_path, "w") as f:
            json.dump(manifest, f, indent=2)
        logger.info(
            "Wrote manifest for %d tasks (%s mode) to %s", len(self.tasks), mode.value, manifest_path,
        )

    def to_manifest(self, mode: AnalysisMode, chain: Optional[InputChain] = None) -> dict[str, Any]:
        tasks = []
        for task in self.tasks:
            entry = task.model_dump(mode="json", exclude={"weight_histograms"})
            entry["variant"] = task.variant_kind.value
            entry["weight_histograms"] = {h.quantity.value: h.name for h in task.weight_histograms}
            tasks.append(entry)
        return {
            "flowjob_version": __version__,
            "manager": self.name,
            "mode": mode.value,
            "debug_level": self.debug_level,
            "input_handler": self._input_handler.value if self._input_handler else None,
            "mc_handler": self.mc_handler,
            "helper_tasks": self.helper_tasks,
            "tasks": tasks,
            "containers": {
                "input": COMMON_INPUT_CONTAINER,
                "outputs": dict(self.containers),
            },
            "connections": list(self.connections),
            "weights_file": WEIGHTS_FILE if self._distinct_histograms() else None,
            "grid": self.grid_plugin.model_dump(mode="json") if self.grid_plugin is not None else None,
            "chain": chain.model_dump(mode="json") if chain is not None else None,
        }

    def _distinct_histograms(self) -> list:
        seen: dict[str, Any] = {}
        for task in self.tasks:
            for hist in task.weight_histograms:
                previous = seen.get(hist.name)
                if previous is not None and previous != hist:
                    raise ManagerSetupError(f"two different weight histograms named {hist.name}")
                seen[hist.name] = hist
        return list(seen.values())

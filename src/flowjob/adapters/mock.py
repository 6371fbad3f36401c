from typing import Any, Optional

from flowjob.models.chain import InputChain
from flowjob.models.enums import AnalysisMode, InputHandler
from flowjob.models.grid import GridPluginConfig
from flowjob.models.task import AnalysisTaskConfig

from .base import COMMON_INPUT_CONTAINER, AnalysisManagerAdapter


class MockAnalysisManager(AnalysisManagerAdapter):
    def __init__(self, input_handler: Optional[InputHandler] = InputHandler.AOD, init_ok: bool = True):
        self.calls: list[tuple[str, tuple, dict]] = []
        self._input_handler = input_handler
        self.init_ok = init_ok
        self.tasks: list[AnalysisTaskConfig] = []
        self.helper_tasks: list[tuple[str, dict]] = []
        self.containers: dict[str, str] = {}
        self.inputs: dict[tuple[str, int], str] = {}
        self.outputs: dict[tuple[str, int], str] = {}
        self.mc_handler = False
        self.grid_plugin: Optional[GridPluginConfig] = None
        self.debug_level = 0
        self.started: Optional[tuple[AnalysisMode, Optional[InputChain]]] = None

    @property
    def input_event_handler(self) -> Optional[InputHandler]:
        return self._input_handler

    def set_input_event_handler(self, handler: InputHandler) -> None:
        self.calls.append(("set_input_event_handler", (handler,), {}))
        self._input_handler = handler

    def set_mc_handler(self) -> None:
        self.calls.append(("set_mc_handler", (), {}))
        self.mc_handler = True

    def set_grid_handler(self, plugin: GridPluginConfig) -> None:
        self.calls.append(("set_grid_handler", (plugin,), {}))
        self.grid_plugin = plugin

    def add_helper_task(self, name: str, **options: Any) -> None:
        self.calls.append(("add_helper_task", (name,), options))
        self.helper_tasks.append((name, options))

    def add_task(self, task: AnalysisTaskConfig) -> None:
        self.calls.append(("add_task", (task.name,), {}))
        if any(t.name == task.name for t in self.tasks):
            raise ValueError(f"task {task.name} already registered")
        self.tasks.append(task)

    def get_common_input_container(self) -> str:
        self.calls.append(("get_common_input_container", (), {}))
        return COMMON_INPUT_CONTAINER

    def create_container(self, name: str, output_file: str) -> str:
        self.calls.append(("create_container", (name, output_file), {}))
        if name in self.containers:
            raise ValueError(f"container {name} already exists")
        self.containers[name] = output_file
        return name

    def connect_input(self, task_name: str, slot: int, container: str) -> None:
        self.calls.append(("connect_input", (task_name, slot, container), {}))
        self.inputs[(task_name, slot)] = container

    def connect_output(self, task_name: str, slot: int, container: str) -> None:
        self.calls.append(("connect_output", (task_name, slot, container), {}))
        self.outputs[(task_name, slot)] = container

    def set_debug_level(self, level: int) -> None:
        self.calls.append(("set_debug_level", (level,), {}))
        self.debug_level = level

    def init_analysis(self) -> bool:
        self.calls.append(("init_analysis", (), {}))
        return self.init_ok

    def start_analysis(self, mode: AnalysisMode, chain: Optional[InputChain] = None) -> None:
        self.calls.append(("start_analysis", (mode, chain), {}))
        self.started = (mode, chain)

    def call_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

from abc import ABC, abstractmethod
from typing import Any, Optional

from flowjob.models.chain import InputChain
from flowjob.models.enums import AnalysisMode, InputHandler
from flowjob.models.grid import GridPluginConfig
from flowjob.models.task import AnalysisTaskConfig

# Name of the input container every task reads from.
COMMON_INPUT_CONTAINER = "cAUTO_INPUT"


class AnalysisManagerAdapter(ABC):
    @property
    @abstractmethod
    def input_event_handler(self) -> Optional[InputHandler]:
        """Installed input event handler, None until one is set."""

    @abstractmethod
    def set_input_event_handler(self, handler: InputHandler) -> None:
        """Install the AOD or ESD input handler."""

    @abstractmethod
    def set_mc_handler(self) -> None:
        """Install the Monte Carlo truth handler."""

    @abstractmethod
    def set_grid_handler(self, plugin: GridPluginConfig) -> None:
        """Attach a configured grid plugin."""

    @abstractmethod
    def add_helper_task(self, name: str, **options: Any) -> None:
        """Register a framework-provided task (physics or multiplicity selection)."""

    @abstractmethod
    def add_task(self, task: AnalysisTaskConfig) -> None:
        """Register an analysis task."""

    @abstractmethod
    def get_common_input_container(self) -> str:
        """Name of the input container shared by all tasks."""

    @abstractmethod
    def create_container(self, name: str, output_file: str) -> str:
        """Create an output container written to output_file. Returns its name."""

    @abstractmethod
    def connect_input(self, task_name: str, slot: int, container: str) -> None:
        """Connect a container to an input slot of a task."""

    @abstractmethod
    def connect_output(self, task_name: str, slot: int, container: str) -> None:
        """Connect an output slot of a task to a container."""

    @abstractmethod
    def set_debug_level(self, level: int) -> None:
        """Set the framework debug verbosity."""

    @abstractmethod
    def init_analysis(self) -> bool:
        """Validate the task tree. False if the analysis cannot run."""

    @abstractmethod
    def start_analysis(self, mode: AnalysisMode, chain: Optional[InputChain] = None) -> None:
        """Run the analysis locally over chain or submit it to the grid."""

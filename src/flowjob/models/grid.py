from typing import Optional

from pydantic import BaseModel, Field

from .enums import RunMode


class GridPluginConfig(BaseModel):
    """Every parameter handed to the grid-submission plugin."""

    run_mode: RunMode
    n_test_files: int = Field(default=2, ge=0)  # only used in "test" mode
    api_version: str = "V1.1x"
    aliphysics_version: str
    run_over_data: bool

    # Input data
    grid_data_dir: str
    data_pattern: str
    run_prefix: Optional[str] = None
    output_to_run_no: bool = False
    run_numbers: list[int] = []
    check_copy: bool = False

    # Directories, relative to the grid home / working directory
    grid_working_dir: str
    grid_output_dir: str

    additional_libs: list[str] = []
    default_outputs: bool = True
    analysis_macro: str

    # Job control
    split_max_input_file_number: int = Field(ge=0)
    n_runs_per_master: int = Field(ge=1)
    overwrite_mode: bool = True
    master_resubmit_threshold: int = Field(ge=0)
    ttl: int = Field(gt=0)
    input_format: str = "xml-single"
    jdl_name: str
    price: int = Field(default=1, ge=1)
    split_mode: str = "se"

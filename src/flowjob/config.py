from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from flowjob.models.enums import AnalysisMode, CentralityEstimator, RunMode


class ConfigurationError(ValueError):
    """Raised when the job environment is missing or malformed."""


class Settings(BaseSettings):
    # Optional knobs read as FLOWJOB_<NAME>; the job variables below use
    # their literal environment names.
    model_config = {"env_prefix": "FLOWJOB_", "populate_by_name": True}

    # Output
    grid_output_root_file: str = Field(validation_alias="GRID_OUTPUT_ROOT_FILE")
    output_tdirectory_file: str = Field(validation_alias="OUTPUT_TDIRECTORY_FILE")
    task_basename: str = Field(validation_alias="TASK_BASENAME")

    # Run steering
    analysis_mode: AnalysisMode = Field(validation_alias="ANALYSIS_MODE")
    data_dir: str = Field(validation_alias="DataDir")
    run_over_data: bool = Field(validation_alias="RUN_OVER_DATA")
    run_over_aod: bool = Field(validation_alias="RUN_OVER_AOD")
    centrality_bin_edges_raw: str = Field(validation_alias="CENTRALITY_BIN_EDGES")

    # Grid plugin
    grid_run_mode: RunMode = Field(validation_alias="GRID_RUN_MODE")
    aliphysics_tag: str = Field(validation_alias="ALIPHYSICS_TAG")
    grid_working_dir: str = Field(validation_alias="GRID_WORKING_DIR_REL")
    grid_output_dir: str = Field(validation_alias="GRID_OUTPUT_DIR_REL")
    analysis_macro_file_name: str = Field(validation_alias="ANALYSIS_MACRO_FILE_NAME")
    input_files_per_subjob: int = Field(validation_alias="INPUT_FILES_PER_SUBJOB", ge=0)
    runs_per_masterjob: int = Field(validation_alias="RUNS_PER_MASTERJOB", ge=1)
    master_resubmit_threshold: int = Field(validation_alias="MASTER_RESUBMIT_THRESHOLD", ge=0)
    time_to_live: int = Field(validation_alias="TIME_TO_LIVE", gt=0)
    jdl_file_name: str = Field(validation_alias="JDL_FILE_NAME")

    # Task defaults
    filter_bit: int = Field(default=128, ge=0)
    centrality_estimator: CentralityEstimator = CentralityEstimator.V0M
    fixed_multiplicity: int | None = Field(default=30, ge=1)
    require_balanced_correlators: bool = True

    # Grid job control
    n_test_files: int = Field(default=2, ge=0)
    job_price: int = Field(default=1, ge=1)
    split_mode: str = "se"
    grid_data_dir: str | None = None  # overrides the data/MC default
    data_pattern: str | None = None

    # Logging
    log_level: str = "INFO"
    debug_level: int = 2

    @field_validator("centrality_bin_edges_raw")
    @classmethod
    def _check_edges(cls, value: str) -> str:
        # Parsing into bins happens in the pipeline; here only reject junk early.
        for token in value.split():
            try:
                int(token)
            except ValueError:
                raise ValueError(f"non-integer centrality bin edge {token!r}") from None
        return value

    @property
    def output_file(self) -> str:
        """Output file with its TDirectory, as used for every output container."""
        return f"{self.grid_output_root_file}:{self.output_tdirectory_file}"


def load_settings(**overrides) -> Settings:
    """Build Settings from the environment, naming the offending variables on failure."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = []
        malformed = []
        for err in exc.errors():
            name = ".".join(str(part) for part in err["loc"]) or "<settings>"
            field = Settings.model_fields.get(name)
            if field is not None and field.validation_alias is None:
                name = f"FLOWJOB_{name.upper()}"
            if err["type"] == "missing":
                missing.append(name)
            else:
                malformed.append(f"{name}: {err['msg']}")
        parts = []
        if missing:
            parts.append("missing required environment variable(s): " + ", ".join(missing))
        if malformed:
            parts.append("malformed environment variable(s): " + "; ".join(malformed))
        raise ConfigurationError(". ".join(parts)) from exc

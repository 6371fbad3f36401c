import pytest

from flowjob.config import Settings

# A complete job environment, as exported by the grid configuration scripts.
JOB_ENV = {
    "GRID_OUTPUT_ROOT_FILE": "AnalysisResults.root",
    "TASK_BASENAME": "SC",
    "OUTPUT_TDIRECTORY_FILE": "OutputAR",
    "GRID_RUN_MODE": "test",
    "ALIPHYSICS_TAG": "vAN-20211122_ROOT6-1",
    "RUN_OVER_DATA": "1",
    "GRID_WORKING_DIR_REL": "flow/work",
    "GRID_OUTPUT_DIR_REL": "output",
    "ANALYSIS_MACRO_FILE_NAME": "FlowAnalysis.C",
    "INPUT_FILES_PER_SUBJOB": "20",
    "RUNS_PER_MASTERJOB": "1",
    "MASTER_RESUBMIT_THRESHOLD": "90",
    "TIME_TO_LIVE": "30000",
    "JDL_FILE_NAME": "FlowAnalysis.jdl",
    "ANALYSIS_MODE": "grid",
    "DataDir": "/tmp/flowjob-data",
    "RUN_OVER_AOD": "1",
    "CENTRALITY_BIN_EDGES": "0 10 100",
}


@pytest.fixture
def job_env(monkeypatch):
    """Export JOB_ENV into the process environment."""
    for key, value in JOB_ENV.items():
        monkeypatch.setenv(key, value)
    return dict(JOB_ENV)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every job variable so Settings sees only what a test sets."""
    for key in JOB_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DATADIR", raising=False)
    return monkeypatch


@pytest.fixture
def settings(clean_env):
    return Settings(**JOB_ENV)

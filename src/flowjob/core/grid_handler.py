"""Grid plugin configuration for one run number."""

from __future__ import annotations

import logging

from flowjob.config import Settings
from flowjob.models.grid import GridPluginConfig

logger = logging.getLogger(__name__)

MC_DATA_DIR = "/alice/sim/MC_PRODUCTION"
MC_DATA_PATTERN = "*AliESDs.root"
DATA_DIR = "/alice/data/2010/LHC10h"
DATA_PATTERN = "*ESDs/pass2/AOD160/*AOD.root"
DATA_RUN_PREFIX = "000"

ADDITIONAL_LIBS = [
    "libGui.so",
    "libProof.so",
    "libMinuit.so",
    "libXMLParser.so",
    "libRAWDatabase.so",
    "libRAWDatarec.so",
    "libCDB.so",
    "libSTEERBase.so",
    "libSTEER.so",
    "libTPCbase.so",
    "libPWGflowBase.so",
    "libPWGflowTasks.so",
]


def create_grid_plugin(settings: Settings, run_number: int) -> GridPluginConfig:
    """Build the grid plugin configuration for run_number.

    Real data is looked up below the run-prefixed run directory and its output
    is split by run number; Monte Carlo uses the production directory as is.
    """
    if settings.run_over_data:
        data_dir, pattern, prefix = DATA_DIR, DATA_PATTERN, DATA_RUN_PREFIX
    else:
        data_dir, pattern, prefix = MC_DATA_DIR, MC_DATA_PATTERN, None

    plugin = GridPluginConfig(
        run_mode=settings.grid_run_mode,
        n_test_files=settings.n_test_files,
        aliphysics_version=settings.aliphysics_tag,
        run_over_data=settings.run_over_data,
        grid_data_dir=settings.grid_data_dir or data_dir,
        data_pattern=settings.data_pattern or pattern,
        run_prefix=prefix,
        output_to_run_no=settings.run_over_data,
        run_numbers=[run_number],
        grid_working_dir=settings.grid_working_dir,
        grid_output_dir=settings.grid_output_dir,
        additional_libs=list(ADDITIONAL_LIBS),
        analysis_macro=settings.analysis_macro_file_name,
        split_max_input_file_number=settings.input_files_per_subjob,
        n_runs_per_master=settings.runs_per_masterjob,
        master_resubmit_threshold=settings.master_resubmit_threshold,
        ttl=settings.time_to_live,
        jdl_name=settings.jdl_file_name,
        price=settings.job_price,
        split_mode=settings.split_mode,
    )
    logger.info(
        "Grid plugin: mode=%s run=%d data_dir=%s pattern=%s",
        plugin.run_mode.value, run_number, plugin.grid_data_dir, plugin.data_pattern,
    )
    return plugin

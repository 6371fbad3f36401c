"""Local input chains built from a data directory or a file list.

A directory is expected to hold one subdirectory per input, e.g.

    <data_dir>/<dir0>/AliAOD.root
    <data_dir>/<dir1>/AliAOD.root

Any other path is read as a text file listing input files, whitespace separated.
"""

from __future__ import annotations

import logging
import os

from flowjob.models.chain import InputChain

logger = logging.getLogger(__name__)

AOD_TREE = "aodTree"
ESD_TREE = "esdTree"
AOD_FILE = "AliAOD.root"
ESD_FILE = "AliESDs.root"


def create_chain(data_dir: str, n_files: int, offset: int = 0, aod: bool = True) -> InputChain:
    """Skip `offset` inputs, then collect at most `n_files` of them."""
    if not os.path.exists(data_dir):
        raise FileNotFoundError(f"data directory or file list {data_dir} not found")

    tree_name = AOD_TREE if aod else ESD_TREE
    if os.path.isdir(data_dir):
        file_name = AOD_FILE if aod else ESD_FILE
        candidates = [
            os.path.join(data_dir, entry, file_name)
            for entry in sorted(os.listdir(data_dir))
            if os.path.isdir(os.path.join(data_dir, entry))
        ]
    else:
        candidates = _read_file_list(data_dir)

    files = candidates[max(offset, 0):][:max(n_files, 0)]
    for path in files:
        logger.debug("Adding to chain (%s): %s", tree_name, path)
    logger.info("Chain %s: %d files from %s (offset %d)", tree_name, len(files), data_dir, offset)
    return InputChain(tree_name=tree_name, files=files)


def _read_file_list(path: str) -> list[str]:
    with open(path) as f:
        tokens = f.read().split()
    files = []
    for token in tokens:
        if "root" not in token:
            logger.warning("Skipping non-ROOT entry in %s: %s", path, token)
            continue
        files.append(token)
    return files

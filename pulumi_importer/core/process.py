"""Subprocess helper for the `pulumi` and `az` CLIs."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)


def run_command(
    args: List[str],
    cwd: Optional[Union[str, Path]] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Run a command and capture its output.

    The exit code is not checked; callers decide what counts as failure.

    Args:
        args: Program and arguments
        cwd: Working directory
        env: Variables added on top of the current environment

    Returns:
        CompletedProcess with text stdout/stderr
    """
    full_env = None
    if env:
        full_env = dict(os.environ)
        full_env.update(env)
    logger.debug(f"Running {' '.join(args)}")
    return subprocess.run(
        args,
        cwd=str(cwd) if cwd is not None else None,
        env=full_env,
        capture_output=True,
        text=True,
    )

"""Subprocess utilities for running commands."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import CommandError


def run(
    command: List[str],
    cwd: Optional[Path] = None,
    env: Optional[Dict[str, str]] = None,
    quiet: bool = False,
) -> str:
    """Run a command, streaming its output unless ``quiet``, and return the output.

    Raises ``CommandError`` when the command exits non-zero or cannot be started.
    """
    merged_env: Optional[Dict[str, str]] = None
    if env:
        merged_env = {**os.environ, **env}
    try:
        process = subprocess.Popen(
            command,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        raise CommandError(command, None, str(e)) from e
    assert process.stdout is not None
    lines: List[str] = []
    for line in process.stdout:
        lines.append(line)
        if not quiet:
            sys.stdout.write(line)
    code = process.wait()
    output = "".join(lines)
    if code:
        raise CommandError(command, code, output)
    return output

"""Operator-provided cleanup scripts.

Any executable among ``~/bin/cleanup.sh`` and ``~/bin/clean.sh`` is run in
that order. A failing script only produces a warning; it never reaches the
continuation gate.
"""

from __future__ import annotations

import os
from pathlib import Path

from .. import console
from .runner import StepRunner

CUSTOM_SCRIPTS = ("bin/cleanup.sh", "bin/clean.sh")


def custom_scripts(home: Path) -> list[Path]:
    return [
        home / rel
        for rel in CUSTOM_SCRIPTS
        if (home / rel).is_file() and os.access(home / rel, os.X_OK)
    ]


def run_custom_cleanup(runner: StepRunner, home: Path) -> int:
    """Run each custom script; return how many failed."""
    failures = 0
    for script in custom_scripts(home):
        outcome = runner.execute(f"Running {script}", str(script))
        if outcome.ok:
            console.ok(f"{script} finished")
        else:
            failures += 1
            console.warn(f"{script} exited with status {outcome.returncode}; continuing")
    return failures

"""Housekeeping actions run after the package upgrade.

Each action is its own stage gated on the presence of the tool it calls or
the directory it cleans, so a host without journald, mlocate or a desktop
thumbnail cache just skips those entries.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable

from ..config.settings import Settings
from .kernels import purge_stale_kernels
from .runner import StepRunner
from .stage import Stage

LOG_DIR = Path("/var/log")
TMP_DIRS = (Path("/tmp"), Path("/var/tmp"))


def _has_tools(*names: str) -> Callable[[], bool]:
    return lambda: all(shutil.which(name) is not None for name in names)


def _has_dir(path: Path, tool: str = "find") -> Callable[[], bool]:
    return lambda: shutil.which(tool) is not None and path.is_dir()


def _step(runner: StepRunner, description: str, *command: str, root: bool = True) -> Callable[[], object]:
    return lambda: runner.run(description, *command, root=root)


def housekeeping_stages(runner: StepRunner, settings: Settings) -> list[Stage]:
    """Return the ordered housekeeping actions for this host."""
    thumbnails = settings.home / ".cache" / "thumbnails"
    tmp_dir, var_tmp_dir = TMP_DIRS

    return [
        Stage(
            name="autoremove",
            description="Removing orphaned packages",
            action=_step(runner, "Removing orphaned packages", "apt-get", "autoremove", "--purge", "-y"),
            applies=_has_tools("apt-get"),
            skip_reason="apt-get not installed",
        ),
        Stage(
            name="autoclean",
            description="Clearing obsolete package downloads",
            action=_step(runner, "Clearing obsolete package downloads", "apt-get", "autoclean", "-y"),
            applies=_has_tools("apt-get"),
            skip_reason="apt-get not installed",
        ),
        Stage(
            name="clean",
            description="Clearing the package cache",
            action=_step(runner, "Clearing the package cache", "apt-get", "clean"),
            applies=_has_tools("apt-get"),
            skip_reason="apt-get not installed",
        ),
        Stage(
            name="journal",
            description="Trimming the systemd journal",
            action=_step(
                runner,
                f"Trimming the systemd journal to {settings.journal_retention}",
                "journalctl", f"--vacuum-time={settings.journal_retention}",
            ),
            applies=_has_tools("journalctl"),
            skip_reason="journalctl not installed",
        ),
        Stage(
            name="updatedb",
            description="Refreshing the locate database",
            action=_step(runner, "Refreshing the locate database", "updatedb"),
            applies=_has_tools("updatedb"),
            skip_reason="updatedb not installed",
        ),
        Stage(
            name="old_logs",
            description="Deleting old compressed logs",
            action=_step(
                runner,
                f"Deleting compressed logs older than {settings.log_max_age_days} days",
                "find", str(LOG_DIR), "-type", "f", "-name", "*.gz",
                "-mtime", f"+{settings.log_max_age_days}", "-delete",
            ),
            applies=_has_dir(LOG_DIR),
            skip_reason=f"{LOG_DIR} not present",
        ),
        Stage(
            name="thumbnails",
            description="Clearing the thumbnail cache",
            action=_step(
                runner,
                f"Clearing {thumbnails}",
                "find", str(thumbnails), "-mindepth", "1", "-delete",
                root=False,
            ),
            applies=_has_dir(thumbnails),
            skip_reason=f"{thumbnails} not present",
        ),
        Stage(
            name="tmp",
            description=f"Deleting old files in {tmp_dir}",
            action=_step(
                runner,
                f"Deleting files in {tmp_dir} unused for {settings.tmp_max_age_days} days",
                "find", str(tmp_dir), "-xdev", "-type", "f",
                "-atime", f"+{settings.tmp_max_age_days}", "-delete",
            ),
            applies=_has_dir(tmp_dir),
            skip_reason=f"{tmp_dir} not present",
        ),
        Stage(
            name="var_tmp",
            description=f"Deleting old files in {var_tmp_dir}",
            action=_step(
                runner,
                f"Deleting files in {var_tmp_dir} unused for {settings.var_tmp_max_age_days} days",
                "find", str(var_tmp_dir), "-xdev", "-type", "f",
                "-atime", f"+{settings.var_tmp_max_age_days}", "-delete",
            ),
            applies=_has_dir(var_tmp_dir),
            skip_reason=f"{var_tmp_dir} not present",
        ),
        Stage(
            name="kernels",
            description="Purging stale kernel packages",
            action=lambda: purge_stale_kernels(runner),
            applies=_has_tools("dpkg-query", "apt-get"),
            skip_reason="dpkg-query or apt-get not installed",
        ),
    ]

"""Offer a reboot when the package manager left a reboot-required marker."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from .. import console
from ..config.settings import Settings
from .gate import Confirm, terminal_confirm
from .runner import StepRunner

REBOOT_MARKER = Path("/var/run/reboot-required")
REBOOT_PACKAGES = Path("/var/run/reboot-required.pkgs")

REBOOT_PROMPT = "A reboot is required to finish the update. Reboot now? (yes/no) "

REBOOTED = "rebooted"
SKIPPED = "skipped"


class RebootIssued(Exception):
    """The reboot command was sent; nothing else should run."""


def pending_packages(path: Path = REBOOT_PACKAGES) -> list[str]:
    """Packages that asked for the reboot, in order, without duplicates."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return []
    return list(dict.fromkeys(line.strip() for line in lines if line.strip()))


def check_reboot(
    runner: StepRunner,
    settings: Settings,
    confirm: Confirm = terminal_confirm,
    marker: Path = REBOOT_MARKER,
    packages: Path = REBOOT_PACKAGES,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Return ``"rebooted"`` if a reboot was issued, else ``"skipped"``."""
    if not marker.exists():
        console.banner(f"{settings.hostname}: no reboot needed")
        return SKIPPED

    console.banner(f"{settings.hostname}: reboot needed")
    pkgs = pending_packages(packages)
    if pkgs:
        console.line("Requested by: " + ", ".join(pkgs))

    if not confirm(REBOOT_PROMPT):
        console.warn("Reboot postponed; restart the host to finish applying updates")
        return SKIPPED

    console.warn(f"Restarting {settings.hostname} in {settings.reboot_delay:g} seconds")
    sleep(settings.reboot_delay)
    outcome = runner.run("Rebooting", "reboot", root=True)
    if not outcome.ok:
        console.warn("Reboot was not issued; restart the host manually to finish applying updates")
        return SKIPPED
    return REBOOTED

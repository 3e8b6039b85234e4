"""Refresh the host's docker compose stack.

The compose file is looked up by host name under ``~/docker`` so one home
directory synced across machines can carry a stack per host.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path
from typing import Callable, Optional

from .. import console
from ..config.settings import Settings
from .runner import StepRunner


def compose_candidates(home: Path, hostname: str) -> list[Path]:
    compose_dir = home / "docker"
    return [
        compose_dir / f"docker-compose-{hostname}.yml",
        compose_dir / "docker-compose.yml",
    ]


def find_compose_file(home: Path, hostname: str) -> Optional[Path]:
    for candidate in compose_candidates(home, hostname):
        if candidate.is_file():
            return candidate
    return None


def maintain_containers(
    runner: StepRunner,
    settings: Settings,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Restart the compose stack on fresh images.

    Returns False, after a warning, when docker or the compose file is
    missing. Every docker call goes through the runner and so through the
    continuation gate on failure.
    """
    if shutil.which("docker") is None:
        console.warn("docker is not installed; skipping container maintenance")
        return False

    compose_file = find_compose_file(settings.home, settings.hostname)
    if compose_file is None:
        names = ", ".join(str(p) for p in compose_candidates(settings.home, settings.hostname))
        console.warn(f"No compose file found ({names}); skipping container maintenance")
        return False

    compose = ["docker", "compose", "--profile", "all", "-f", str(compose_file)]

    # volumes may live on network shares listed in fstab
    runner.run("Mounting all filesystems", "mount", "-a", root=True)
    runner.run("Stopping the container stack", *compose, "down", root=True)
    sleep(settings.container_stop_delay)
    runner.run(
        "Pruning unused images, containers and volumes",
        "docker", "system", "prune", "-a", "-f", "--volumes",
        root=True,
    )
    runner.run("Pulling updated images", *compose, "pull", root=True)
    runner.run("Starting the container stack", *compose, "up", "-d", "--remove-orphans", root=True)
    runner.run("Docker disk usage", "docker", "system", "df", root=True)
    return True

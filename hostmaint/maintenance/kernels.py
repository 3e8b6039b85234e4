"""Pick installed kernel images that are safe to purge.

dpkg is asked for every ``linux-image-*`` package and its status. A package is
a purge candidate when it is fully installed, carries a version number in its
name (meta-packages such as ``linux-image-generic`` do not), and does not
contain the running kernel's release string. Candidates are removed with a
single ``apt-get purge`` call.
"""

from __future__ import annotations

import platform
import re
import subprocess
from typing import Iterable, Optional

from .. import console
from ..models.schema import KernelPackage
from .runner import StepOutcome, StepRunner

KERNEL_IMAGE_PATTERN = "linux-image-*"
DPKG_QUERY_FORMAT = "${Package}\t${Status}\n"

_VERSIONED_IMAGE_RE = re.compile(r"^linux-image-(?:unsigned-)?\d+\.\d+")


def parse_dpkg_listing(text: str) -> list[KernelPackage]:
    """Parse ``dpkg-query -W -f '${Package}\\t${Status}\\n'`` output."""
    packages = []
    for row in text.splitlines():
        name, _, status = row.partition("\t")
        name = name.strip()
        if name:
            packages.append(KernelPackage(name=name, status=status.strip()))
    return packages


def _is_running(name: str, running_version: str) -> bool:
    return re.search(re.escape(running_version), name) is not None


def classify_kernels(running_version: str, installed: Iterable[KernelPackage]) -> list[KernelPackage]:
    """Return *installed* with ``current`` set on packages of the running kernel."""
    running_version = (running_version or "").strip()
    return [
        pkg.model_copy(update={"current": bool(running_version) and _is_running(pkg.name, running_version)})
        for pkg in installed
    ]


def select_purge_candidates(
    running_version: str, installed: Iterable[KernelPackage]
) -> frozenset[KernelPackage]:
    """Return the versioned, fully-installed kernel images other than the running one.

    An empty or blank *running_version* selects nothing: without knowing what
    is running there is no safe candidate.
    """
    running_version = (running_version or "").strip()
    if not running_version:
        return frozenset()

    return frozenset(
        pkg
        for pkg in classify_kernels(running_version, installed)
        if pkg.fully_installed
        and _VERSIONED_IMAGE_RE.match(pkg.name)
        and not pkg.current
    )


def running_kernel_version() -> str:
    """Release string of the running kernel, as ``uname -r`` prints it."""
    return platform.release()


def installed_kernels() -> list[KernelPackage]:
    # dpkg-query exits 1 when nothing matches; the listing is still valid
    result = subprocess.run(
        ["dpkg-query", "-W", "-f", DPKG_QUERY_FORMAT, KERNEL_IMAGE_PATTERN],
        capture_output=True,
        text=True,
        check=False,
    )
    return parse_dpkg_listing(result.stdout)


def purge_stale_kernels(
    runner: StepRunner, running_version: Optional[str] = None
) -> Optional[StepOutcome]:
    """Purge old kernel images in one apt-get call; skip when there are none."""
    if running_version is None:
        running_version = running_kernel_version()

    try:
        installed = installed_kernels()
    except OSError as exc:
        console.warn(f"Could not list installed kernels: {exc}")
        return None

    names = sorted(pkg.name for pkg in select_purge_candidates(running_version, installed))
    if not names:
        console.skip(f"No stale kernel packages (running {running_version})")
        return None

    console.line(f"Running kernel {running_version}; purging: {' '.join(names)}")
    return runner.run("Purging stale kernel packages", "apt-get", "purge", "-y", *names, root=True)

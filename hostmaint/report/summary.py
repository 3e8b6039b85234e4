"""End-of-run summary: elapsed time, uptime, memory and network."""

from __future__ import annotations

import datetime
import time
from typing import Optional

from .. import console
from ..collectors import MemoryCollector, NetworkCollector, UptimeCollector
from ..collectors.base import run_collectors
from ..config.run_state import RunSession
from ..models.schema import MemoryInfo, NetworkSection, RunSummary, UptimeInfo


def format_elapsed(seconds: int) -> str:
    """Render whole seconds as ``"<m> min <s> sec"``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes} min {secs} sec"


def build_summary(
    session: RunSession,
    now: Optional[float] = None,
    collectors: Optional[list] = None,
) -> RunSummary:
    """Collect diagnostics and combine them with the run timing.

    Args:
        session: Session created at process entry.
        now: Epoch seconds to measure against. Defaults to the current time.
        collectors: ``(key, collector)`` pairs; defaults to uptime, memory
            and network. Collector failures land in ``errors``.
    """
    if now is None:
        now = time.time()
    if collectors is None:
        collectors = [
            ("uptime", UptimeCollector()),
            ("memory", MemoryCollector()),
            ("network", NetworkCollector()),
        ]

    elapsed = session.elapsed_seconds(now)
    sections, errors = run_collectors(collectors)

    generated = datetime.datetime.fromtimestamp(now).astimezone()
    return RunSummary(
        hostname=session.hostname,
        generated_at=generated.strftime("%a %d %b %Y %H:%M:%S %Z"),
        elapsed_seconds=elapsed,
        elapsed_human=format_elapsed(elapsed),
        uptime=UptimeInfo(**sections["uptime"]) if sections.get("uptime") else None,
        memory=MemoryInfo(**sections["memory"]) if sections.get("memory") else None,
        network=NetworkSection(**sections["network"]) if sections.get("network") else None,
        errors=errors,
    )


def _render_network(network: NetworkSection) -> None:
    if network.default_interface:
        console.line(f"Default route via {network.default_interface}")
    else:
        console.line("No default route; showing all interfaces")
    for iface in network.interfaces:
        state = "up" if iface.is_up else "down"
        addrs = ", ".join(iface.ip_addresses + iface.ipv6_addresses) or "no address"
        console.line(f"  {iface.name} ({state}): {addrs}")


def render_summary(summary: RunSummary) -> None:
    console.line("Date")
    console.line(f"  {summary.generated_at}")

    console.line("Uptime")
    if summary.uptime:
        console.line(f"  up {summary.uptime.human_readable} (since {summary.uptime.last_boot})")
    else:
        console.line("  unavailable")

    console.line("Memory Usage")
    if summary.memory:
        mem = summary.memory
        console.line(
            f"  RAM  {mem.used_mb} MB used / {mem.total_mb} MB total "
            f"({mem.percent_used}%), {mem.available_mb} MB available"
        )
        console.line(f"  Swap {mem.swap_used_mb} MB used / {mem.swap_total_mb} MB total")
    else:
        console.line("  unavailable")

    console.line("Network")
    if summary.network:
        _render_network(summary.network)
    else:
        console.line("  unavailable")

    for error in summary.errors:
        console.warn(error)

    console.line(f"Time elapsed: {summary.elapsed_seconds} seconds ({summary.elapsed_human})")


def report_summary(session: RunSession) -> RunSummary:
    summary = build_summary(session)
    render_summary(summary)
    return summary

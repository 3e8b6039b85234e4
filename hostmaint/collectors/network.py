"""Resolve the primary network interface and collect its addresses.

The primary interface is the one carrying the default IPv4 route, read from
the kernel routing table (``/proc/net/route``). When there is no default
route, or it names an interface psutil does not know about, every interface
is reported instead.
"""

from __future__ import annotations

import socket
from pathlib import Path
from typing import Mapping, Optional, Sequence

import psutil

from ..models.schema import NetworkInterface, NetworkSection
from .base import BaseCollector

ROUTE_TABLE = Path("/proc/net/route")

_RTF_UP = 0x0001
_DEFAULT_DEST = "00000000"


def parse_default_route(table: str) -> Optional[str]:
    """Return the interface of the lowest-metric default route in *table*.

    *table* is the text of ``/proc/net/route``: a header line followed by
    whitespace-separated rows (Iface, Destination, Gateway, Flags, RefCnt,
    Use, Metric, Mask, ...). Malformed rows are ignored.
    """
    best: Optional[tuple[int, str]] = None
    for row in table.splitlines()[1:]:
        cols = row.split()
        if len(cols) < 8:
            continue
        iface, dest, _gw, flags, _ref, _use, metric, mask = cols[:8]
        if dest != _DEFAULT_DEST or mask != _DEFAULT_DEST:
            continue
        try:
            if not int(flags, 16) & _RTF_UP:
                continue
            rank = int(metric)
        except ValueError:
            continue
        if best is None or rank < best[0]:
            best = (rank, iface)
    return best[1] if best else None


def _describe(name: str, addrs: Sequence, stats: Mapping) -> NetworkInterface:
    ipv4s = [a.address for a in addrs if a.family == socket.AF_INET]
    ipv6s = [a.address for a in addrs if a.family == socket.AF_INET6]
    iface_stats = stats.get(name)
    return NetworkInterface(
        name=name,
        ip_addresses=ipv4s,
        ipv6_addresses=ipv6s,
        is_up=bool(iface_stats.isup) if iface_stats else False,
    )


def select_interfaces(
    default_iface: Optional[str],
    if_addrs: Mapping[str, Sequence],
    if_stats: Optional[Mapping] = None,
) -> list[NetworkInterface]:
    """Describe the default-route interface, or every interface as fallback."""
    if_stats = if_stats or {}
    if default_iface and default_iface in if_addrs:
        return [_describe(default_iface, if_addrs[default_iface], if_stats)]
    return [_describe(name, addrs, if_stats) for name, addrs in if_addrs.items()]


class NetworkCollector(BaseCollector):
    name = "network"

    def __init__(self, route_table: Path = ROUTE_TABLE):
        self.route_table = route_table

    def _read_route_table(self) -> str:
        try:
            return self.route_table.read_text(encoding="utf-8")
        except OSError:
            return ""

    def _collect(self) -> dict:
        default_iface = parse_default_route(self._read_route_table())
        interfaces = select_interfaces(
            default_iface, psutil.net_if_addrs(), psutil.net_if_stats()
        )
        if default_iface and [i.name for i in interfaces] != [default_iface]:
            default_iface = None
        section = NetworkSection(default_interface=default_iface, interfaces=interfaces)
        return section.model_dump()

"""End-of-run collectors for hostmaint."""

from .memory import MemoryCollector
from .network import NetworkCollector
from .uptime import UptimeCollector

__all__ = ["MemoryCollector", "NetworkCollector", "UptimeCollector"]

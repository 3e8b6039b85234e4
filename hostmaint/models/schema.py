"""Pydantic v2 models shared across hostmaint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class KernelPackage(BaseModel):
    """An installed ``linux-image-*`` package as reported by dpkg."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: str = ""
    current: bool = False

    @property
    def fully_installed(self) -> bool:
        # dpkg status is "<want> <error> <state>", e.g. "install ok installed"
        parts = self.status.split()
        return len(parts) == 3 and parts[2] == "installed"


class UptimeInfo(BaseModel):
    last_boot: Optional[str] = None
    total_seconds: Optional[int] = None
    human_readable: Optional[str] = None


class MemoryInfo(BaseModel):
    total_mb: Optional[int] = None
    used_mb: Optional[int] = None
    available_mb: Optional[int] = None
    percent_used: Optional[float] = None
    swap_total_mb: Optional[int] = None
    swap_used_mb: Optional[int] = None


class NetworkInterface(BaseModel):
    name: str
    ip_addresses: list[str] = []
    ipv6_addresses: list[str] = []
    is_up: bool = False


class NetworkSection(BaseModel):
    default_interface: Optional[str] = None
    interfaces: list[NetworkInterface] = []


class RunSummary(BaseModel):
    hostname: str
    generated_at: str
    elapsed_seconds: int
    elapsed_human: str
    uptime: Optional[UptimeInfo] = None
    memory: Optional[MemoryInfo] = None
    network: Optional[NetworkSection] = None
    errors: list[str] = []

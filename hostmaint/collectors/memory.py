"""Collect RAM and swap usage via psutil."""

import psutil

from .base import BaseCollector

_MB = 1024 ** 2


class MemoryCollector(BaseCollector):
    name = "memory"

    def _collect(self) -> dict:
        ram = psutil.virtual_memory()
        swap = psutil.swap_memory()
        return {
            "total_mb": ram.total // _MB,
            "used_mb": ram.used // _MB,
            "available_mb": ram.available // _MB,
            "percent_used": ram.percent,
            "swap_total_mb": swap.total // _MB,
            "swap_used_mb": swap.used // _MB,
        }

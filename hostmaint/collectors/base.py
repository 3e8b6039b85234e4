"""Base classes for the end-of-run collectors.

Collectors never raise: a failure becomes an entry in ``errors`` so one
missing ``/proc`` file cannot hide the rest of the summary.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable


@dataclass
class CollectorResult:
    data: dict = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)


class BaseCollector(ABC):
    name: str = "base"

    @abstractmethod
    def _collect(self) -> dict:
        """Implement in subclass to return collected data."""
        ...

    def collect(self) -> CollectorResult:
        try:
            return CollectorResult(data=self._collect())
        except Exception as exc:  # noqa: BLE001
            return CollectorResult(errors=[f"{self.name}: {exc}"])


def run_collectors(collectors: Iterable[tuple[str, BaseCollector]]) -> tuple[dict, list[str]]:
    """Run ``(key, collector)`` pairs; return ``({key: data or None}, errors)``."""
    sections: dict = {}
    errors: list[str] = []
    for key, collector in collectors:
        result = collector.collect()
        errors.extend(result.errors)
        sections[key] = result.data or None
    return sections, errors

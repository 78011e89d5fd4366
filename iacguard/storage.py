"""In-memory storage of scanned files and found vulnerabilities."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class MemoryStorage:
    """Holds the results of a scan in memory."""

    vulnerabilities: list[Any] = field(default_factory=list)
    files: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        logger.debug("storage.MemoryStorage()")

    def save_file(self, metadata: Any) -> None:
        self.files.append(metadata)

    def get_files(self, scan_id: str) -> list[Any]:
        return list(self.files)

    def save_vulnerabilities(self, vulnerabilities: list[Any]) -> None:
        self.vulnerabilities.extend(vulnerabilities)

    def get_vulnerabilities(self, scan_id: str) -> list[Any]:
        return list(self.vulnerabilities)

    def get_scan_summary(self, scan_ids: list[str]) -> list[Any]:
        """Scan summaries are not kept in memory; the result is always empty."""
        logger.debug("storage.get_scan_summary(%s)", ", ".join(scan_ids))
        return []
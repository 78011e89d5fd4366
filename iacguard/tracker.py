"""Counters for queries and files handled during a scan."""

from dataclasses import dataclass

from iacguard.constants import MAXIMUM_PREVIEW_LINES, MINIMUM_PREVIEW_LINES


@dataclass
class CITracker:
    """Counts loaded and executed queries and found and parsed files."""

    loaded_queries: int = 0
    executing_queries: int = 0
    executed_queries: int = 0
    found_files: int = 0
    parsed_files: int = 0
    failed_similarity_id: int = 0
    output_lines: int = 0

    def track_query_load(self, count: int) -> None:
        self.loaded_queries += count

    def track_query_executing(self, count: int) -> None:
        self.executing_queries += count

    def track_query_execution(self, count: int) -> None:
        self.executed_queries += count

    def track_file_found(self) -> None:
        self.found_files += 1

    def track_file_parse(self) -> None:
        self.parsed_files += 1

    def failed_detect_line(self) -> None:
        """A query that fails to detect a line counts as not executed."""
        self.executed_queries -= 1

    def failed_compute_similarity_id(self) -> None:
        self.failed_similarity_id += 1


def new_tracker(preview_lines: int) -> CITracker:
    """Create a tracker that shows ``preview_lines`` lines per result."""
    if not MINIMUM_PREVIEW_LINES <= preview_lines <= MAXIMUM_PREVIEW_LINES:
        raise ValueError(
            f"output lines minimum is {MINIMUM_PREVIEW_LINES} "
            f"and maximum is {MAXIMUM_PREVIEW_LINES}"
        )
    return CITracker(output_lines=preview_lines)
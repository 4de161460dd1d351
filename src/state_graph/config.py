"""
Configuration for state graph construction.
"""

from dataclasses import dataclass
from typing import List


@dataclass
class GraphConfig:
    """Configuration for building the crossing state graph."""

    # Crossing time per person; list order fixes each person's index
    crossing_times: List[int]

    # Log a progress line every N processed nodes (0 disables)
    log_progress_every: int = 0

    def __post_init__(self):
        """Validate configuration."""
        self.crossing_times = list(self.crossing_times)

        for time_to_cross in self.crossing_times:
            if time_to_cross < 0:
                raise ValueError(
                    f"crossing times must be non-negative, got {time_to_cross}"
                )

        if self.log_progress_every < 0:
            raise ValueError("log_progress_every must be non-negative")

    @property
    def people_count(self) -> int:
        return len(self.crossing_times)

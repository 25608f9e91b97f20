"""
Data models for the compression engine.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """
    Verbatim source lines selected by one query capture.

    Attributes:
        content: Source lines start_row..end_row joined with newlines
        start_row: Zero-based first line
        end_row: Zero-based last line, inclusive
        capture_name: Query capture that produced the chunk
    """

    content: str
    start_row: int
    end_row: int
    capture_name: str = ""

    def __post_init__(self):
        if self.start_row > self.end_row:
            raise ValueError(
                f"Chunk start_row ({self.start_row}) must not exceed end_row ({self.end_row})"
            )

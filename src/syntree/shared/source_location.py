"""
Source Location

Position metadata carried by line markers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location of a statement.

    - Line is 1-based; file is optional (trees built in memory have none)
    - Immutable (frozen) for hashability
    """
    line: int
    file: Optional[str] = None

    def __str__(self) -> str:
        """Format as file:line, or line N when no file is known"""
        if self.file:
            return f"{self.file}:{self.line}"
        return f"line {self.line}"

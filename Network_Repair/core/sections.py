"""
Line classification for the section-structured INP format.

Every normalization stage looks at a document through ``classify_line`` so that
headers, comments and blank lines are recognised the same way everywhere.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from .config import COMMENT_PREFIX, HEADER_CLOSE, HEADER_OPEN

_LINE_BREAK = re.compile(r'\r?\n')


class LineKind(Enum):
    """Structural role of a single line."""
    HEADER = "header"
    DATA = "data"
    BLANK = "blank"
    COMMENT = "comment"


@dataclass(frozen=True)
class ClassifiedLine:
    """Result of classifying one line.

    Attributes:
        kind: Structural role of the line
        name: Uppercased section name for headers, None otherwise
        closed: True when a header line also ends with ']'
    """
    kind: LineKind
    name: Optional[str] = None
    closed: bool = False

    @property
    def is_header(self) -> bool:
        return self.kind is LineKind.HEADER

    @property
    def is_section_boundary(self) -> bool:
        """Only a complete ``[NAME]`` line starts a new section."""
        return self.kind is LineKind.HEADER and self.closed

    @property
    def is_substantive(self) -> bool:
        """Blank and comment lines never count as content."""
        return self.kind in (LineKind.HEADER, LineKind.DATA)


def classify_line(line: str) -> ClassifiedLine:
    """Classify a raw line as header, data, blank or comment."""
    stripped = line.strip()
    if not stripped:
        return ClassifiedLine(LineKind.BLANK)
    if stripped.startswith(COMMENT_PREFIX):
        return ClassifiedLine(LineKind.COMMENT)
    if stripped.startswith(HEADER_OPEN):
        closed = len(stripped) > 1 and stripped.endswith(HEADER_CLOSE)
        inner = stripped[1:-1] if closed else stripped[1:]
        return ClassifiedLine(LineKind.HEADER, name=inner.strip().upper(), closed=closed)
    return ClassifiedLine(LineKind.DATA)


def split_lines(text: str) -> List[str]:
    """Split a document on LF or CRLF line endings."""
    return _LINE_BREAK.split(text)


def join_lines(lines: List[str]) -> str:
    return "\n".join(lines)


def section_names(lines: List[str]) -> Set[str]:
    """Names of all complete section headers in a document."""
    names = set()
    for line in lines:
        info = classify_line(line)
        if info.is_section_boundary:
            names.add(info.name)
    return names


def find_section(lines: List[str], name: str) -> Optional[int]:
    """Index of the first complete header called ``name``, or None."""
    target = name.upper()
    for idx, line in enumerate(lines):
        info = classify_line(line)
        if info.is_section_boundary and info.name == target:
            return idx
    return None

#!/usr/bin/env python3
"""
INP Normalization Pipeline.

Repairs an EPANET input document before it is handed to the solver:

1. Pipe-record repair: every [PIPES] record is rewritten to 8 columns
   (ID Node1 Node2 Length Diameter Roughness MinorLoss Status).
2. Empty-section pruning: sections with no data lines are dropped.
3. Mandatory-section insertion: [OPTIONS], [REPORT], [TIMES] and [ENERGY]
   stubs are added before [END] when missing.

Each stage is a pure text -> text function; ``normalize_inp`` chains them.
None of them raise: odd input is passed through or repaired best-effort.
"""

import logging
from typing import List, Sequence, Union

from .config import (
    AUTO_COMMENT,
    COMMENT_PREFIX,
    END_SECTION,
    MANDATORY_SECTIONS,
    PIPE_FIELD_DEFAULTS,
    PIPES_SECTION,
    ROUGHNESS_DEFAULT,
)
from .sections import (
    LineKind,
    classify_line,
    find_section,
    join_lines,
    section_names,
    split_lines,
)

logger = logging.getLogger(__name__)

Roughness = Union[float, int, str]


# =============================================================================
# Stage 1: Pipe-Record Repair
# =============================================================================

def format_roughness(value: Roughness) -> str:
    """Render a roughness value the way it is written in an INP file."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def pipe_defaults(default_roughness: Roughness = ROUGHNESS_DEFAULT) -> List[str]:
    """Resolve the positional [PIPES] defaults against a roughness value."""
    roughness = format_roughness(default_roughness)
    return [roughness if d is None else d for d in PIPE_FIELD_DEFAULTS]


def rebuild_pipe_record(line: str, defaults: Sequence[str]) -> str:
    """Rewrite one [PIPES] record to exactly len(defaults) fields.

    Tokens are positional; any missing trailing column takes its default.
    An inline ';' comment is dropped so it is never mistaken for a column.
    """
    data = line.split(COMMENT_PREFIX, 1)[0]
    tokens = data.split()
    fields = [tokens[i] if i < len(tokens) else default for i, default in enumerate(defaults)]
    return " ".join(fields)


def repair_pipe_records(text: str, default_roughness: Roughness = ROUGHNESS_DEFAULT) -> str:
    """Give every data line of the [PIPES] section all 8 columns.

    Any line starting with '[' ends the current section; the [PIPES] flag is
    set only by a complete ``[PIPES]`` header. Blank lines, comments and
    everything outside [PIPES] pass through untouched.
    """
    defaults = pipe_defaults(default_roughness)
    result: List[str] = []
    in_pipes = False
    changed = 0

    for line in split_lines(text):
        info = classify_line(line)

        if info.is_header:
            in_pipes = info.closed and info.name == PIPES_SECTION
            result.append(line)
            continue

        if in_pipes and info.kind is LineKind.DATA:
            fixed = rebuild_pipe_record(line, defaults)
            if fixed != line:
                changed += 1
            line = fixed

        result.append(line)

    logger.debug(f"Pipe repair: rewrote {changed} [PIPES] record(s)")
    return join_lines(result)


# =============================================================================
# Stage 2: Empty-Section Pruning
# =============================================================================

def is_populated(section: Sequence[str]) -> bool:
    """A buffered section (header included) is kept only with >1 substantive lines."""
    substantive = sum(1 for line in section if classify_line(line).is_substantive)
    return substantive > 1


def prune_empty_sections(text: str) -> str:
    """Drop every section that has no data line besides its header.

    Scans with two states: before the first header, lines go straight to the
    output; afterwards they are buffered per section and the buffer is
    committed or discarded when the next header arrives. The [END] marker and
    everything after it are committed as-is.
    """
    lines = split_lines(text)
    output: List[str] = []
    section: List[str] = []
    buffering = False
    pruned: List[str] = []

    for pos, line in enumerate(lines):
        info = classify_line(line)

        if not info.is_section_boundary:
            if buffering:
                section.append(line)
            else:
                output.append(line)
            continue

        if buffering:
            if is_populated(section):
                output.extend(section)
            else:
                pruned.append(section[0].strip())

        if info.name == END_SECTION:
            output.extend(lines[pos:])
            buffering = False
            break

        section = [line]
        buffering = True

    if buffering:
        if is_populated(section):
            output.extend(section)
        else:
            pruned.append(section[0].strip())

    if pruned:
        logger.debug(f"Pruned {len(pruned)} empty section(s): {', '.join(pruned)}")
    return join_lines(output)


# =============================================================================
# Stage 3: Mandatory-Section Insertion
# =============================================================================

def stub_section(name: str) -> List[str]:
    """Lines of an auto-generated placeholder section."""
    return [f"[{name}]", AUTO_COMMENT, ""]


def ensure_mandatory_sections(text: str) -> str:
    """Insert a stub for each missing mandatory section right before [END].

    Existing sections are never touched. Without an [END] header there is no
    place to insert, and the document is returned as it is.
    """
    lines = split_lines(text)
    end_index = find_section(lines, END_SECTION)
    if end_index is None:
        logger.debug("No [END] marker found; mandatory sections not inserted")
        return join_lines(lines)

    present = section_names(lines)
    missing = [name for name in MANDATORY_SECTIONS if name not in present]
    if not missing:
        return join_lines(lines)

    stubs: List[str] = []
    for name in missing:
        stubs.extend(stub_section(name))

    logger.debug(f"Inserted mandatory section(s): {', '.join(missing)}")
    return join_lines(lines[:end_index] + stubs + lines[end_index:])


# =============================================================================
# Pipeline
# =============================================================================

def normalize_inp(text: str, default_roughness: Roughness = ROUGHNESS_DEFAULT) -> str:
    """Repair [PIPES] records, prune empty sections, then add mandatory stubs.

    The order matters: pruning sees the repaired [PIPES] content, and the
    inserted stubs are never themselves pruned.

    Args:
        text: Raw INP document
        default_roughness: Roughness for [PIPES] records missing that column

    Returns:
        The normalized document, lines joined with '\\n'
    """
    repaired = repair_pipe_records(text, default_roughness)
    pruned = prune_empty_sections(repaired)
    return ensure_mandatory_sections(pruned)

"""
Configuration settings for INP normalization and the EPANET solver run.
This file serves as the single source of truth for format constants and defaults.
"""
from typing import Final, Optional, Tuple

# Output naming
OUTPUT_SUFFIX: Final[str] = "_fixed"
INP_EXTENSION: Final[str] = ".inp"

# Roughness
# Hazen-Williams C used when a [PIPES] record has no roughness column.
ROUGHNESS_DEFAULT: Final[float] = 100.0

# INP Structure
COMMENT_PREFIX: Final[str] = ";"
HEADER_OPEN: Final[str] = "["
HEADER_CLOSE: Final[str] = "]"
PIPES_SECTION: Final[str] = "PIPES"
END_SECTION: Final[str] = "END"

# [PIPES] column layout: ID Node1 Node2 Length Diameter Roughness MinorLoss Status
# Positional fallbacks for missing trailing columns.
# None is resolved to the caller's default roughness.
PIPE_FIELD_DEFAULTS: Final[Tuple[Optional[str], ...]] = (
    "", "", "", "0", "100", None, "0.0", "Open",
)

# Sections the solver refuses to run without, inserted in this order
MANDATORY_SECTIONS: Final[Tuple[str, ...]] = ("OPTIONS", "REPORT", "TIMES", "ENERGY")
AUTO_COMMENT: Final[str] = "; (auto)"

# Solver files, written inside a per-run temporary directory
SOLVER_INPUT_FILE: Final[str] = "network.inp"
SOLVER_REPORT_FILE: Final[str] = "network.rpt"
SOLVER_OUTPUT_FILE: Final[str] = "network.bin"
# Complete network as rewritten by EPANET, with every option spelled out
SOLVER_SAVED_FILE: Final[str] = "network_saved.inp"

# Unit Conversions (WNTR reports SI units)
LPS_TO_M3S: Final[float] = 0.001
MM_TO_M: Final[float] = 0.001

#!/usr/bin/env python3
"""
Normalize EPANET INP files before handing them to the solver.

Command-line script that repairs [PIPES] records, prunes empty sections and
adds missing mandatory sections. Optionally solves the result and prints the
pipe report.

Usage:
    python -m Network_Repair.tools.run_normalizer network.inp
    python -m Network_Repair.tools.run_normalizer networks/ -o fixed/ --roughness 120
    python -m Network_Repair.tools.run_normalizer network.inp --solve --pipes-only
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).resolve().parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from Network_Repair.core.config import ROUGHNESS_DEFAULT
from Network_Repair.core.data_utils import (
    list_inp_files,
    load_inp_text,
    output_path_for,
    write_inp_text,
)
from Network_Repair.core.normalize import normalize_inp
from Network_Repair.core.report import format_pipe_report


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )


def positive_float(value: str) -> float:
    """argparse type for the default roughness."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Repair EPANET INP files for the hydraulic solver',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        'inputs',
        nargs='+',
        type=Path,
        help='INP files or directories containing INP files'
    )

    # Output
    parser.add_argument(
        '--output-dir', '-o',
        type=Path,
        default=None,
        help='Directory for normalized files (default: next to each input)'
    )

    parser.add_argument(
        '--stdout',
        action='store_true',
        help='Print normalized documents instead of writing files'
    )

    # Normalization
    parser.add_argument(
        '--roughness', '-r',
        type=positive_float,
        default=ROUGHNESS_DEFAULT,
        help='Roughness for [PIPES] records missing that column'
    )

    # Solver
    parser.add_argument(
        '--solve', '-s',
        action='store_true',
        help='Run the EPANET solver on each normalized file and print the pipe report'
    )

    parser.add_argument(
        '--pipes-only',
        action='store_true',
        help='Report pipes only (no pumps or valves)'
    )

    # Misc
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose logging'
    )

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    engine = None
    if args.solve:
        from Network_Repair.core.engine import SolverEngine
        engine = SolverEngine(default_roughness=args.roughness)

    try:
        files = []
        for item in args.inputs:
            files.extend(list_inp_files(item))
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1

    if not files:
        logger.error("No .inp files found in the given inputs")
        return 1

    # Print header
    if not args.stdout:
        print("=" * 70)
        print("   INP NORMALIZATION")
        print("=" * 70)
        print(f"  Files:        {len(files)}")
        print(f"  Roughness:    {args.roughness:g}")
        print(f"  Output:       {args.output_dir or 'next to input'}")
        print(f"  Solve:        {args.solve}")
        print("=" * 70)

    failures = 0
    for path in files:
        try:
            normalized = normalize_inp(load_inp_text(path), args.roughness)

            if args.stdout:
                print(normalized)
            else:
                target = write_inp_text(normalized, output_path_for(path, args.output_dir))
                print(f"  ✓ {path} -> {target}")

            if engine is not None:
                # Already normalized above
                report = engine.run(normalized, normalize=False)
                print()
                print(format_pipe_report(report, pipes_only=args.pipes_only))
                print()
                if not report.success:
                    failures += 1

        except OSError as e:
            logger.error(f"Could not process {path}: {e}")
            failures += 1
        except Exception as e:
            logger.error(f"Unexpected failure on {path}: {e}", exc_info=True)
            failures += 1

    if failures:
        logger.warning(f"{failures} of {len(files)} file(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

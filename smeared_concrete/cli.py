"""
Command-line interface for smeared-concrete.

Usage:
  smeared-concrete run <input_file> [-o <output_file>] [--format json|csv] [-q] [-v]
  smeared-concrete info <input_file>
  smeared-concrete --version

Examples:
  # Drive a uniaxial MCFT point through a strain history
  smeared-concrete run bar.json -o results.json

  # Same, as a CSV step table
  smeared-concrete run panel.json --format csv -o panel.csv

  # Print the derived material parameters
  smeared-concrete info panel.json
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict

from smeared_concrete import __version__
from smeared_concrete.analysis.history import StrainHistoryAnalysis
from smeared_concrete.io.json_io import load_json_input, save_json_output, write_csv
from smeared_concrete.materials.concrete import BiaxialConcrete, UniaxialConcrete

SUPPORTED_ANALYSES = ("uniaxial", "biaxial")

BANNER = f"""\
 ╔══════════════════════════════════════════════════════╗
 ║  smeared-concrete v{__version__}                             ║
 ║  Smeared-crack concrete constitutive laws            ║
 ║  MCFT, DSFM, SMM and linear-elastic                  ║
 ╚══════════════════════════════════════════════════════╝
"""


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="smeared-concrete",
        description="Concrete constitutive laws for smeared-crack analysis",
    )
    parser.add_argument("--version", action="version", version=f"smeared-concrete {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    # --- run ---
    run_parser = subparsers.add_parser("run", help="Run a strain-history analysis")
    run_parser.add_argument("input_file", help="Input file (.json)")
    run_parser.add_argument("-o", "--output", help="Output file", default=None)
    run_parser.add_argument(
        "--format", choices=["json", "csv"], default="json",
        help="Output format (default: json)"
    )
    run_parser.add_argument("--quiet", "-q", action="store_true", help="Suppress banner")
    run_parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    # --- info ---
    info_parser = subparsers.add_parser("info", help="Show material information")
    info_parser.add_argument("input_file", help="Input file (.json)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "info":
        return _cmd_info(args)

    if args.command == "run":
        return _cmd_run(args)

    return 0


def _load_input(filepath: str) -> Dict[str, Any]:
    p = Path(filepath)
    if not p.exists():
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        sys.exit(1)
    return load_json_input(p)


def _cmd_info(args) -> int:
    """Print material information."""
    config = _load_input(args.input_file)
    p = config["parameters"]

    print(BANNER)
    print(f"Input file: {args.input_file}")
    print(f"Units: {config['units']}")
    print()
    print("Concrete Parameters:")
    print(f"  Calculator:       {p.model.value}")
    print(f"  fc:               {p.fc:.2f} MPa")
    print(f"  ft:               {p.ft:.3f} MPa")
    print(f"  Ec:               {p.Ec:.1f} MPa")
    print(f"  ec:               {p.ec:.5f}")
    print(f"  ecu:              {p.ecu:.5f}")
    print(f"  ecr:              {p.ecr:.3e}")
    print(f"  Gf:               {p.Gf:.4f} N/mm")
    print(f"  Confinement:      {'yes' if p.consider_confinement else 'no'}")

    reinforcement = config["reinforcement"]
    if reinforcement is not None:
        print()
        print(f"Reinforcement: {reinforcement.to_dict()['type']}")

    print()
    print(f"Constitutive model: {config['model']}")
    print(f"Analysis type: {config['analysis_type']}")
    print(f"Steps: {len(config['history'])}")
    return 0


def _cmd_run(args) -> int:
    """Run the analysis."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if not args.quiet:
        print(BANNER, file=sys.stderr)

    config = _load_input(args.input_file)
    analysis_type = config["analysis_type"]
    analysis_params = config.get("analysis_params", {})
    parameters = config["parameters"]

    if analysis_type not in SUPPORTED_ANALYSES:
        print(
            f"Error: analysis type '{analysis_type}' is not supported.\n"
            f"Currently supported: {', '.join(SUPPORTED_ANALYSES)}",
            file=sys.stderr,
        )
        return 1

    # Build material point
    if analysis_type == "uniaxial":
        material = UniaxialConcrete(
            parameters,
            area=analysis_params.get("area", 1.0),
            model=config["model"],
            consider_crack_slip=config["consider_crack_slip"],
        )
    else:
        material = BiaxialConcrete(
            parameters,
            model=config["model"],
            consider_crack_slip=config["consider_crack_slip"],
        )

    analysis = StrainHistoryAnalysis(
        material,
        config["history"],
        reinforcement=config["reinforcement"],
        reference_length=analysis_params.get("reference_length"),
        xy=config["xy"],
    )

    if not args.quiet:
        print(f"Running {analysis_type} strain-history analysis...", file=sys.stderr)
        print(f"  Constitutive model: {material.model.value}", file=sys.stderr)
        print(f"  fc: {parameters.fc:.2f} MPa", file=sys.stderr)
        print(f"  Steps: {len(analysis.history)}", file=sys.stderr)

    t0 = time.perf_counter()
    result = analysis.run()
    elapsed = time.perf_counter() - t0

    if not args.quiet:
        print(f"  Completed in {elapsed:.3f}s ({len(result.points)} steps)", file=sys.stderr)
        if result.cracking_index is not None:
            print(f"  Cracked at step:  {result.cracking_index}", file=sys.stderr)
        if result.crushing_index is not None:
            print(f"  Crushed at step:  {result.crushing_index}", file=sys.stderr)

    # Output
    output_file = args.output
    if output_file is None:
        suffix = ".csv" if args.format == "csv" else ".json"
        output_file = Path(args.input_file).stem + "_results" + suffix

    if args.format == "csv":
        write_csv(result, output_file)
    else:
        save_json_output(
            result.to_dict(),
            output_file,
            input_file=args.input_file,
            analysis_type=analysis_type,
            material={
                "constitutive_model": material.model.value,
                "parameters": parameters.to_dict(),
                "reinforcement": config["reinforcement"],
            },
            computation_time=elapsed,
        )

    if not args.quiet:
        print(f"  Results written to: {output_file}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())

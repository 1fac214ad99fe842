"""
Command-line interface for batch quality assessment.

Usage:
    python -m ingest_engine.cli.quality_cli assess --input <records.json> [options]
    python -m ingest_engine.cli.quality_cli standardize --input <records.json> [--output <out.json>]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from ingest_engine.config import build_assessor, build_standardizer, load_settings
from ingest_engine.core.rules import RuleConfigLoader
from ingest_engine.observability.logger import get_logger, log_operation, setup_logger
from ingest_engine.observability.metrics import start_metrics_server


logger = get_logger(__name__)


class InputError(Exception):
    """Raised when the input file cannot be read as a list of records."""


def load_records(path: str) -> list:
    """
    Read a JSON array of records (or an object with a "records" array).

    Raises:
        InputError: If the file is missing, unreadable or not a record list
    """
    input_path = Path(path)
    if not input_path.exists():
        raise InputError(f"Input file not found: {path}")

    try:
        with open(input_path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InputError(f"Could not read {path}: {e}")

    if isinstance(payload, dict) and isinstance(payload.get("records"), list):
        payload = payload["records"]
    if not isinstance(payload, list):
        raise InputError(f"{path} must contain a JSON array of records")
    return payload


def _emit(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def assess_command(args) -> int:
    """
    Execute the assess command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    settings = load_settings(args.config)
    records = load_records(args.input)
    rules = RuleConfigLoader(args.rules).load_rules() if args.rules else None
    assessor = build_assessor(settings, rules)

    with log_operation("Assessing batch", logger=logger, record_count=len(records)):
        report = asyncio.run(assessor.build_report(records))

    if args.report:
        _emit(report.model_dump(mode="json", exclude={"validation_results": {"__all__": {"record"}}}))
    else:
        _emit(report.metrics.model_dump(mode="json"))
    return 0


def standardize_command(args) -> int:
    """Execute the standardize command."""
    settings = load_settings(args.config)
    records = load_records(args.input)
    standardized, report = build_standardizer(settings).standardize(records)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(standardized, f, indent=2, default=str)
        logger.info(f"Wrote {len(standardized)} standardized records to {args.output}")
    else:
        _emit({"records": standardized})

    _emit(report.model_dump() | {"total_changes": report.total_changes})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Data quality assessment for ingested records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Assess a batch with the default rule set
  python -m ingest_engine.cli.quality_cli assess --input data/records.json

  # Assess with custom rules and print the full report
  python -m ingest_engine.cli.quality_cli assess --input data/records.json \\
      --rules config/validation_rules.yaml --report

  # Standardize country, date and category fields
  python -m ingest_engine.cli.quality_cli standardize --input data/records.json \\
      --output data/records.clean.json
        """
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to engine settings YAML (default: $INGEST_ENGINE_CONFIG)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level"
    )
    parser.add_argument(
        "--metrics-port",
        type=int,
        default=None,
        help="Expose Prometheus metrics on this port while running"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    assess_parser = subparsers.add_parser("assess", help="Assess the quality of a batch")
    assess_parser.add_argument(
        "--input",
        required=True,
        help="Path to a JSON file holding an array of records"
    )
    assess_parser.add_argument(
        "--rules",
        default=None,
        help="Path to validation rules YAML file (default: configured or built-in rules)"
    )
    assess_parser.add_argument(
        "--report",
        action="store_true",
        help="Print the full report (per-record detail, duplicates, recommendations)"
    )

    standardize_parser = subparsers.add_parser("standardize", help="Standardize a batch")
    standardize_parser.add_argument(
        "--input",
        required=True,
        help="Path to a JSON file holding an array of records"
    )
    standardize_parser.add_argument(
        "--output",
        default=None,
        help="Write standardized records here instead of stdout"
    )

    return parser


COMMANDS = {
    "assess": assess_command,
    "standardize": standardize_command,
}


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.log_level:
        setup_logger(level=args.log_level)

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    try:
        return COMMANDS[args.command](args)
    except InputError as e:
        logger.error(str(e))
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())

# main.py

"""Entry point for the basketcheck command-line tool."""

import argparse
import logging
import sys

from basketcheck.config.logging_config import setup_logging
from basketcheck.config.settings import Settings

logger = logging.getLogger("basketcheck.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="basketcheck",
        description="Personal inflation tracker for your own basket.",
    )
    parser.add_argument(
        "--db",
        default=None,
        dest="db_path",
        help=f"SQLite database path (default: {Settings.DB_PATH}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also show INFO log messages on stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print the inflation report.")
    report.add_argument(
        "-m",
        "--months",
        type=int,
        default=Settings.FORECAST_MONTHS,
        help="Forecast horizon in months (default: %(default)s).",
    )

    add = sub.add_parser("add-product", help="Add a product to track.")
    add.add_argument("name")
    add.add_argument("-c", "--category", default="")
    add.add_argument("-u", "--unit", default=Settings.DEFAULT_UNIT)

    log = sub.add_parser("log-price", help="Log a price for a product.")
    log.add_argument("product_id")
    log.add_argument("price", type=float)
    log.add_argument(
        "-d", "--date", default=None, help="ISO date (default: now).",
    )

    export = sub.add_parser("export-csv", help="Write a CSV backup.")
    export.add_argument(
        "-o", "--output", default=None, dest="output_dir",
        help=f"Output directory (default: {Settings.EXPORTS_DIR}).",
    )

    imp = sub.add_parser("import-csv", help="Import a CSV backup.")
    imp.add_argument("csv_path")

    prefs = sub.add_parser(
        "settings", help="Show or change salary, budget and currency.",
    )
    prefs.add_argument("--salary", type=float, default=None)
    prefs.add_argument("--budget", type=float, default=None)
    prefs.add_argument(
        "--currency", default=None, help="ISO code, e.g. EUR.",
    )

    sub.add_parser("sample-data", help="Load a demo basket.")

    chart = sub.add_parser("chart", help="Export an HTML chart.")
    chart.add_argument("kind", choices=["cpi", "forecast", "history"])
    chart.add_argument(
        "product_id", nargs="?", default=None,
        help="Product to plot (history only).",
    )
    chart.add_argument(
        "--no-browser",
        action="store_false",
        dest="open_browser",
        help="Do not open the chart in a browser.",
    )
    return parser


def _dispatch(args: argparse.Namespace) -> int:
    """Run the selected subcommand and return its exit code."""
    from basketcheck.cli import runner

    if args.command == "report":
        return runner.run_report(args.db_path, args.months)
    if args.command == "add-product":
        return runner.run_add_product(
            args.db_path, args.name, args.category, args.unit,
        )
    if args.command == "log-price":
        return runner.run_log_price(
            args.db_path, args.product_id, args.price, args.date,
        )
    if args.command == "export-csv":
        return runner.run_export_csv(args.db_path, args.output_dir)
    if args.command == "import-csv":
        return runner.run_import_csv(args.db_path, args.csv_path)
    if args.command == "settings":
        return runner.run_settings(
            args.db_path, args.salary, args.budget, args.currency,
        )
    if args.command == "sample-data":
        return runner.run_sample_data(args.db_path)
    return runner.run_chart(
        args.db_path, args.kind, args.open_browser, args.product_id,
    )


def main() -> None:
    """Parse arguments and route to the matching command."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(verbose=args.verbose)
    logger.info("basketcheck %s, log file: %s", args.command, log_file)

    try:
        exit_code = _dispatch(args)
    except Exception:
        logger.critical("Fatal error in %s", args.command, exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

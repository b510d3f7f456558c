#!/usr/bin/env python3
"""
Scan an authentication log for brute force, targeted accounts and
successful logins from brute-force sources, then write a text report.
"""
import argparse
import logging
import sys

from authscan import config
from authscan.alerting import Alerting
from authscan.analyzer import Analyzer
from authscan.report import write_report, write_json

logger = logging.getLogger("authscan")


def positive_int(value):
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return n


def build_parser():
    parser = argparse.ArgumentParser(description="Detect suspicious patterns in an authentication log.")
    parser.add_argument("input", nargs="?", default=config.DEFAULT_INPUT, help="Auth log to scan")
    parser.add_argument("output", nargs="?", default=config.DEFAULT_OUTPUT, help="Report file to write")
    parser.add_argument("--ip-threshold", type=positive_int, default=None,
                        help=f"Failures per ip within the window (default {config.IP_FAIL_THRESHOLD})")
    parser.add_argument("--window", type=positive_int, default=None,
                        help=f"Rolling window in minutes (default {config.WINDOW_MINUTES})")
    parser.add_argument("--user-threshold", type=positive_int, default=None,
                        help=f"Total failures per user (default {config.USER_FAIL_THRESHOLD})")
    parser.add_argument("--json", metavar="PATH", help="Also write the findings as JSON")
    parser.add_argument("--notify", action="store_true", help="Send alerts via email/Slack when configured")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def scan(path, analyzer):
    """Run the analyzer over the file at `path`. Read errors propagate."""
    alerts = []
    with open(path, "r", encoding="utf-8") as f:
        snapshot = analyzer.run(f, on_alert=alerts.append)
    return snapshot, alerts


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        analyzer = Analyzer(
            ip_threshold=args.ip_threshold,
            window_minutes=args.window,
            user_threshold=args.user_threshold,
        )
    except ValueError as e:
        print(f"Configuration error: {e}")
        return 1

    try:
        snapshot, alerts = scan(args.input, analyzer)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {args.input}: {e}")
        return 1

    logger.info("Scanned %s: %d events, %d malformed, %d alerts",
                args.input, snapshot.events, snapshot.malformed, len(alerts))

    if args.notify:
        alerting = Alerting()
        for alert in alerts:
            alerting.send(alert)

    try:
        write_report(snapshot, args.input, args.output)
        if args.json:
            write_json(snapshot, args.json)
    except OSError as e:
        print(f"Error writing output file: {e.filename or args.output}: {e.strerror or e}")
        return 1

    print(f"Done. Report written to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

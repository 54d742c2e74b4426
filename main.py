#!/usr/bin/env python3
"""Traffic Monitor - Entry point"""

import argparse
import io
import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from traffic_monitor import VERSION, MonitorConfig, TrafficMonitor

console = Console(stderr=True, soft_wrap=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Traffic Monitor - HTTP access log traffic monitor",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument("-f", "--file", default="-",
                        help="File to read common log formatted lines from (- for stdin)")
    parser.add_argument("-o", "--out", default="-",
                        help="File to write status to (- for stdout)")
    parser.add_argument("--update-interval", default="10s",
                        help="How often to print the busiest sections, e.g. 10s (0 disables)")
    parser.add_argument("--threshold-interval", default="2m",
                        help="How often to check for high traffic, e.g. 2m (0 disables)")
    parser.add_argument("--threshold-value", default="10",
                        help="Number of hits per threshold interval that triggers the warning")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output on stderr")
    parser.add_argument("--version", action="version", version=f"TrafficMonitor v{VERSION}")
    return parser


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = MonitorConfig(
            update_interval=args.update_interval,
            high_traffic_interval=args.threshold_interval,
            high_traffic_threshold=args.threshold_value,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/]\n{escape(str(e))}")
        return 1

    input_file = output_file = stdin_wrapper = None
    try:
        if args.file == "-":
            # same decoding policy as files; detached below so sys.stdin stays open
            input_stream = stdin_wrapper = io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', errors='ignore')
        else:
            input_stream = input_file = open(args.file, 'r', encoding='utf-8', errors='ignore')

        if args.out == "-":
            output = sys.stdout
        else:
            output = output_file = open(args.out, 'w', encoding='utf-8')

        TrafficMonitor(config, output).run(input_stream)

    except OSError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        return 1
    finally:
        if stdin_wrapper is not None:
            stdin_wrapper.detach()
        if input_file:
            input_file.close()
        if output_file:
            output_file.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())

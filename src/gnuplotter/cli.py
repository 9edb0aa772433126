#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Maurice Garcia

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from gnuplotter.config.config_manager import ConfigManager
from gnuplotter.config.log_config import LoggerConfigurator
from gnuplotter.config.plotter_config_settings import PlotterConfigSettings
from gnuplotter.lib.errors import PlotterError
from gnuplotter.plotter import Plotter
from gnuplotter.version import __version__ as GNUPLOTTER_VERSION

DEMO_OUTPUT_DEFAULT = "plot001.pdf"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Drive a gnuplot subprocess from the command line."
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"{GNUPLOTTER_VERSION}",
        help="Show gnuplotter version and exit.",
    )

    parser.add_argument("--config", help="Path to a JSON config file (default: packaged settings/system.json)")
    parser.add_argument("--persist", action="store_true", default=None, help="Run gnuplot with -persist.")
    parser.add_argument("--debug", action="store_true", default=None, help="Echo every command sent to gnuplot.")
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level (default: from config).",
    )
    parser.add_argument("--log-file", action="store_true", help="Also write logs to the configured log directory.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser("demo", help="Plot two functions and save the result as PDF.")
    demo.add_argument("--output", default=DEMO_OUTPUT_DEFAULT, help=f"PDF file to write (default: {DEMO_OUTPUT_DEFAULT})")

    cmd = subparsers.add_parser("cmd", help="Send raw gnuplot commands, one per argument.")
    cmd.add_argument("lines", nargs="+", help="Command lines sent verbatim.")

    return parser


def run_demo(plotter: Plotter, output: str) -> None:
    plotter.checked_cmd("plot %f*x", 23.0)
    plotter.checked_cmd("plot %f * cos(%f * x)", 32.0, -3.0)
    plotter.checked_cmd("set terminal pdf")
    plotter.checked_cmd("set output '%s'", output)
    plotter.checked_cmd("replot")
    plotter.checked_cmd("q")


def run_cmd(plotter: Plotter, lines: Sequence[str]) -> None:
    for line in lines:
        plotter.cmd(line)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config:
        PlotterConfigSettings.use(ConfigManager(config_path=args.config))

    level = (args.log_level or PlotterConfigSettings.log_level()).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    if args.log_file:
        LoggerConfigurator(PlotterConfigSettings.log_dir(),
                           PlotterConfigSettings.log_filename(),
                           level)

    persist = PlotterConfigSettings.persist() if args.persist is None else args.persist
    debug = PlotterConfigSettings.debug() if args.debug is None else args.debug

    try:
        with Plotter(persist=persist, debug=debug,
                     executable=PlotterConfigSettings.executable(),
                     tmp_prefix=PlotterConfigSettings.tmp_prefix(),
                     style=PlotterConfigSettings.default_style()) as plotter:
            if args.command == "demo":
                run_demo(plotter, args.output)
            elif args.command == "cmd":
                run_cmd(plotter, args.lines)
    except PlotterError as exc:
        print(f"** err: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""CLI entry point."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .config import DEFAULT_CONFIG_PATH, Config, load_config_or_default, save_config
from .controller import AnalysisController
from .errors import FileValidationError
from .logging_utils import add_console_handler, setup_logging
from .models import AppStatus, ProcessingState
from .renderer import render_analysis
from .session_io import load_analysis
from .storage import save_report


def _print_state(state: ProcessingState) -> None:
    if state.busy and state.message:
        print(state.message, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="briefly")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config.")
    parser.add_argument("--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command")

    analyze_cmd = sub.add_parser("analyze")
    analyze_cmd.add_argument("media_path", help="Path to audio or video file.")
    analyze_cmd.add_argument("--model", help="Gemini model id.")
    analyze_cmd.add_argument(
        "--json", action="store_true", help="Print the raw analysis as JSON."
    )
    analyze_cmd.add_argument(
        "--save", action="store_true", help="Write the report and analysis JSON."
    )
    analyze_cmd.add_argument("--output-dir", help="Base output directory.")

    show_cmd = sub.add_parser("show")
    show_cmd.add_argument("path", help="Path to .analysis.json")

    config_cmd = sub.add_parser("config")
    config_cmd.add_argument("action", choices=["init", "show"])
    config_cmd.add_argument("--path", help="Config file to write or read.")

    sub.add_parser("gui")

    args = parser.parse_args(argv)

    if args.command == "config":
        path = args.path or args.config
        if args.action == "init":
            if os.path.exists(path):
                print(f"Config already exists: {path}")
                return 1
            save_config(path, Config())
            print(f"Wrote {path}")
            return 0
        cfg = load_config_or_default(path)
        print(f"Model: {cfg.api.model}")
        print(f"API key: {'set' if cfg.resolve_api_key() else 'missing'}")
        print(f"Inline threshold (bytes): {cfg.upload.inline_threshold_bytes}")
        print(f"Max file size (bytes): {cfg.upload.max_file_bytes}")
        print(
            f"Polling: every {cfg.upload.poll_interval_s}s, "
            f"max {cfg.upload.poll_max_attempts} attempts"
        )
        return 0

    if args.command == "show":
        analysis = load_analysis(args.path)
        print(render_analysis(analysis))
        return 0

    if args.command == "analyze":
        cfg = load_config_or_default(args.config)
        if args.model:
            cfg.api.model = args.model
        level = logging.DEBUG if (args.verbose or cfg.debug_logging) else logging.INFO
        logger, _log_path = setup_logging(log_dir=cfg.log_dir, level=level)
        if args.verbose:
            add_console_handler(logger, logging.DEBUG)

        controller = AnalysisController(cfg)
        controller.subscribe(_print_state)
        try:
            state = controller.run(args.media_path)
        except FileValidationError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        if state.status == AppStatus.ERROR:
            print(f"Analysis failed: {state.message}", file=sys.stderr)
            return 1

        analysis = controller.analysis
        source_name = os.path.basename(args.media_path)
        report = render_analysis(analysis, source_name=source_name)
        if args.json:
            print(json.dumps(analysis.to_dict(), indent=2))
        else:
            print(report)
        if args.save:
            report_path, analysis_path = save_report(
                args.output_dir or cfg.output_dir, analysis, report
            )
            print(f"Report saved: {report_path}", file=sys.stderr)
            print(f"Analysis saved: {analysis_path}", file=sys.stderr)
        return 0

    if args.command == "gui":
        from .gui import launch_gui

        launch_gui(args.config)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

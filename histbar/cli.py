from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from histbar.analysis.binning import HistogramError, build_histogram
from histbar.analysis.plots import present_histogram
from histbar.infra.config import ConfigError, resolve_config
from histbar.infra.config_schema import ConfigValidationError
from histbar.infra.env import env_overrides, load_dotenv
from histbar.infra.logging import configure_logging


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="histbar",
        description="Read numbers (one per line) and print a text histogram.",
    )
    parser.add_argument("input", nargs="?", default="-", help="input file; '-' reads stdin")
    parser.add_argument("-b", "--bin", type=float, dest="bin_width", help="bin width")
    parser.add_argument("-l", "--bar-length", type=int, help="length of the longest bar")
    parser.add_argument("--max-bins", type=int)
    parser.add_argument("--format", choices=["text", "json"], dest="output_format")
    parser.add_argument("--config")
    parser.add_argument("--set", action="append", dest="overrides")
    parser.add_argument("--log-level")
    return parser


def _flag_overrides(args: argparse.Namespace) -> list[str]:
    overrides = list(args.overrides or [])
    if args.bin_width is not None:
        overrides.append(f"histogram.bin_width={args.bin_width!r}")
    if args.bar_length is not None:
        overrides.append(f"histogram.bar_length={args.bar_length}")
    if args.max_bins is not None:
        overrides.append(f"histogram.max_bins={args.max_bins}")
    if args.output_format is not None:
        overrides.append(f"output.format={args.output_format}")
    if args.log_level is not None:
        overrides.append(f"logging.level={args.log_level}")
    return overrides


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _render(config: dict[str, Any], text: str) -> str:
    histogram_config = config["histogram"]
    histogram = build_histogram(
        text,
        histogram_config.get("bin_width"),
        max_bins=histogram_config.get("max_bins"),
    )
    if config["output"]["format"] == "json":
        return json.dumps(histogram.to_dict(), indent=2)
    return present_histogram(histogram, float(histogram_config["bar_length"]))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        config = resolve_config(
            config_path=args.config,
            env_overrides=env_overrides(),
            cli_overrides=_flag_overrides(args),
        )
    except (ConfigError, ConfigValidationError) as exc:
        print(f"histbar: {exc}", file=sys.stderr)
        return 2
    configure_logging(config["logging"]["level"])

    try:
        text = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"histbar: cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    try:
        output = _render(config, text)
    except HistogramError as exc:
        print(f"histbar: {exc}", file=sys.stderr)
        return 2

    logger.info("Rendered histogram from %s", "stdin" if args.input == "-" else args.input)
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

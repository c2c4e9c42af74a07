"""common-log — parse Common Log Format access logs into structured records."""

import logging
import sys
from argparse import ArgumentParser

from common_log.config import ERROR_POLICIES, LOG_LEVELS, OUTPUT_FORMATS, load_config, load_yaml_config
from common_log.formatter import format_error, get_formatter
from common_log.pipeline import ErrorPolicy, LineParseFailure, parse_lines
from common_log.reader import expand_paths, read_multiple

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="common-log",
        description="Parse Common Log Format access logs into structured records.",
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="Log file path(s) or glob pattern(s)",
    )
    parser.add_argument(
        "--output",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--on-error",
        dest="on_error",
        choices=ERROR_POLICIES,
        help="Stop at the first malformed line or skip it (default: abort)",
    )
    parser.add_argument(
        "--errors",
        action="store_true",
        help="In skip mode, also print each malformed line's location to stderr",
    )
    parser.add_argument(
        "--keep-blank",
        dest="skip_blank",
        action="store_false",
        default=None,
        help="Treat blank lines as malformed instead of ignoring them",
    )
    parser.add_argument(
        "--encoding",
        help="Input file encoding (default: utf-8)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostic log level (default: WARNING)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    return parser


def run_pipeline(config, files: list[str], show_errors: bool = False) -> int:
    """Read, parse and print every line. Returns the number of failed lines."""
    formatter = get_formatter(config.output_format)
    paths = expand_paths(files)
    lines = read_multiple(paths, encoding=config.encoding)

    parsed_count = 0
    failed_count = 0
    for parsed in parse_lines(
        lines,
        policy=ErrorPolicy(config.on_error),
        skip_blank=config.skip_blank,
        include_errors=True,
    ):
        if parsed.ok:
            parsed_count += 1
            print(formatter(parsed.result))
        else:
            failed_count += 1
            if show_errors:
                print(format_error(parsed), file=sys.stderr)

    logger.info("%d parsed, %d failed, %d file(s)", parsed_count, failed_count, len(paths))
    return failed_count


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args, load_yaml_config(args.config))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [CLF] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        run_pipeline(config, args.files, show_errors=args.errors)
    except LineParseFailure as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except BrokenPipeError:
        return 0
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())

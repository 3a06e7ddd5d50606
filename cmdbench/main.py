from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REPETITIONS,
    DEFAULT_SHELL,
    BenchmarkOptions,
    BenchmarkTask,
    env_int,
    env_str,
)
from .executor import CommandExecutor
from .report import format_report
from .scheduler import RepetitionScheduler
from .stats import aggregate

LOGGER = logging.getLogger("cmdbench")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    # -h is taken by --histogram, so help is long-form only.
    parser = argparse.ArgumentParser(
        prog="cmdbench",
        description="Measure the wall-clock latency of a shell command run repeatedly",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument(
        "-r",
        "--repetitions",
        type=positive_int,
        default=env_int("CMDBENCH_REPETITIONS", DEFAULT_REPETITIONS),
        help="Number of times to run the command",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=positive_int,
        default=env_int("CMDBENCH_CONCURRENCY", DEFAULT_CONCURRENCY),
        help="Number of concurrent executions",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Send the command's stdout and stderr to /dev/null",
    )
    parser.add_argument(
        "-h",
        "--histogram",
        action="store_true",
        help="Display a latency histogram",
    )
    parser.add_argument(
        "--output-dir",
        default=env_str("CMDBENCH_OUTPUT_DIR", None),
        help="Directory to store benchmark artefacts (samples CSV, summary JSON, chart)",
    )
    parser.add_argument(
        "--shell",
        default=env_str("CMDBENCH_SHELL", DEFAULT_SHELL),
        help="Shell used to run the command via '<shell> -c'",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the planned run without executing it",
    )
    parser.add_argument(
        "--log-level",
        default=env_str("CMDBENCH_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        help="Logging level",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run; the first token is passed to the shell as its script",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command and args.command[0] == "--":
        args.command = args.command[1:]
    if not args.command:
        parser.error("a command to benchmark is required")
    return args


def build_options(args: argparse.Namespace) -> BenchmarkOptions:
    return BenchmarkOptions(
        task=BenchmarkTask.from_argv(args.command, quiet=args.quiet),
        repetitions=args.repetitions,
        concurrency=args.concurrency,
        histogram=args.histogram,
        shell=args.shell,
        output_dir=Path(args.output_dir) if args.output_dir else None,
    )


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _log_progress(sample: int, completed: int, total: int) -> None:
    LOGGER.debug("Repetition %d/%d finished in %dms", completed, total, sample)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    options = build_options(args)

    if args.dry_run:
        _print_plan(options)
        return 0

    scheduler = RepetitionScheduler(
        options.concurrency,
        executor=CommandExecutor(shell=options.shell),
        on_sample=_log_progress,
    )
    # A SpawnError escapes from here on purpose: no report for a broken run.
    samples = scheduler.run(options.repetitions, options.task)

    report = aggregate(samples, histogram=options.histogram)
    print(format_report(report))

    if options.output_dir is not None:
        from .export import write_artefacts

        artefacts = write_artefacts(options, samples, report, options.output_dir)
        LOGGER.info(
            "Benchmark artefacts: %s", ", ".join(str(path) for path in artefacts.values())
        )
    return 0


def _print_plan(options: BenchmarkOptions) -> None:
    print(f"Command: {options.task.display()}")
    print(
        f"  - shell={options.shell}, repetitions={options.repetitions}, "
        f"concurrency={options.concurrency} (effective {options.effective_workers}), "
        f"quiet={options.task.quiet}, histogram={options.histogram}"
    )
    if options.output_dir is not None:
        print(f"  - artefacts: {options.output_dir}")


if __name__ == "__main__":
    sys.exit(main())

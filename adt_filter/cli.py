# adt_filter/cli.py
"""Command line interface for adaptive dispersion-threshold fixation detection."""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from .config import ColumnDefaults, ConfigBuilder, DetectorConfig
from .evaluation import summarize_detection
from .io import (
    SOURCE_COLUMNS,
    GazeColumns,
    load_calibration_error,
    load_gaze_samples,
    write_fixations,
)
from .processing import DetectionResult, run_detection

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """
    CLI parser for the fixation detector.

    Only parsing and option descriptions; configuration is built by
    :class:`ConfigBuilder`.
    """
    parser = argparse.ArgumentParser(
        description=(
            "Detect fixations in a gaze recording with an adaptive "
            "dispersion-threshold state machine and write them as a table."
        ),
    )
    parser.add_argument("--input", required=True, help="Gaze recording (CSV, or TSV with --sep '\\t').")
    parser.add_argument("--output", required=False, help="Optional output path for the fixation table.")
    parser.add_argument("--sep", default=",", help="Field separator of input and output (default: ',').")

    # Columns
    parser.add_argument(
        "--source",
        choices=["generic"] + sorted(SOURCE_COLUMNS),
        default="generic",
        help="Column preset of the recording source (default: generic timestamp/x/y/c).",
    )
    parser.add_argument("--time-col", default=None, help="Override the time column name.")
    parser.add_argument("--x-col", default=None, help="Override the x column name.")
    parser.add_argument("--y-col", default=None, help="Override the y column name.")
    parser.add_argument("--c-col", default=None, help="Override the confidence column name.")
    parser.add_argument(
        "--no-confidence",
        action="store_true",
        help="Recording has no confidence column.",
    )
    parser.add_argument("--task", default=None, help="Only use rows (and trial data) of this task.")
    parser.add_argument(
        "--task-column",
        default=ColumnDefaults.TASK_COLUMN,
        help=f"Task column name (default: {ColumnDefaults.TASK_COLUMN}).",
    )

    # Calibration error
    calib = parser.add_mutually_exclusive_group(required=True)
    calib.add_argument("--calibration-error", type=float, help="Subject calibration error.")
    calib.add_argument(
        "--trial-data",
        help="Trial table holding the calibration error per task (requires --task).",
    )
    parser.add_argument(
        "--calibration-column",
        default=ColumnDefaults.CALIBRATION_ERROR_COLUMN,
        help=f"Calibration error column in the trial table (default: {ColumnDefaults.CALIBRATION_ERROR_COLUMN}).",
    )

    # Algorithm constants (None keeps the defaults)
    parser.add_argument("--threshold-factor", type=float, default=None, help="Dispersion threshold factor (default: 3.25).")
    parser.add_argument("--value-at-min", type=float, default=None, help="Allowed relative growth at 100 ms (default: 1.6).")
    parser.add_argument("--time-at-zero", type=float, default=None, help="Fixation age without allowed growth in ms (default: 280).")
    parser.add_argument("--sample-threshold", type=int, default=None, help="Samples accumulated before evaluation (default: 3).")
    parser.add_argument("--max-sample-gap", type=float, default=None, help="Maximum gap between samples in ms (default: 150).")
    parser.add_argument("--duplicate-epsilon", type=float, default=None, help="Duplicate coordinate tolerance (default: 1e-4).")

    parser.add_argument("--plot", default=None, help="Optional path for a fixation plot (needs matplotlib).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _columns_from_args(args: argparse.Namespace) -> GazeColumns:
    base = SOURCE_COLUMNS.get(args.source, GazeColumns())
    return GazeColumns(
        t=args.time_col or base.t,
        x=args.x_col or base.x,
        y=args.y_col or base.y,
        c=None if args.no_confidence else (args.c_col or base.c),
    )


def _calibration_error_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> float:
    if args.calibration_error is not None:
        return args.calibration_error
    if args.task is None:
        parser.error("--trial-data requires --task")
    return load_calibration_error(
        args.trial_data,
        args.task,
        task_column=args.task_column,
        column=args.calibration_column,
        sep=args.sep,
    )


def run_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> DetectionResult:
    calibration_error = _calibration_error_from_args(parser, args)
    try:
        config: DetectorConfig = ConfigBuilder.build_detector_config(args, calibration_error)
    except ValueError as exc:
        parser.error(str(exc))

    samples = load_gaze_samples(
        args.input,
        columns=_columns_from_args(args),
        task=args.task,
        task_column=args.task_column,
        sep=args.sep,
    )
    logger.info("Loaded %d valid samples from %s", len(samples), args.input)

    result = run_detection(samples, config)

    if args.output:
        write_fixations(result.fixations, args.output, sep=args.sep)
        logger.info("Wrote %d fixations to %s", result.n_fixations, args.output)

    if args.plot:
        from .evaluation.plotting import plot_fixations

        ax = plot_fixations(samples, result.fixations, title=f"Fixations ({args.input})")
        ax.figure.savefig(args.plot, bbox_inches="tight")

    return result


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = run_from_args(parser, args)
    summary = summarize_detection(result)
    print(
        f"{summary['n_fixations']} fixations from {summary['n_samples']} samples "
        f"({summary['dropped_count']} dropped, {summary['n_anomalies']} anomalies)"
    )


if __name__ == "__main__":
    main()

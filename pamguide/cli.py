"""Command line interface."""

from pathlib import Path
from typing import Optional, Sequence
import argparse
import logging
import sys

from .batch import process_directory, process_single_file
from .core.audio_io import load_audio
from .core.config import load_config
from .core.diagnostics import broadband_diagnostics

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pamguide",
        description="Calibrated PSD and broadband levels of acoustic recordings",
    )
    parser.add_argument(
        "-i", "--input", type=Path,
        help="Path to input audio file or directory (overrides input_path)",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--broadband-test", action="store_true",
        help="Print a step-by-step broadband diagnostics report",
    )
    parser.add_argument(
        "--test-wav", type=Path,
        help="WAV file for --broadband-test",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def run_broadband_test(test_wav: Path, config_path: Path) -> int:
    config = load_config(config_path)
    audio = load_audio(test_wav)
    report = broadband_diagnostics(audio.data, audio.sample_rate, config)
    print(report.format_report())
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.broadband_test:
        if args.test_wav is None:
            logger.error("--test-wav is required when using --broadband-test")
            return 1
        try:
            return run_broadband_test(args.test_wav, args.config)
        except (ValueError, OSError, RuntimeError) as e:
            logger.error("Broadband test failed: %s", e)
            return 1

    try:
        config = load_config(args.config)
    except (ValueError, OSError) as e:
        logger.error("Error loading configuration from '%s': %s", args.config, e)
        return 1
    logger.info("Configuration loaded successfully.")

    input_path = args.input if args.input is not None else Path(config.input_path)
    logger.info("Effective input path: %s", input_path)

    if not input_path.exists():
        logger.error("Input path '%s' does not exist", input_path)
        return 1

    try:
        if input_path.is_file():
            process_single_file(input_path, config)
        elif input_path.is_dir():
            process_directory(input_path, config)
        else:
            logger.error("Input path '%s' is neither a file nor a directory", input_path)
            return 1
    except (ValueError, OSError, RuntimeError) as e:
        logger.error("Analysis failed: %s", e)
        return 1

    logger.info("Analysis finished successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

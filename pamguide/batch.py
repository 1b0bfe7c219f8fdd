"""
File and Directory Processing

Drives the core analysis for single WAV files and whole directories,
writes CSV output and assembles the batch summary.

A failing file never aborts a batch: the error is logged and the file
is left out of both the individual output and the summary.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging
import time
import warnings

from .core.analysis import analyze_file
from .core.audio_io import load_audio
from .core.calibration import system_sensitivity_db
from .core.config import AnalysisConfig
from .core.errors import ColumnMismatchError
from .core.results import ResultMatrix, concatenate
from .utils.csv_export import write_csv
from .utils.formatting import (
    format_db,
    format_frequency,
    output_filename,
    summary_filename,
)
from .utils.timestamps import parse_timestamp_from_filename

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of a directory run."""
    results: dict[Path, ResultMatrix] = field(default_factory=dict)
    failed: dict[Path, str] = field(default_factory=dict)
    summary: Optional[ResultMatrix] = None
    summary_path: Optional[Path] = None

    @property
    def num_files(self) -> int:
        return len(self.results) + len(self.failed)


def analyze_wav(
    path: Path,
    config: AnalysisConfig,
    max_workers: Optional[int] = None,
) -> ResultMatrix:
    """Load one WAV file and run the core analysis on it."""
    audio = load_audio(path)
    logger.debug("Read %d samples at %d Hz", audio.num_samples, audio.sample_rate)

    sensitivity_db = system_sensitivity_db(config)
    logger.debug("System sensitivity (S): %s", format_db(sensitivity_db))
    logger.debug(
        "Frequency band: %s - %s",
        format_frequency(config.low_cutoff), format_frequency(config.high_cutoff),
    )

    start_time = None
    if config.timestamp_format:
        start_time = parse_timestamp_from_filename(path, config.timestamp_format)
        if start_time is None:
            logger.warning(
                "Could not parse timestamp from filename: %s. "
                "Time column will be relative for this file.", path,
            )

    return analyze_file(
        audio.data, audio.sample_rate, config, sensitivity_db,
        start_time=start_time, max_workers=max_workers,
    )


def process_single_file(
    file_path: str | Path,
    config: AnalysisConfig,
    max_workers: Optional[int] = None,
) -> ResultMatrix:
    """
    Analyse one file and write its CSV if enabled.

    Raises:
        FileNotFoundError, ValueError, AnalysisError: Propagated from
            loading and analysis
    """
    path = Path(file_path)
    logger.info("Processing file: %s", path)
    started = time.perf_counter()

    result = analyze_wav(path, config, max_workers)

    if config.write_csv:
        output_path = write_csv(Path(config.output_dir) / output_filename(path, config), result)
        logger.info("Output written to: %s", output_path)

    logger.info("Finished processing in %.2f seconds.", time.perf_counter() - started)
    return result


def find_wav_files(dir_path: Path) -> list[Path]:
    """WAV files of a directory in name order."""
    return sorted(
        p for p in dir_path.iterdir()
        if p.is_file() and p.suffix.lower() == ".wav"
    )


def process_directory(
    dir_path: str | Path,
    config: AnalysisConfig,
    max_workers: Optional[int] = None,
) -> BatchResult:
    """
    Analyse every WAV file of a directory (batch mode).

    Per-file errors are logged and skipped. A ColumnMismatchError only
    cancels the summary, results of the individual files are kept.
    """
    dir_path = Path(dir_path)
    logger.info("Processing directory (batch mode): %s", dir_path)
    started = time.perf_counter()
    batch = BatchResult()

    output_dir = Path(config.output_dir)
    if config.write_csv:
        output_dir.mkdir(parents=True, exist_ok=True)

    for number, path in enumerate(find_wav_files(dir_path), start=1):
        logger.info("Processing file %d: %s", number, path)
        file_started = time.perf_counter()

        try:
            result = analyze_wav(path, config, max_workers)
        except (ValueError, OSError, RuntimeError) as e:
            logger.error("Error processing %s: %s. Skipping.", path, e)
            batch.failed[path] = str(e)
            continue

        batch.results[path] = result

        if config.write_individual_batch_csvs and config.write_csv:
            output_path = output_dir / output_filename(path, config)
            try:
                write_csv(output_path, result)
                logger.info("Individual output written to: %s", output_path)
            except OSError as e:
                logger.error("Error writing individual CSV %s: %s", output_path, e)

        logger.info(
            "Finished processing %s in %.2f seconds.",
            path, time.perf_counter() - file_started,
        )

    if not batch.results:
        logger.info("No compatible audio files found in the directory.")
    elif config.create_batch_summary_file and config.write_csv:
        _write_summary(batch, config)

    logger.info(
        "Batch processing finished in %.2f seconds. Processed %d files.",
        time.perf_counter() - started, batch.num_files,
    )
    return batch


def _write_summary(batch: BatchResult, config: AnalysisConfig) -> None:
    logger.info("Concatenating results...")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            summary = concatenate(list(batch.results.values()), config)
        except ColumnMismatchError as e:
            logger.error("%s", e)
            return

    if caught:
        for warning in caught:
            logger.warning("%s", warning.message)
    else:
        logger.info("Sorted files by timestamp.")

    batch.summary = summary
    summary_path = Path(config.output_dir) / summary_filename(config)
    try:
        write_csv(summary_path, summary)
    except OSError as e:
        logger.error("Error writing batch summary CSV %s: %s", summary_path, e)
        return

    batch.summary_path = summary_path
    logger.info("Batch summary written to: %s", summary_path)

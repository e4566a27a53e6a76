"""
Session logging (Tier 1) for tailoring runs.

Every CLI run gets its own directory under LOGS_PATH holding one loguru log
file. The file opens with a provenance header naming the command, the
package version, and the database and config the run used, so a stored
document can be traced back to the run that produced it.

Context-specific wrappers with a fixed message prefix live in
contexts/{context}/logger.py and call setup_logger() from here.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from proofoffit import __version__
from proofoffit.utils.timestamp import session_stamp

load_dotenv()

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

# Environment settings echoed into every provenance header when set
PROVENANCE_ENV_VARS = ("PROOFOFFIT_DATABASE", "TAILORING_CONFIG_PATH", "PIPELINE_EVENTS_FILE")


def session_log_dir(context_name: str, logs_root: Path) -> Path:
    """Directory for one run, e.g. outs/logs/tailor_20261018_094540."""
    return Path(logs_root) / f"{context_name}_{session_stamp()}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output for one run to {log_dir}/{context_name}.log and stdout.

    The file keeps DEBUG and above (scores of every selected bullet end up
    there); the console shows console_level and above.

    Args:
        context_name: Log file stem (e.g., "tailor")
        log_dir: Directory for this run, usually from session_log_dir()
        extra_provenance: Run-specific header entries (document type, job, ...)
        console_level: Minimum level echoed to stdout

    Returns:
        Path to the log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def provenance_entries(extra_context: dict = None) -> dict:
    """Key-value pairs for the provenance header, in display order."""
    entries = {
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        "proofoffit": __version__,
    }
    for name in PROVENANCE_ENV_VARS:
        if os.getenv(name):
            entries[name] = os.getenv(name)
    entries.update(extra_context or {})
    return entries


def log_provenance(extra_context: dict = None) -> None:
    """Write the provenance header framed by separator lines."""
    logger.info("=" * 80)
    for key, value in provenance_entries(extra_context).items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)

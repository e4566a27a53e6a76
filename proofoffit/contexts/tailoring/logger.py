"""
Tailoring context logger.

Provides logging interface for the tailoring context with automatic [tailor] prefix.
All tailoring modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from proofoffit.utils.logger import session_log_dir
from proofoffit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[tailor]"


def tailoring_session_dir(logs_root: Path) -> Path:
    """Fresh timestamped directory name for one tailoring run."""
    return session_log_dir("tailor", logs_root)


def setup_tailoring_logger(
    log_dir: Path, document_type: str = None, job_id: str = None, candidate_id: str = None
) -> Path:
    """
    Setup logger for a tailoring session.

    The provenance header records what is being tailored so a log can be
    matched to the stored document without reading past the header.

    Args:
        log_dir: Directory for this tailoring session
        document_type: Document type recorded in the provenance header
        job_id: Target job, when known up front
        candidate_id: Candidate whose evidence is used, when known up front

    Returns:
        Path to log file
    """
    provenance = {"Document type": document_type or "unspecified"}
    if job_id:
        provenance["Job"] = job_id
    if candidate_id:
        provenance["Candidate"] = candidate_id
    return _setup_logger(context_name="tailor", log_dir=log_dir, extra_provenance=provenance)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_tailoring_start(document_type: str, candidate_id: str, job_id: str) -> None:
    """Log the start of a tailoring request."""
    _log_info(f"Tailoring {document_type} for candidate {candidate_id} against job {job_id}")


def log_selection_result(total_bullets: int, selected) -> None:
    """Log how many bullets survived selection and their scores."""
    scores = ", ".join(str(b.relevance_score) for b in selected) or "none"
    _log_debug(f"Selected {len(selected)} of {total_bullets} bullets (scores: {scores})")
    if not selected:
        _log_warning("No bullet matched any requirement; document uses fallback wording only")


def log_tailoring_result(document, elapsed_time: float) -> None:
    """Log a persisted tailored document."""
    _log_success(
        f"{document.type.value} {document.id} saved with {len(document.citations)} citations "
        f"({elapsed_time:.2f}s)"
    )

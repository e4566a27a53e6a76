"""
Shared utilities for ProofOfFit.

Common functionality used across contexts:
- Logger setup and the tailoring event log
- Configuration loading
- Timestamps and report tables
"""

from proofoffit.utils.config import DEFAULT_TAILORING_CONFIG, load_tailoring_config
from proofoffit.utils.timestamp import format_timestamp, now_exact

__all__ = ["DEFAULT_TAILORING_CONFIG", "load_tailoring_config", "format_timestamp", "now_exact"]

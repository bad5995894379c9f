"""
alnentropy Configuration Module

Centralized configuration for entropy reports.

Configuration Priority (highest to lowest):
1. Explicit arguments (constructor keywords or command-line flags)
2. Environment variables
3. Defaults

Environment Variables:
    ALNENTROPY_MODE       - Alphabet mode: "standard" or "all"
    ALNENTROPY_THRESHOLD  - Minimum coverage fraction for a valid column
    ALNENTROPY_THREADS    - Worker pool size
    ALNENTROPY_SUFFIX     - Suffix appended to the input path for the report
    ALNENTROPY_DELIMITER  - Report field delimiter (single character)
"""

import os
import logging
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Optional, Dict, Any, List, Tuple

if TYPE_CHECKING:
    from alnentropy.entropy.models import Alphabet

logger = logging.getLogger(__name__)

# Singleton config instance
_config_instance: Optional["Config"] = None

VALID_MODES = ("standard", "all")

DEFAULT_MODE = "standard"
DEFAULT_THRESHOLD = 0.8
DEFAULT_THREADS = 16
DEFAULT_OUTPUT_SUFFIX = "_output.csv"
DEFAULT_DELIMITER = ","


@dataclass
class Config:
    """
    alnentropy configuration container.

    Fields left as None are filled from the environment, then from the
    module defaults.

    Attributes:
        mode: Alphabet mode ("standard" counts ATGC, "all" counts IUPAC codes)
        threshold: Minimum fraction of explicit symbols for a column to be valid
        threads: Number of worker threads used to tally sequences
        output_suffix: Appended to the input path to name the report
        delimiter: Single character separating report fields
    """

    mode: Optional[str] = None
    threshold: Optional[float] = None
    threads: Optional[int] = None
    output_suffix: Optional[str] = None
    delimiter: Optional[str] = None

    # Internal state
    _initialized: bool = field(default=False, repr=False)

    def __post_init__(self):
        """Fill unset fields from the environment and defaults."""
        if not self._initialized:
            self._load_from_environment()
            self._apply_defaults()
            self._initialized = True

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""

        if self.mode is None and os.environ.get("ALNENTROPY_MODE"):
            self.mode = os.environ["ALNENTROPY_MODE"].strip().lower()

        if self.threshold is None and os.environ.get("ALNENTROPY_THRESHOLD"):
            try:
                self.threshold = float(os.environ["ALNENTROPY_THRESHOLD"])
            except ValueError:
                logger.warning(
                    f"Ignoring non-numeric ALNENTROPY_THRESHOLD: {os.environ['ALNENTROPY_THRESHOLD']!r}"
                )

        if self.threads is None and os.environ.get("ALNENTROPY_THREADS"):
            try:
                self.threads = int(os.environ["ALNENTROPY_THREADS"])
            except ValueError:
                logger.warning(
                    f"Ignoring non-integer ALNENTROPY_THREADS: {os.environ['ALNENTROPY_THREADS']!r}"
                )

        if self.output_suffix is None and os.environ.get("ALNENTROPY_SUFFIX"):
            self.output_suffix = os.environ["ALNENTROPY_SUFFIX"]

        if self.delimiter is None and os.environ.get("ALNENTROPY_DELIMITER"):
            self.delimiter = os.environ["ALNENTROPY_DELIMITER"]

    def _apply_defaults(self) -> None:
        if self.mode is None:
            self.mode = DEFAULT_MODE
        if self.threshold is None:
            self.threshold = DEFAULT_THRESHOLD
        if self.threads is None:
            self.threads = DEFAULT_THREADS
        if self.output_suffix is None:
            self.output_suffix = DEFAULT_OUTPUT_SUFFIX
        if self.delimiter is None:
            self.delimiter = DEFAULT_DELIMITER

    @property
    def alphabet(self) -> "Alphabet":
        """Alphabet for the configured mode."""
        from alnentropy.entropy.alphabet import get_alphabet

        return get_alphabet(self.mode)

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        mode = getattr(self.mode, "value", self.mode)
        if str(mode).lower() not in VALID_MODES:
            errors.append(f"Unknown mode {self.mode!r}; expected one of {list(VALID_MODES)}")

        if not 0.0 <= self.threshold <= 1.0:
            errors.append(f"Threshold not in the range 0 - 1: {self.threshold}")

        if self.threads < 1:
            errors.append(f"Thread count must be a positive integer: {self.threads}")

        if not self.output_suffix:
            errors.append("Output suffix must not be empty")

        if len(self.delimiter) != 1:
            errors.append(f"Delimiter must be a single character: {self.delimiter!r}")

        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self) if not f.name.startswith("_")}


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The singleton configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global configuration instance (useful for testing)."""
    global _config_instance
    _config_instance = None

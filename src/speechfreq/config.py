"""
Configuration for speech frequency analysis.

Defaults come from environment variables (optionally loaded from a .env file).
Stopword lists and sentiment lexicons are always handed to the pipeline
explicitly through an AnalysisConfig rather than living in module globals.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import FrozenSet, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_TOP_N = 10
LOG_FORMAT = '%(asctime)s - %(message)s'


def _env_path(name: str) -> Optional[Path]:
    value = os.getenv(name)
    return Path(value) if value else None


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}, using {default}")
        return default


@dataclass(frozen=True)
class AnalysisConfig:
    """Explicit inputs for one analysis run."""
    corpus_dir: Optional[Path] = None
    metadata_csv: Optional[Path] = None
    stopwords_file: Optional[Path] = None
    lexicon_file: Optional[Path] = None
    stopwords: FrozenSet[str] = field(default_factory=frozenset)
    stem: bool = False
    singularize: bool = False
    ngram: int = 1
    top_n: int = DEFAULT_TOP_N
    pair_window: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> 'AnalysisConfig':
        """Build a config from SPEECHFREQ_* environment variables."""
        return cls(
            corpus_dir=_env_path('SPEECHFREQ_CORPUS_DIR'),
            metadata_csv=_env_path('SPEECHFREQ_METADATA'),
            stopwords_file=_env_path('SPEECHFREQ_STOPWORDS'),
            lexicon_file=_env_path('SPEECHFREQ_LEXICON'),
            top_n=_env_int('SPEECHFREQ_TOP_N', DEFAULT_TOP_N),
            log_level=os.getenv('SPEECHFREQ_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **overrides) -> 'AnalysisConfig':
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def configure_logging(level: str = DEFAULT_LOG_LEVEL):
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

"""Dictionary and n-gram pools used by bomb party games."""

from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

import config


class WordDataError(Exception):
    """Raised when the dictionary or an objective pool can't be loaded."""


@dataclass(frozen=True)
class WordData:
    """Read-only word data shared by every session."""
    words: FrozenSet[str]
    bigrams: Tuple[str, ...]
    trigrams: Tuple[str, ...]
    quadgrams: Tuple[str, ...]


def read_lines(path: Union[str, Path]) -> List[str]:
    """Read non-empty, stripped lines from a UTF-8 text file."""
    try:
        with open(path, encoding='utf-8') as f:
            return [line.strip() for line in f if line.strip()]
    except OSError as e:
        raise WordDataError(f"Could not read {path}: {e}") from e


def _load_list(path: Path) -> List[str]:
    lines = read_lines(path)
    if not lines:
        raise WordDataError(f"{path} is empty")
    return lines


def load_word_data(directory: Optional[Union[str, Path]] = None) -> WordData:
    """
    Load the dictionary and the three objective pools.

    Args:
        directory: Folder holding the word files (default: config.WORD_DATA_DIR)

    Returns:
        WordData with a case-folded word set and the bigram, trigram and
        quadgram pools in file order

    Raises:
        WordDataError: if a file is missing or empty
    """
    base = Path(directory or config.WORD_DATA_DIR)

    words = frozenset(w.casefold() for w in _load_list(base / config.DICTIONARY_FILE))
    return WordData(
        words=words,
        bigrams=tuple(_load_list(base / config.BIGRAMS_FILE)),
        trigrams=tuple(_load_list(base / config.TRIGRAMS_FILE)),
        quadgrams=tuple(_load_list(base / config.QUADGRAMS_FILE)),
    )

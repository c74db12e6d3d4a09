"""Word-list loading utilities.

Supports two formats:
  - Plain text: one word per line (no weights)
  - CSV with header ``word,frequency``: relative frequency per word

Only lowercase ``a-z`` words of the requested length are kept; duplicates
are dropped and file order is preserved (it decides score ties).
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass, field
from pathlib import Path


_DIR = Path(__file__).resolve().parent
DEFAULT_WORDS = _DIR / "data" / "words_5.txt"


@dataclass
class Lexicon:
    """A word list with optional relative frequencies."""
    words: list[str]
    weights: dict[str, float] = field(default_factory=dict)  # empty for .txt

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: str) -> bool:
        return word in self.words


def _load_txt(path: Path, word_length: int) -> tuple[list[str], dict[str, float]]:
    """Load plain-text word list (one word per line)."""
    pattern = re.compile(rf"^[a-z]{{{word_length}}}$")
    seen: set[str] = set()
    words: list[str] = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        w = raw.strip().lower()
        if not w or w in seen:
            continue
        if pattern.match(w):
            seen.add(w)
            words.append(w)
    return words, {}


def _load_csv(path: Path, word_length: int) -> tuple[list[str], dict[str, float]]:
    """Load CSV with ``word,frequency`` header."""
    pattern = re.compile(rf"^[a-z]{{{word_length}}}$")
    words: list[str] = []
    weights: dict[str, float] = {}
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or "word" not in reader.fieldnames:
            raise ValueError(f"{path}: expected a 'word' column, got {reader.fieldnames}")
        for row in reader:
            w = (row["word"] or "").strip().lower()
            if not w or w in weights:
                continue
            if not pattern.match(w):
                continue
            raw = (row.get("frequency") or "").strip()
            try:
                freq = float(raw) if raw else 0.0
            except ValueError:
                raise ValueError(f"{path}: bad frequency {raw!r} for {w!r}") from None
            words.append(w)
            weights[w] = max(freq, 0.0)
    return words, weights


def load_lexicon(path: str | Path | None = None, word_length: int = 5) -> Lexicon:
    """Load words (and weights, for CSV input).

    Parameters
    ----------
    path : str, Path or None
        Path to a ``.txt`` (one word/line) or ``.csv`` (word,frequency).
        None falls back to the bundled ``data/words_5.txt``.
    word_length : int
        Only keep words of this exact length.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If it holds no usable words or a malformed frequency.
    """
    src = Path(path) if path is not None else DEFAULT_WORDS
    if not src.exists():
        raise FileNotFoundError(f"Word list not found: {src}")

    if src.suffix == ".csv":
        words, weights = _load_csv(src, word_length)
    else:
        words, weights = _load_txt(src, word_length)

    if not words:
        raise ValueError(f"No {word_length}-letter words found in {src}")

    return Lexicon(words=words, weights=weights)

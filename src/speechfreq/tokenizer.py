"""
Turn raw speech text into normalized word tokens.

Case folding, punctuation filtering, stopword removal and stemming all happen
here, so the frequency engine only ever sees clean tokens.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import inflect
from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

logger = logging.getLogger(__name__)

# Alphabetic words, keeping inner apostrophes ("don't", "nation's")
WORD_PATTERN = r"[A-Za-z]+(?:'[A-Za-z]+)*"


def preprocess_text(text):
    """
    Collapse line breaks and repeated whitespace into single spaces.

    Args:
        text (str): Raw speech text

    Returns:
        str: Text on a single line
    """
    text = re.sub(r'\n', ' ', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()


def load_stopwords(path: Union[str, Path]) -> frozenset:
    """Read a stopword file: one word per line, '#' starts a comment."""
    words = set()
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            word = line.split('#', 1)[0].strip().lower()
            if word:
                words.add(word)
    logger.info(f"Loaded {len(words)} stopwords from {path}")
    return frozenset(words)


def nltk_stopwords(language: str = 'english') -> frozenset:
    """Return NLTK's stopword list for a language."""
    from nltk.corpus import stopwords
    try:
        return frozenset(stopwords.words(language))
    except LookupError as e:
        raise LookupError(
            "NLTK stopwords corpus not installed. Run: python -m nltk.downloader stopwords"
        ) from e


class Tokenizer:
    """
    Configurable word tokenizer.

    Args:
        stopwords: Words to drop (compared after lowercasing, before stemming)
        stem: Reduce words with the Porter stemmer
        singularize: Map plural nouns to their singular form before stemming
        lowercase: Fold case
        min_length: Drop tokens shorter than this many characters
    """

    def __init__(self, stopwords: Iterable[str] = (), stem: bool = False,
                 singularize: bool = False, lowercase: bool = True, min_length: int = 1):
        self.lowercase = lowercase
        self.stopwords = frozenset(w.lower() if lowercase else w for w in stopwords)
        self.stem = stem
        self.singularize = singularize
        self.min_length = min_length
        self._splitter = RegexpTokenizer(WORD_PATTERN)
        self._stemmer = PorterStemmer() if stem else None
        self._inflect = inflect.engine() if singularize else None

    def _singular(self, word):
        singular = self._inflect.singular_noun(word)
        return singular if singular else word

    def _words(self, text):
        """Yield (normalized word, dropped) for every word in document order."""
        text = preprocess_text(text)
        if self.lowercase:
            text = text.lower()

        for word in self._splitter.tokenize(text):
            if len(word) < self.min_length or word in self.stopwords:
                yield word, True
                continue
            if self._inflect is not None:
                word = self._singular(word)
            if self._stemmer is not None:
                word = self._stemmer.stem(word)
            yield word, False

    def tokenize(self, text: str) -> Tuple[str, ...]:
        return tuple(word for word, dropped in self._words(text) if not dropped)

    __call__ = tokenize

    def tokenize_ngrams(self, text: str, n: int, sep: Optional[str] = ' ') -> List:
        """
        n-grams over the unfiltered word stream.

        Windows are taken before stopword removal, then any window holding a
        stopword (or a too-short word) is dropped, so every n-gram is a run of
        words that are adjacent in the text.
        """
        words = list(self._words(text))
        windows = ngrams(range(len(words)), n, sep=None)
        kept = [tuple(words[i][0] for i in window) for window in windows
                if not any(words[i][1] for i in window)]
        if sep is None:
            return kept
        return [sep.join(w) for w in kept]

    def unnormalized(self) -> 'Tokenizer':
        """Same case folding, stopwords and length filter, without stemming or singularisation."""
        return Tokenizer(stopwords=self.stopwords, lowercase=self.lowercase, min_length=self.min_length)


def ngrams(tokens: Sequence[str], n: int, sep: Optional[str] = ' ') -> List:
    """
    Contiguous n-token windows.

    Args:
        tokens: Token sequence
        n: Window length
        sep: Join each window with this separator; None keeps tuples

    Returns:
        List of n-grams in document order (empty when fewer than n tokens)
    """
    if n < 1:
        raise ValueError(f"n-gram length must be positive, got {n}")
    windows = [tuple(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]
    if sep is None:
        return windows
    return [sep.join(w) for w in windows]

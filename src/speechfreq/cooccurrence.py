"""Counts of term pairs that appear together in the same document window."""

from __future__ import annotations

import logging
from collections import Counter
from itertools import combinations
from typing import Iterable, Optional

import pandas as pd

from .corpus import Document

logger = logging.getLogger(__name__)

PAIR_COLUMNS = ['item1', 'item2', 'n']


def document_window(tokens, window: Optional[int] = None):
    """The final `window` tokens of a document (all of them when window is None)."""
    if window is None:
        return tuple(tokens)
    if window < 0:
        raise ValueError(f"window must be non-negative, got {window}")
    if window == 0:
        return ()
    return tuple(tokens[-window:])


def pairwise_count(documents: Iterable[Document], window: Optional[int] = None,
                   upper: bool = True) -> pd.DataFrame:
    """
    Count the documents in which each unordered pair of distinct terms co-occurs.

    Pairs are canonicalized so item1 < item2; repeated terms inside a window
    count once. With upper=False the table also lists each pair reversed.

    Args:
        documents: Tokenized documents
        window: Only look at the last `window` tokens of each document
        upper: Keep only the canonical orientation of each pair

    Returns:
        DataFrame (item1, item2, n) sorted by n descending, then item1, item2
    """
    pairs: Counter = Counter()
    for doc in documents:
        terms = sorted(set(document_window(doc.tokens, window)))
        pairs.update(combinations(terms, 2))

    logger.debug(f"Counted {len(pairs)} distinct term pairs")

    records = [(a, b, n) for (a, b), n in pairs.items()]
    if not upper:
        records.extend((b, a, n) for (a, b), n in pairs.items())
    records.sort(key=lambda r: (-r[2], r[0], r[1]))
    return pd.DataFrame.from_records(records, columns=PAIR_COLUMNS)

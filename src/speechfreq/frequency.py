"""
Term counting and tf-idf weighting over a tokenized speech corpus.

Pipeline: count_terms -> term_frequency -> document_frequency ->
inverse_document_frequency -> tf_idf. Every step builds new mappings from its
inputs, so the same functions can be run on any subset of a corpus without
touching results computed for the whole corpus.

Complexity: counting is O(total tokens); the tf-idf join is
O(distinct terms x documents).
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Dict, Hashable, Iterable, Mapping, Optional, Tuple

import pandas as pd

from .corpus import Document

logger = logging.getLogger(__name__)

TermCounts = Dict[str, Counter]

COUNT_COLUMNS = ['document', 'term', 'n']
TF_IDF_COLUMNS = ['document', 'term', 'n', 'tf', 'idf', 'tf_idf']
FREQUENCY_COLUMNS = ['term', 'n', 'proportion']


class FrequencyInvariantError(ValueError):
    """Raised when derived frequency tables contradict each other."""


def count_terms(documents: Iterable[Document]) -> TermCounts:
    """
    Tally occurrences of each distinct term per document.

    Documents with no tokens still get an (empty) entry so their length is
    known downstream. Repeated ids are merged.
    """
    counts: TermCounts = {}
    for doc in documents:
        tally = Counter(doc.tokens)
        if doc.doc_id in counts:
            logger.warning(f"Duplicate document id {doc.doc_id!r}, merging counts")
            counts[doc.doc_id].update(tally)
        else:
            counts[doc.doc_id] = tally
    return counts


def merge_counts(*partials: Mapping[str, Counter]) -> TermCounts:
    """Combine independently computed per-document counts (associative)."""
    merged: TermCounts = {}
    for partial in partials:
        for doc_id, tally in partial.items():
            merged.setdefault(doc_id, Counter()).update(tally)
    return merged


def document_lengths(counts: Mapping[str, Counter]) -> Dict[str, int]:
    return {doc_id: sum(tally.values()) for doc_id, tally in counts.items()}


def non_empty(counts: Mapping[str, Counter]) -> TermCounts:
    """Drop zero-length documents, logging each one."""
    kept = {}
    for doc_id, tally in counts.items():
        if sum(tally.values()) == 0:
            logger.warning(f"Document {doc_id!r} has no tokens after filtering; excluded")
            continue
        kept[doc_id] = tally
    return kept


def term_frequency(counts: Mapping[str, Counter]) -> Dict[Tuple[str, Hashable], float]:
    """tf = count / total tokens in the document. Zero-length documents are skipped."""
    tf = {}
    for doc_id, tally in non_empty(counts).items():
        total = sum(tally.values())
        for term, n in tally.items():
            tf[(doc_id, term)] = n / total
    return tf


def document_frequency(counts: Mapping[str, Counter]) -> Dict[Hashable, int]:
    """Number of documents in which each term occurs at least once."""
    df: Counter = Counter()
    for tally in counts.values():
        df.update(term for term, n in tally.items() if n > 0)
    return dict(df)


def inverse_document_frequency(df: Mapping[Hashable, int], total_docs: int) -> Dict[Hashable, float]:
    """idf = ln(total_docs / df)."""
    idf = {}
    for term, n_docs in df.items():
        if n_docs < 1 or n_docs > total_docs:
            raise FrequencyInvariantError(
                f"Document frequency {n_docs} for term {term!r} outside 1..{total_docs}"
            )
        idf[term] = math.log(total_docs / n_docs)
    return idf


def tf_idf(tf: Mapping[Tuple[str, Hashable], float], idf: Mapping[Hashable, float],
           counts: Mapping[str, Counter]) -> pd.DataFrame:
    """
    Join tf and idf into one table sorted for "most distinctive term" queries.

    Rows are ordered by tf_idf descending, then document and term ascending.
    """
    records = []
    for (doc_id, term), term_tf in tf.items():
        if term not in idf:
            raise FrequencyInvariantError(f"Term {term!r} has a tf but no idf")
        term_idf = idf[term]
        records.append((doc_id, term, counts[doc_id][term], term_tf, term_idf, term_tf * term_idf))

    records.sort(key=lambda r: (-r[5], r[0], r[1]))
    return pd.DataFrame.from_records(records, columns=TF_IDF_COLUMNS)


def bind_tf_idf(documents: Iterable[Document]) -> pd.DataFrame:
    """
    Run the full pipeline on a set of documents.

    An empty set (or one holding only empty documents) yields an empty table.
    """
    counts = non_empty(count_terms(documents))
    if not counts:
        return pd.DataFrame(columns=TF_IDF_COLUMNS)

    tf = term_frequency(counts)
    idf = inverse_document_frequency(document_frequency(counts), len(counts))
    return tf_idf(tf, idf, counts)


def counts_table(counts: Mapping[str, Counter]) -> pd.DataFrame:
    """Tidy (document, term, n) table, largest counts first within each document."""
    records = []
    for doc_id, tally in counts.items():
        for term, n in sorted(tally.items(), key=lambda item: (-item[1], item[0])):
            if n > 0:
                records.append((doc_id, term, n))
    return pd.DataFrame.from_records(records, columns=COUNT_COLUMNS)


def word_frequencies(documents: Iterable[Document]) -> pd.DataFrame:
    """Corpus-wide term counts with each term's share of all tokens."""
    total: Counter = Counter()
    for tally in count_terms(documents).values():
        total.update(tally)

    n_tokens = sum(total.values())
    if n_tokens == 0:
        return pd.DataFrame(columns=FREQUENCY_COLUMNS)

    records = [(term, n, n / n_tokens)
               for term, n in sorted(total.items(), key=lambda item: (-item[1], item[0]))]
    return pd.DataFrame.from_records(records, columns=FREQUENCY_COLUMNS)


def top_terms(table: pd.DataFrame, n: int = 10, value: str = 'tf_idf',
              by: Optional[str] = None) -> pd.DataFrame:
    """
    Highest-scoring rows overall, or per group when `by` names a column.

    Args:
        table: Output of bind_tf_idf / counts_table / word_frequencies
        n: Rows to keep (per group)
        value: Column to rank by
        by: Optional grouping column, e.g. 'document' or 'author'
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    if table.empty:
        return table.copy()

    sort_cols = [value] + [c for c in ('document', 'term') if c in table.columns and c != by]
    ascending = [False] + [True] * (len(sort_cols) - 1)
    ranked = table.sort_values(sort_cols, ascending=ascending, kind='mergesort')

    if by is None:
        return ranked.head(n).reset_index(drop=True)
    return (ranked.groupby(by, sort=True)
            .head(n)
            .sort_values([by] + sort_cols, ascending=[True] + ascending, kind='mergesort')
            .reset_index(drop=True))

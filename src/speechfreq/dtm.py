"""
Casting term counts to and from a sparse document-term matrix.

Rows follow document order, columns the sorted vocabulary.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import sparse

from .frequency import COUNT_COLUMNS


def cast_dtm(counts: Mapping[str, Counter]) -> Tuple[sparse.csr_matrix, List[str], List]:
    """
    Build a CSR document-term matrix.

    Returns:
        (matrix, doc_labels, vocab)
    """
    doc_labels = list(counts)
    vocab = sorted({term for tally in counts.values() for term, n in tally.items() if n > 0})
    column = {term: j for j, term in enumerate(vocab)}

    rows, cols, data = [], [], []
    for i, doc_id in enumerate(doc_labels):
        for term, n in counts[doc_id].items():
            if n > 0:
                rows.append(i)
                cols.append(column[term])
                data.append(n)

    matrix = sparse.csr_matrix(
        (np.asarray(data, dtype=np.int64), (rows, cols)),
        shape=(len(doc_labels), len(vocab)),
    )
    return matrix, doc_labels, vocab


def tidy_dtm(matrix, doc_labels: Sequence[str], vocab: Sequence) -> pd.DataFrame:
    """Turn a document-term matrix back into a (document, term, n) table, dropping zeros."""
    coo = sparse.coo_matrix(matrix)
    records = [(doc_labels[i], vocab[j], v) for i, j, v in zip(coo.row, coo.col, coo.data) if v != 0]
    records.sort(key=lambda r: (r[0], r[1]))
    return pd.DataFrame.from_records(records, columns=COUNT_COLUMNS)


def tfidf_matrix(matrix) -> sparse.csr_matrix:
    """
    Weight a count matrix by tf * ln(N / df).

    Empty rows stay empty and do not count towards N.
    """
    counts = sparse.csr_matrix(matrix, dtype=np.float64)
    row_sums = np.asarray(counts.sum(axis=1)).ravel()
    non_empty = row_sums > 0
    n_docs = int(non_empty.sum())

    inv_len = np.zeros_like(row_sums)
    inv_len[non_empty] = 1.0 / row_sums[non_empty]
    tf = sparse.diags(inv_len) @ counts

    df = np.asarray((counts > 0).sum(axis=0)).ravel()
    idf = np.zeros(counts.shape[1])
    present = df > 0
    idf[present] = np.log(n_docs / df[present])

    return sparse.csr_matrix(tf @ sparse.diags(idf))

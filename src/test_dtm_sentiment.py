#!/usr/bin/env python3
"""
Tests for document-term matrix casting and lexicon sentiment scoring.
"""

import math
import os
import sys
import tempfile

import numpy as np
import pandas as pd
import pytest

from speechfreq.corpus import Document
from speechfreq.dtm import cast_dtm, tfidf_matrix, tidy_dtm
from speechfreq.frequency import bind_tf_idf, count_terms, counts_table
from speechfreq.sentiment import (
    join_sentiment,
    load_lexicon,
    sentiment_by_document,
    textblob_sentiment,
)


def corpus():
    return (
        Document('doc1', ('cat', 'sat', 'cat')),
        Document('doc2', ('dog', 'ran')),
        Document('empty', ()),
    )


def test_cast_dtm_layout():
    matrix, doc_labels, vocab = cast_dtm(count_terms(corpus()))

    assert doc_labels == ['doc1', 'doc2', 'empty']
    assert vocab == ['cat', 'dog', 'ran', 'sat']
    assert matrix.shape == (3, 4)
    assert matrix.toarray().tolist() == [[2, 0, 0, 1], [0, 1, 1, 0], [0, 0, 0, 0]]


def test_tidy_dtm_matches_counts_table():
    counts = count_terms(corpus())
    tidy = tidy_dtm(*cast_dtm(counts))
    expected = counts_table(counts).sort_values(['document', 'term']).reset_index(drop=True)
    assert tidy.to_dict('records') == expected.to_dict('records')


def test_tfidf_matrix_agrees_with_engine():
    documents = corpus()
    matrix, doc_labels, vocab = cast_dtm(count_terms(documents))
    weighted = tfidf_matrix(matrix).toarray()

    table = bind_tf_idf(documents)
    for row in table.itertuples(index=False):
        i, j = doc_labels.index(row.document), vocab.index(row.term)
        assert weighted[i, j] == pytest.approx(row.tf_idf)
    assert weighted[doc_labels.index('empty')].sum() == 0
    assert weighted[0, vocab.index('cat')] == pytest.approx(2 / 3 * math.log(2))


def bing_lexicon():
    return pd.DataFrame({
        'word': ['peace', 'friends', 'war', 'enemies'],
        'sentiment': ['positive', 'positive', 'negative', 'negative'],
    })


def test_join_sentiment():
    counts = counts_table(count_terms([Document('a', ('war', 'war', 'peace', 'union'))]))
    joined = join_sentiment(counts, bing_lexicon())
    assert set(joined['term']) == {'war', 'peace'}
    assert 'word' not in joined.columns


def test_sentiment_by_document_labels():
    documents = (
        Document('a', ('war', 'war', 'peace', 'union')),
        Document('b', ('friends', 'peace')),
        Document('c', ('union',)),
    )
    summary = sentiment_by_document(counts_table(count_terms(documents)), bing_lexicon())
    records = {r['document']: r for r in summary.to_dict('records')}

    assert records['a']['positive'] == 1
    assert records['a']['negative'] == 2
    assert records['a']['sentiment'] == -1
    assert records['b']['sentiment'] == 2
    assert records['c']['sentiment'] == 0


def test_sentiment_by_document_values():
    lexicon = pd.DataFrame({'word': ['peace', 'war'], 'value': [2, -3]})
    counts = counts_table(count_terms([Document('a', ('war', 'peace', 'peace')), Document('b', ('union',))]))
    summary = sentiment_by_document(counts, lexicon).set_index('document')
    assert summary.loc['a', 'score'] == 1
    assert summary.loc['b', 'score'] == 0


def test_load_lexicon():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, 'bing.csv')
        pd.DataFrame({'word': ['Peace', 'peace', 'War'],
                      'sentiment': ['Positive', 'negative', 'NEGATIVE']}).to_csv(path, index=False)
        lexicon = load_lexicon(path)
    assert lexicon.to_dict('records') == [
        {'word': 'peace', 'sentiment': 'positive'},
        {'word': 'war', 'sentiment': 'negative'},
    ]


def test_lexicon_without_scores_rejected():
    counts = counts_table(count_terms([Document('a', ('war',))]))
    with pytest.raises(ValueError):
        join_sentiment(counts, pd.DataFrame({'word': ['war']}))


def test_textblob_sentiment():
    result = textblob_sentiment("This is a wonderful and great day for our nation.")
    assert set(result) == {'polarity', 'subjectivity'}
    assert result['polarity'] > 0
    assert np.isfinite(result['subjectivity'])


def main():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("DTM AND SENTIMENT - TEST SUITE")
    print("=" * 60)
    sys.exit(pytest.main([__file__, '-v']))


if __name__ == "__main__":
    main()

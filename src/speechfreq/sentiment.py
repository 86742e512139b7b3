"""
Sentiment scoring by joining word counts against a lexicon.

Lexicons are plain tables passed in by the caller: either a 'sentiment'
column of positive/negative labels (Bing style) or a numeric 'value' column
(AFINN style).
"""

from __future__ import annotations

import logging

import pandas as pd
from textblob import TextBlob

logger = logging.getLogger(__name__)


def _check_lexicon(lexicon: pd.DataFrame):
    if 'word' not in lexicon.columns:
        raise ValueError("Lexicon needs a 'word' column")
    if 'sentiment' not in lexicon.columns and 'value' not in lexicon.columns:
        raise ValueError("Lexicon needs a 'sentiment' or 'value' column")


def load_lexicon(path) -> pd.DataFrame:
    """Read a sentiment lexicon CSV and normalize its words to lowercase."""
    lexicon = pd.read_csv(path)
    _check_lexicon(lexicon)
    lexicon['word'] = lexicon['word'].astype(str).str.lower()
    if 'sentiment' in lexicon.columns:
        lexicon['sentiment'] = lexicon['sentiment'].astype(str).str.lower()
    before = len(lexicon)
    lexicon = lexicon.drop_duplicates(subset='word', keep='first').reset_index(drop=True)
    if len(lexicon) < before:
        logger.warning(f"Dropped {before - len(lexicon)} duplicate lexicon words from {path}")
    logger.info(f"Loaded {len(lexicon)} lexicon entries from {path}")
    return lexicon


def join_sentiment(counts: pd.DataFrame, lexicon: pd.DataFrame) -> pd.DataFrame:
    """Inner join a (document, term, n) table with the lexicon on term == word."""
    _check_lexicon(lexicon)
    joined = counts.merge(lexicon, left_on='term', right_on='word', how='inner')
    return joined.drop(columns='word')


def sentiment_by_document(counts: pd.DataFrame, lexicon: pd.DataFrame) -> pd.DataFrame:
    """
    Summarize lexicon hits per document.

    Label lexicons give positive, negative and sentiment = positive - negative;
    numeric lexicons give score = sum(n * value). Documents with no hits are
    reported with zeros.
    """
    joined = join_sentiment(counts, lexicon)
    documents = pd.Index(pd.unique(counts['document']), name='document')

    if 'sentiment' in lexicon.columns:
        summary = pd.DataFrame(0, index=documents, columns=['positive', 'negative'])
        for label in ('positive', 'negative'):
            hits = joined[joined['sentiment'] == label].groupby('document')['n'].sum()
            summary[label] = hits.reindex(documents, fill_value=0).astype(int)
        summary['sentiment'] = summary['positive'] - summary['negative']
    else:
        joined = joined.assign(weighted=joined['n'] * joined['value'])
        summary = (joined.groupby('document')['weighted'].sum()
                   .reindex(documents, fill_value=0)
                   .to_frame('score'))

    summary.columns.name = None
    return summary.reset_index()


def textblob_sentiment(text):
    """
    Performs sentiment analysis on speech text
    """
    blob = TextBlob(text)
    return {
        'polarity': blob.sentiment.polarity,
        'subjectivity': blob.sentiment.subjectivity
    }

from .config import AnalysisConfig
from .corpus import Document, filter_documents, load_corpus, ngram_documents
from .frequency import (
    FrequencyInvariantError,
    bind_tf_idf,
    count_terms,
    document_frequency,
    inverse_document_frequency,
    merge_counts,
    term_frequency,
    tf_idf,
    word_frequencies,
)
from .tokenizer import Tokenizer, ngrams
from .cooccurrence import pairwise_count
from .analyzer import SpeechAnalyzer

__all__ = [
    'AnalysisConfig',
    'Document',
    'FrequencyInvariantError',
    'SpeechAnalyzer',
    'Tokenizer',
    'bind_tf_idf',
    'count_terms',
    'document_frequency',
    'filter_documents',
    'inverse_document_frequency',
    'load_corpus',
    'merge_counts',
    'ngram_documents',
    'ngrams',
    'pairwise_count',
    'term_frequency',
    'tf_idf',
    'word_frequencies',
]

import logging

from .config import AnalysisConfig
from .cooccurrence import pairwise_count
from .corpus import Document, corpus_frame, filter_documents, load_corpus, ngram_documents
from .dtm import cast_dtm
from .frequency import bind_tf_idf, count_terms, counts_table, top_terms, word_frequencies
from .sentiment import load_lexicon, sentiment_by_document
from .tokenizer import Tokenizer, load_stopwords

logger = logging.getLogger(__name__)


def tokenizer_from_config(config):
    """Tokenizer for the stopword/stemming settings in config."""
    stopwords = set(config.stopwords)
    if config.stopwords_file:
        stopwords |= load_stopwords(config.stopwords_file)
    return Tokenizer(stopwords=stopwords, stem=config.stem, singularize=config.singularize)


class SpeechAnalyzer:
    def __init__(self, documents, config=None, tokenizer=None):
        self.documents = tuple(documents)
        self.config = config or AnalysisConfig()
        self.tokenizer = tokenizer or tokenizer_from_config(self.config)

    @classmethod
    def from_directory(cls, directory, config=None):
        """
        Load a speech directory using the stopword/stemming settings in config.
        """
        config = config or AnalysisConfig()
        tokenizer = tokenizer_from_config(config)
        documents = load_corpus(directory, metadata_csv=config.metadata_csv, tokenizer=tokenizer)
        logger.info(f"Loaded {len(documents)} speeches from {directory}")
        return cls(documents, config, tokenizer)

    def frame(self):
        return corpus_frame(self.documents)

    def basic_stats(self, author=None):
        """
        Returns basic statistics about the speeches
        """
        documents = self.subset(author=author)
        years = [d.year for d in documents if d.year is not None]
        authors = {}
        for doc in documents:
            if doc.author is not None:
                authors[doc.author] = authors.get(doc.author, 0) + 1
        stats = {
            'total_speeches': len(documents),
            'total_tokens': sum(len(d) for d in documents),
            'empty_speeches': sum(1 for d in documents if len(d) == 0),
            'year_range': (min(years), max(years)) if years else (None, None),
            'authors': dict(sorted(authors.items())),
        }
        return stats

    def subset(self, author=None, year_from=None, year_to=None):
        return filter_documents(self.documents, author=author, year_from=year_from, year_to=year_to)

    def _terms(self, author=None, year_from=None, year_to=None, ngram=None):
        documents = self.subset(author, year_from, year_to)
        return ngram_documents(documents, ngram or self.config.ngram, tokenizer=self.tokenizer)

    def word_frequencies(self, author=None, ngram=None):
        return word_frequencies(self._terms(author=author, ngram=ngram))

    def counts(self, author=None, ngram=None):
        return counts_table(count_terms(self._terms(author=author, ngram=ngram)))

    def tf_idf(self, author=None, year_from=None, year_to=None, ngram=None):
        """tf-idf over the (optionally filtered) corpus; the full corpus is untouched."""
        return bind_tf_idf(self._terms(author, year_from, year_to, ngram))

    def top_tf_idf(self, n=None, by='document', **subset):
        table = self.tf_idf(**subset)
        if by is not None and by not in table.columns:
            # metadata grouping such as 'author'
            table = table.merge(self.frame()[['document', by]], on='document', how='left')
        return top_terms(table, n=n or self.config.top_n, by=by)

    def pairwise_counts(self, window=None, author=None):
        window = window if window is not None else self.config.pair_window
        return pairwise_count(self.subset(author=author), window=window)

    def dtm(self, author=None, ngram=None):
        return cast_dtm(count_terms(self._terms(author=author, ngram=ngram)))

    def _lexicon_words(self, documents):
        """Documents re-tokenized to plain words so they can match lexicon entries."""
        words = self.tokenizer.unnormalized()
        rewritten = []
        for doc in documents:
            if doc.text is not None:
                rewritten.append(Document(doc.doc_id, words(doc.text), author=doc.author, year=doc.year))
            else:
                if self.tokenizer.stem or self.tokenizer.singularize:
                    logger.warning(f"Document {doc.doc_id!r} has no raw text; "
                                   "matching the lexicon against normalized tokens")
                rewritten.append(doc)
        return rewritten

    def sentiment(self, lexicon=None, author=None):
        if lexicon is None:
            if self.config.lexicon_file is None:
                raise ValueError("No lexicon given and no lexicon_file configured")
            lexicon = load_lexicon(self.config.lexicon_file)
        documents = self._lexicon_words(self.subset(author=author))
        return sentiment_by_document(counts_table(count_terms(documents)), lexicon)

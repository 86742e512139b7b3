#!/usr/bin/env python3
"""
Speech frequency analysis from the command line.

Loads a directory of speech transcripts, prints corpus statistics, the most
frequent words and the most distinctive (highest tf-idf) terms per document,
and optionally term-pair counts and lexicon sentiment.

Usage:
    speechfreq data/speeches --metadata data/metadata.csv --stopwords stopwords.txt
    speechfreq data/speeches --ngram 2 --author Lincoln --top 5 --output lincoln_bigrams.csv
    speechfreq data/speeches --nltk-stopwords --stem --plot top_terms.png
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from .analyzer import SpeechAnalyzer
from .config import AnalysisConfig, configure_logging
from .plotting import plot_top_terms, save_figure
from .sentiment import load_lexicon
from .tokenizer import nltk_stopwords

logger = logging.getLogger(__name__)


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(description='Word frequency and tf-idf analysis of speech transcripts')
    parser.add_argument('corpus', nargs='?', help='Directory of .txt transcripts (default: $SPEECHFREQ_CORPUS_DIR)')
    parser.add_argument('--metadata', help='CSV with document, author, year columns')
    parser.add_argument('--stopwords', help='Stopword file, one word per line')
    parser.add_argument('--nltk-stopwords', action='store_true', help="Also remove NLTK's English stopwords")
    parser.add_argument('--stem', action='store_true', help='Apply Porter stemming')
    parser.add_argument('--singularize', action='store_true', help='Map plural nouns to singular')
    parser.add_argument('--ngram', type=positive_int, help='Term length in tokens (default: 1)')
    parser.add_argument('--author', help='Restrict every section of the analysis to one author')
    parser.add_argument('--top', type=positive_int, help='Terms to show per document (default: $SPEECHFREQ_TOP_N or 10)')
    parser.add_argument('--pairs-window', type=int, help='Count co-occurring pairs in the last N tokens of each speech')
    parser.add_argument('--lexicon', help='Sentiment lexicon CSV (word + sentiment or value)')
    parser.add_argument('--output', help='Save the tf-idf table to this CSV')
    parser.add_argument('--plot', help='Save a chart of the top tf-idf terms to this image')
    parser.add_argument('--log-level', help='Logging level (default: $SPEECHFREQ_LOG_LEVEL or INFO)')
    return parser


def config_from_args(args, base=None):
    base = base or AnalysisConfig.from_env()
    stopwords = set(base.stopwords)
    if args.nltk_stopwords:
        stopwords |= nltk_stopwords('english')
    return base.with_overrides(
        corpus_dir=Path(args.corpus) if args.corpus else None,
        metadata_csv=Path(args.metadata) if args.metadata else None,
        stopwords_file=Path(args.stopwords) if args.stopwords else None,
        lexicon_file=Path(args.lexicon) if args.lexicon else None,
        stopwords=frozenset(stopwords),
        stem=args.stem or None,
        singularize=args.singularize or None,
        ngram=args.ngram,
        top_n=args.top,
        pair_window=args.pairs_window,
        log_level=args.log_level.upper() if args.log_level else None,
    )


def print_section(title):
    print(f"\n{'=' * 60}")
    print(title)
    print(f"{'=' * 60}")


def run(config, author=None, output=None, plot=None):
    analyzer = SpeechAnalyzer.from_directory(config.corpus_dir, config)

    stats = analyzer.basic_stats(author=author)
    print_section("CORPUS SUMMARY")
    print(f"Speeches: {stats['total_speeches']}")
    print(f"Tokens: {stats['total_tokens']}")
    if stats['empty_speeches']:
        print(f"Empty after filtering: {stats['empty_speeches']}")
    if stats['year_range'][0] is not None:
        print(f"Years: {stats['year_range'][0]}-{stats['year_range'][1]}")
    for name, count in stats['authors'].items():
        print(f"- {name}: {count}")

    print_section("MOST FREQUENT TERMS")
    print(analyzer.word_frequencies(author=author).head(config.top_n).to_string(index=False))

    table = analyzer.tf_idf(author=author)
    print_section(f"TOP {config.top_n} TF-IDF TERMS PER SPEECH")
    if table.empty:
        print("No documents matched.")
    else:
        top = analyzer.top_tf_idf(n=config.top_n, by='document', author=author)
        print(top.to_string(index=False))

    if config.pair_window is not None:
        print_section(f"TERM PAIRS (last {config.pair_window} tokens)")
        pairs = analyzer.pairwise_counts(window=config.pair_window, author=author)
        print(pairs.head(config.top_n).to_string(index=False))

    if config.lexicon_file is not None:
        print_section("LEXICON SENTIMENT")
        print(analyzer.sentiment(load_lexicon(config.lexicon_file), author=author).to_string(index=False))

    if output:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(output, index=False)
        print(f"\nTf-idf table saved to: {output}")

    if plot and not table.empty:
        fig = plot_top_terms(table, n=config.top_n, by='document')
        print(f"Chart saved to: {save_figure(fig, plot)}")

    return table


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except LookupError as e:
        print(f"Error: {e}")
        return 1

    configure_logging(config.log_level)
    pd.set_option('display.max_colwidth', None)

    if config.corpus_dir is None:
        print("Error: no corpus directory given and SPEECHFREQ_CORPUS_DIR is not set")
        return 1
    if not config.corpus_dir.is_dir():
        print(f"Error: corpus directory '{config.corpus_dir}' not found")
        return 1

    try:
        run(config, author=args.author, output=args.output, plot=args.plot)
        return 0
    except KeyboardInterrupt:
        print("\n⏸ Analysis interrupted by user")
        return 1
    except Exception as e:
        logger.exception("Analysis failed")
        print(f"\n💥 Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

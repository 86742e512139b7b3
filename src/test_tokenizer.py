#!/usr/bin/env python3
"""
Tests for text normalization: whitespace cleanup, case folding, punctuation,
stopwords, stemming, singularisation and n-gram windows.
"""

import os
import sys
import tempfile

import pytest

from speechfreq.tokenizer import Tokenizer, load_stopwords, ngrams, preprocess_text


def test_preprocess_collapses_line_breaks():
    assert preprocess_text("Four score\n\nand   seven\tyears ago \n") == "Four score and seven years ago"


def test_lowercase_and_punctuation():
    tokens = Tokenizer()("The Nation's   people,\ndon't FEAR -- 1776!")
    assert tokens == ('the', "nation's", 'people', "don't", 'fear')


def test_case_preserved_when_disabled():
    assert Tokenizer(lowercase=False)("Liberty and Union") == ('Liberty', 'and', 'Union')


def test_stopwords_removed():
    tokenizer = Tokenizer(stopwords={'The', 'and'})
    assert tokenizer('The union and the constitution') == ('union', 'constitution')


def test_min_length():
    assert Tokenizer(min_length=3)('we go to war') == ('war',)


def test_stemming():
    tokens = Tokenizer(stem=True)('running nations governed')
    assert tokens == ('run', 'nation', 'govern')


def test_singularize():
    tokens = Tokenizer(singularize=True)('nations freedom')
    assert tokens == ('nation', 'freedom')


def test_load_stopwords_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, 'stopwords.txt')
        with open(path, 'w', encoding='utf-8') as f:
            f.write("# common words\nThe\nand  # conjunction\n\nof\n")
        assert load_stopwords(path) == frozenset({'the', 'and', 'of'})


def test_ngrams():
    tokens = ('the', 'cat', 'sat', 'on', 'the', 'mat')
    assert ngrams(tokens, 2) == ['the cat', 'cat sat', 'sat on', 'on the', 'the mat']
    assert ngrams(tokens, 3, sep=None)[0] == ('the', 'cat', 'sat')
    assert ngrams(tokens, 1) == list(tokens)
    assert ngrams(('lonely',), 2) == []
    with pytest.raises(ValueError):
        ngrams(tokens, 0)


def test_ngrams_skip_windows_across_stopwords():
    tokenizer = Tokenizer(stopwords={'the', 'we', 'to'})
    bigrams = tokenizer.tokenize_ngrams('The only thing we have to fear is fear itself.', 2)

    assert bigrams == ['only thing', 'fear is', 'is fear', 'fear itself']
    assert 'have fear' not in bigrams
    assert tokenizer.tokenize_ngrams('we the people', 2, sep=None) == []


def test_stemmed_ngrams():
    tokenizer = Tokenizer(stopwords={'of'}, stem=True)
    assert tokenizer.tokenize_ngrams('running nations of governed states', 2) == ['run nation', 'govern state']


def test_unnormalized_copy():
    tokenizer = Tokenizer(stopwords={'the'}, stem=True, singularize=True, min_length=2)
    plain = tokenizer.unnormalized()
    assert plain('The happy nations') == ('happy', 'nations')
    assert tokenizer('The happy nations') == ('happi', 'nation')


def main():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("TOKENIZER - TEST SUITE")
    print("=" * 60)
    sys.exit(pytest.main([__file__, '-v']))


if __name__ == "__main__":
    main()

"""
Speech corpus loading and subsetting.

A corpus is a plain tuple of immutable Document records. Loading reads every
transcript under a directory, attaches author/year metadata and tokenizes the
text once; everything downstream works on the tokens.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

import pandas as pd
from tqdm import tqdm

from .tokenizer import Tokenizer, ngrams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    doc_id: str
    tokens: Tuple = ()
    author: Optional[str] = None
    year: Optional[int] = None
    text: Optional[str] = field(default=None, repr=False, compare=False)
    extra: Mapping = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # Freeze caller-provided containers
        object.__setattr__(self, 'tokens', tuple(self.tokens))
        object.__setattr__(self, 'extra', MappingProxyType(dict(self.extra)))

    def __len__(self):
        return len(self.tokens)


def get_date_from_filename(filename):
    """Extract date from filename format YYYY-MM-DD_... or YYYY_... or YYYY-title"""
    date_str = Path(filename).stem.split('_')[0]
    hyphen_parts = date_str.split('-')

    if len(hyphen_parts) >= 3:
        try:
            return datetime.strptime('-'.join(hyphen_parts[:3]), '%Y-%m-%d')
        except ValueError:
            pass

    # YYYY or YYYY-title
    year_str = hyphen_parts[0]
    if len(year_str) == 4 and year_str.isdigit():
        try:
            return datetime.strptime(year_str, '%Y')
        except ValueError:
            return None
    return None


def _read_metadata(metadata_csv) -> Dict[str, dict]:
    meta = pd.read_csv(metadata_csv)
    if 'document' not in meta.columns:
        raise ValueError(f"Metadata file {metadata_csv} needs a 'document' column")
    meta['document'] = meta['document'].astype(str)
    records = {}
    for row in meta.to_dict('records'):
        doc_id = row.pop('document')
        records[doc_id] = {k: v for k, v in row.items() if not pd.isna(v)}
    logger.info(f"Loaded metadata for {len(records)} documents from {metadata_csv}")
    return records


def _as_year(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def load_corpus(directory: Union[str, Path], metadata_csv=None,
                tokenizer: Optional[Tokenizer] = None, pattern: str = '*.txt') -> Tuple[Document, ...]:
    """
    Load every transcript under a directory.

    The document id is the file stem. Metadata CSV rows (keyed by a
    'document' column) supply author, year and any other columns; without a
    row, the year is parsed from the filename and the author is taken from the
    enclosing sub-directory.

    Args:
        directory: Corpus root
        metadata_csv: Optional CSV with document/author/year columns
        tokenizer: Tokenizer to apply (defaults to a plain lowercasing one)
        pattern: Glob pattern for transcript files

    Returns:
        Tuple of Documents sorted by id
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Corpus directory not found: {root}")

    tokenizer = tokenizer or Tokenizer()
    metadata = _read_metadata(metadata_csv) if metadata_csv else {}

    files = sorted(p for p in root.rglob(pattern) if p.is_file())
    logger.info(f"Found {len(files)} transcript files in {root}")

    documents = []
    for path in tqdm(files, desc="Loading speeches"):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {path}: {e}")
            continue

        doc_id = path.stem
        row = dict(metadata.get(doc_id, {}))
        author = row.pop('author', None)
        year = _as_year(row.pop('year', None))
        if author is None and path.parent != root:
            author = path.parent.name
        if year is None:
            date = get_date_from_filename(path.name)
            year = date.year if date else None

        documents.append(Document(
            doc_id=doc_id,
            tokens=tokenizer(text),
            author=author,
            year=year,
            text=text,
            extra=row,
        ))

    missing = set(metadata) - {d.doc_id for d in documents}
    if missing:
        logger.warning(f"{len(missing)} metadata rows have no matching transcript")

    return tuple(sorted(documents, key=lambda d: d.doc_id))


def documents_from_dataframe(df: pd.DataFrame, id_col: str = 'document', text_col: str = 'text',
                             tokenizer: Optional[Tokenizer] = None,
                             author_col: str = 'author', year_col: str = 'year') -> Tuple[Document, ...]:
    """Build Documents from a table with one row per speech."""
    tokenizer = tokenizer or Tokenizer()
    documents = []
    for row in df.to_dict('records'):
        text = row.get(text_col)
        text = '' if text is None or (isinstance(text, float) and pd.isna(text)) else str(text)
        author = row.get(author_col)
        documents.append(Document(
            doc_id=str(row[id_col]),
            tokens=tokenizer(text),
            author=None if author is None or pd.isna(author) else str(author),
            year=_as_year(row.get(year_col)),
            text=text,
        ))
    return tuple(documents)


def filter_documents(documents: Iterable[Document], author: Optional[str] = None,
                     year_from: Optional[int] = None, year_to: Optional[int] = None,
                     predicate: Optional[Callable[[Document], bool]] = None) -> Tuple[Document, ...]:
    """
    Select a subset of documents. Inputs are never modified.

    Documents without a year are dropped when a year bound is given.
    """
    selected = []
    for doc in documents:
        if author is not None and doc.author != author:
            continue
        if year_from is not None and (doc.year is None or doc.year < year_from):
            continue
        if year_to is not None and (doc.year is None or doc.year > year_to):
            continue
        if predicate is not None and not predicate(doc):
            continue
        selected.append(doc)
    return tuple(selected)


def ngram_documents(documents: Iterable[Document], n: int, sep: str = ' ',
                    tokenizer: Optional[Tokenizer] = None) -> Tuple[Document, ...]:
    """
    Rewrite documents so each term is an n-token window.

    With a tokenizer, windows come from the document's raw text before
    stopword removal and windows containing a stopword are dropped. Documents
    without text fall back to windows over their stored tokens.
    """
    if n == 1:
        return tuple(documents)
    rewritten = []
    for doc in documents:
        if tokenizer is not None and doc.text is not None:
            terms = tokenizer.tokenize_ngrams(doc.text, n, sep=sep)
        else:
            terms = ngrams(doc.tokens, n, sep=sep)
        rewritten.append(replace(doc, tokens=terms, extra=dict(doc.extra)))
    return tuple(rewritten)


def corpus_frame(documents: Iterable[Document]) -> pd.DataFrame:
    """One row of metadata per document."""
    rows = []
    for doc in documents:
        rows.append({
            'document': doc.doc_id,
            'author': doc.author,
            'year': doc.year,
            'n_tokens': len(doc.tokens),
            **doc.extra,
        })
    if not rows:
        return pd.DataFrame(columns=['document', 'author', 'year', 'n_tokens'])
    return pd.DataFrame(rows)

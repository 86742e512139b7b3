"""Bar charts of the most frequent and most distinctive terms."""

from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns

from .frequency import top_terms

sns.set_theme(style='whitegrid')


def plot_top_terms(table, value='tf_idf', n=10, by='document', max_panels=12):
    """
    Horizontal bar chart of the top `n` terms per group.

    Args:
        table: tf-idf (or counts) table
        value: Column to rank and plot
        n: Terms per panel
        by: Grouping column, one panel per group; None for a single panel
        max_panels: Only the first groups (sorted) are drawn

    Returns:
        matplotlib Figure
    """
    top = top_terms(table, n=n, value=value, by=by)
    groups = [None] if by is None else sorted(top[by].unique())[:max_panels]

    ncols = min(3, max(1, len(groups)))
    nrows = (len(groups) + ncols - 1) // ncols
    fig, axes = plt.subplots(nrows, ncols, figsize=(5 * ncols, 0.4 * n * nrows + 1.5), squeeze=False)

    for ax, group in zip(axes.flat, groups):
        subset = top if group is None else top[top[by] == group]
        subset = subset.assign(term=subset['term'].astype(str))
        sns.barplot(data=subset, x=value, y='term', ax=ax, color='steelblue')
        ax.set_title('' if group is None else str(group))
        ax.set_xlabel(value)
        ax.set_ylabel('')

    for ax in list(axes.flat)[len(groups):]:
        ax.set_visible(False)

    fig.tight_layout()
    return fig


def plot_word_frequencies(freqs, n=20):
    """Bar chart of the most common terms in a word_frequencies table."""
    top = freqs.head(n)
    fig, ax = plt.subplots(figsize=(8, 0.35 * max(len(top), 1) + 1.5))
    sns.barplot(data=top.assign(term=top['term'].astype(str)), x='n', y='term', ax=ax, color='steelblue')
    ax.set_title(f'Top {len(top)} words')
    ax.set_xlabel('Occurrences')
    ax.set_ylabel('')
    fig.tight_layout()
    return fig


def save_figure(fig, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path

"""
Signal analysis: scores one ``(title, description)`` pair against a lexicon.

Score formula (bounded -100 .. +100)
------------------------------------
    text        = (title + " " + description).lower()
    pos, neg    = sum of tier weights of matched positive / negative terms
    diff        = pos - neg
    normalizer  = max(pos, neg, 1)          # floor of 1 avoids 0 / 0
    score       = round_half_up(diff / normalizer * 100)

Because ``|diff| <= max(pos, neg)`` the ratio never leaves ``[-1, 1]``.

Matching
--------
A term matches when it occurs anywhere in ``text`` as a plain substring, so
"risk" also fires inside "brisk" and "bug" inside "debugging". Matching is
not word-boundary aware.

Each term is reported (and weighted) at most once per record, however many
times it occurs.
"""

from __future__ import annotations

from deepdive.models.analysis import SignalAnalysis
from deepdive.signals.lexicon import DEFAULT_LEXICON, SignalLexicon
from deepdive.taxonomy.signal_taxonomy import Polarity, classify_score, round_half_up


def analyze_signals(
    title: str,
    description: str,
    lexicon: SignalLexicon = DEFAULT_LEXICON,
) -> SignalAnalysis:
    """Detect lexicon signals in a record and derive its score and sentiment.

    Args:
        title: Record headline.
        description: Record snippet.
        lexicon: Vocabulary to score against. Defaults to ``DEFAULT_LEXICON``.

    Returns:
        ``SignalAnalysis`` with ordered, duplicate-free signal tuples.
        Empty or whitespace-only input yields no signals, score 0, neutral.
    """
    text = f"{title} {description}".lower()

    # dict keys double as an ordered set
    matched: dict[Polarity, dict[str, None]] = {
        Polarity.POSITIVE: {},
        Polarity.NEGATIVE: {},
    }
    running: dict[Polarity, int] = {Polarity.POSITIVE: 0, Polarity.NEGATIVE: 0}

    for entry in lexicon.iter_entries():
        if entry.term not in text:
            continue
        if entry.term in matched[entry.polarity]:
            continue
        matched[entry.polarity][entry.term] = None
        running[entry.polarity] += entry.weight

    positive_score = running[Polarity.POSITIVE]
    negative_score = running[Polarity.NEGATIVE]

    diff       = positive_score - negative_score
    normalizer = max(positive_score, negative_score, 1)
    score      = round_half_up(diff / normalizer * 100)

    return SignalAnalysis(
        positive_signals=tuple(matched[Polarity.POSITIVE]),
        negative_signals=tuple(matched[Polarity.NEGATIVE]),
        score=score,
        sentiment=classify_score(score),
    )

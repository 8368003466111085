"""
Signal lexicon: the keyword -> (polarity, tier) table the analyzer scores against.

The lexicon is plain configuration, not algorithm. ``DEFAULT_LEXICON`` is built
once at import and never mutated; alternative vocabularies can be built with
``SignalLexicon.from_tiers()`` or loaded from JSON with ``load_lexicon()`` and
passed to ``analyze_signals(..., lexicon=...)``.

JSON lexicon format
-------------------
::

    {
      "version": "2024.1",
      "positive": {"high": ["breakthrough", ...], "medium": ["improve", ...]},
      "negative": {"high": ["fraud", ...],        "medium": ["bug", ...]}
    }

Both polarity blocks are optional; unknown polarity or tier keys are rejected.

Validation rules
----------------
- Terms are stripped and lower-cased; empty terms are rejected.
- A term may appear at most once per polarity (across both tiers).
- The same term may appear under both polarities; it then counts for both.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from deepdive.taxonomy.signal_taxonomy import TIER_WEIGHTS, Polarity, Tier

logger = logging.getLogger(__name__)


class LexiconEntry(BaseModel):
    """One keyword with its polarity and impact tier.

    Attributes:
        term: Lower-case keyword, matched as a substring of the record text.
        polarity: Which running score a match contributes to.
        tier: Impact class; determines the weight.
    """

    model_config = ConfigDict(frozen=True)

    term: str
    polarity: Polarity
    tier: Tier

    @field_validator("term")
    @classmethod
    def normalise_term(cls, v: str) -> str:
        term = v.strip().lower()
        if not term:
            raise ValueError("Lexicon term must be a non-empty string.")
        return term

    @property
    def weight(self) -> int:
        return TIER_WEIGHTS[self.tier]


class SignalLexicon(BaseModel):
    """Immutable, versioned collection of ``LexiconEntry`` objects.

    Entry order is significant: the analyzer reports matched terms in this
    order, which in turn drives top-signal tie-breaking in reports.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    entries: tuple[LexiconEntry, ...]

    @model_validator(mode="after")
    def validate_unique_terms(self) -> "SignalLexicon":
        seen: set[tuple[str, Polarity]] = set()
        for entry in self.entries:
            key = (entry.term, entry.polarity)
            if key in seen:
                raise ValueError(
                    f"Duplicate {entry.polarity} term '{entry.term}' in lexicon "
                    f"'{self.version}'."
                )
            seen.add(key)
        return self

    @staticmethod
    def weight(polarity: Polarity, tier: Tier) -> int:
        """Weight of a match for ``(polarity, tier)``. Polarity does not change it."""
        return TIER_WEIGHTS[Tier(tier)]

    def iter_entries(self) -> Iterator[LexiconEntry]:
        return iter(self.entries)

    def terms(self, polarity: Polarity, tier: Tier | None = None) -> tuple[str, ...]:
        """Terms for ``polarity`` (optionally one tier only), in stored order."""
        return tuple(
            e.term
            for e in self.entries
            if e.polarity == polarity and (tier is None or e.tier == tier)
        )

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def from_tiers(
        cls,
        version: str,
        positive: Mapping[str, Sequence[str]] | None = None,
        negative: Mapping[str, Sequence[str]] | None = None,
    ) -> "SignalLexicon":
        """Build a lexicon from ``{tier: [terms]}`` blocks.

        Entries are laid out positive-high, positive-medium, negative-high,
        negative-medium, each keeping the order of its input list.

        Raises:
            ValueError: On an unknown tier key.
            pydantic.ValidationError: On empty or duplicate terms.
        """
        entries: list[LexiconEntry] = []
        for polarity, block in ((Polarity.POSITIVE, positive), (Polarity.NEGATIVE, negative)):
            block = block or {}
            if not isinstance(block, Mapping):
                raise ValueError(f"'{polarity}' block must map tier -> list of terms.")
            unknown = set(block) - {t.value for t in Tier}
            if unknown:
                raise ValueError(
                    f"Unknown tier(s) {sorted(unknown)} under '{polarity}'. "
                    f"Valid tiers: {[t.value for t in Tier]}"
                )
            for tier in Tier:
                terms = block.get(tier.value, [])
                if isinstance(terms, str) or not isinstance(terms, Sequence):
                    raise ValueError(f"'{polarity}.{tier}' must be a list of terms.")
                for term in terms:
                    entries.append(LexiconEntry(term=term, polarity=polarity, tier=tier))
        return cls(version=version, entries=tuple(entries))


# ── Default vocabulary ────────────────────────────────────────────────────────

DEFAULT_LEXICON = SignalLexicon.from_tiers(
    version="2024.1",
    positive={
        "high": [
            "breakthrough", "revolutionary", "innovative", "success", "achieved",
            "growth", "expansion", "investment", "partnership", "funded",
            "leader", "leading", "pioneer", "award", "certified",
            "trusted", "secure", "reliable", "optimized", "advanced",
        ],
        "medium": [
            "improve", "progress", "develop", "launch", "introduce",
            "enhance", "strengthen", "upgrade", "modern",
            "adopt", "support", "expand", "boost",
        ],
    },
    negative={
        "high": [
            "failure", "collapse", "bankrupt", "fraud", "scandal",
            "scam", "lawsuit", "violation", "hack", "breach",
            "critical", "dangerous", "toxic", "illegal", "shutdown",
            "recall", "suspended", "banned", "risk", "catastrophic",
        ],
        "medium": [
            "problem", "issue", "concern", "warning", "decline",
            "loss", "struggle", "challenge", "difficulty", "threatened",
            "vulnerable", "weak", "fail", "error", "bug",
            "complaint", "negative", "poor", "bad", "worse",
        ],
    },
)


# ── File loading ──────────────────────────────────────────────────────────────

def _parse_lexicon(raw: Any, source: str) -> SignalLexicon:
    if not isinstance(raw, dict):
        raise ValueError(f"Lexicon file {source} must contain a JSON object.")

    unknown = set(raw) - {"version", Polarity.POSITIVE.value, Polarity.NEGATIVE.value}
    if unknown:
        raise ValueError(
            f"Lexicon file {source} has unknown key(s) {sorted(unknown)}. "
            "Expected 'version', 'positive', 'negative'."
        )

    version = raw.get("version")
    if not version or not isinstance(version, str):
        raise ValueError(f"Lexicon file {source} is missing a string 'version'.")

    return SignalLexicon.from_tiers(
        version=version,
        positive=raw.get(Polarity.POSITIVE.value),
        negative=raw.get(Polarity.NEGATIVE.value),
    )


def load_lexicon(path: Path) -> SignalLexicon:
    """Load and validate a lexicon JSON file.

    Args:
        path: JSON file in the format described in the module docstring.

    Returns:
        A validated ``SignalLexicon``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON or violates the format.
        pydantic.ValidationError: On empty or duplicate terms.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Lexicon file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Lexicon file {path} is not valid JSON: {exc}") from exc

    lexicon = _parse_lexicon(raw, str(path))
    logger.info(
        "Loaded lexicon '%s' from %s (%d terms)", lexicon.version, path, len(lexicon)
    )
    return lexicon


def resolve_lexicon(lexicon_path: str | Path | None) -> SignalLexicon:
    """Return the lexicon at ``lexicon_path``, or ``DEFAULT_LEXICON`` when unset."""
    if not lexicon_path:
        return DEFAULT_LEXICON
    return load_lexicon(Path(lexicon_path))

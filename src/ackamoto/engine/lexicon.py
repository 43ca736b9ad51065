"""Verdict lexicon: the phrases that identify each review verdict.

Text is split into clauses at sentence punctuation, commas and line breaks,
then lower-cased and split into alphanumeric tokens before matching. That
makes every phrase case-insensitive, strips markdown emphasis around the
keyword and only ever matches whole words ("hack" is not "ack").

A phrase is a token sequence whose last token is the verdict keyword and whose
leading tokens are required modifiers, e.g. ``("concept", "ack")``. Modifiers
may be separated from the keyword by up to ``modifier_window`` other tokens
of the same clause, and do not count when a negation precedes them
("haven't tested, ACK" is a plain ACK).

The shorthands "tACK" and "crACK" are only recognized with that exact case,
which keeps the words "tack" and "crack" out.
"""

import re
from dataclasses import dataclass

from ackamoto.models.verdict import VerdictCategory

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")
CLAUSE_PATTERN = re.compile(r"[.!?;,\n]+")

# Case-sensitive shorthands, expanded before lower-casing
SHORTHANDS = (
    (re.compile(r"(?<![A-Za-z0-9])tACK(?![A-Za-z0-9])"), "tested ACK"),
    (re.compile(r"(?<![A-Za-z0-9])crACK(?![A-Za-z0-9])"), "cr ACK"),
)

# "haven't" tokenizes as ("haven", "t")
NEGATORS = frozenset(
    {"not", "no", "never", "without", "haven", "hasn", "hadn", "didn", "doesn", "isn", "wasn"}
)

DEFAULT_MODIFIER_WINDOW = 2


@dataclass(frozen=True)
class LexiconEntry:
    """Phrases that map to one verdict category."""

    category: VerdictCategory
    phrases: tuple[tuple[str, ...], ...]

    @property
    def keywords(self) -> set[str]:
        """Verdict keywords used by this entry's phrases."""
        return {phrase[-1] for phrase in self.phrases}


LEXICON: tuple[LexiconEntry, ...] = (
    LexiconEntry(VerdictCategory.TESTED_ACK, (("tested", "ack"),)),
    LexiconEntry(VerdictCategory.CODE_REVIEW_ACK, (("code", "review", "ack"), ("cr", "ack"))),
    LexiconEntry(VerdictCategory.ACK, (("ack",), ("reack",))),
    LexiconEntry(VerdictCategory.CONCEPT_ACK, (("concept", "ack"),)),
    LexiconEntry(VerdictCategory.APPROACH_ACK, (("approach", "ack"),)),
    LexiconEntry(
        VerdictCategory.UTACK,
        (("utack",), ("reutack",), ("ut", "ack"), ("untested", "ack")),
    ),
    LexiconEntry(VerdictCategory.STRONG_NACK, (("strong", "nack"),)),
    LexiconEntry(VerdictCategory.NACK, (("nack",),)),
    LexiconEntry(VerdictCategory.CONCEPT_NACK, (("concept", "nack"),)),
    LexiconEntry(VerdictCategory.WEAK_NACK, (("weak", "nack"),)),
)


def expand_shorthands(text: str) -> str:
    """Spell out case-sensitive shorthands such as "tACK"."""
    for pattern, replacement in SHORTHANDS:
        text = pattern.sub(replacement, text)
    return text


def tokenize(text: str) -> list[str]:
    """Split text into lower-case alphanumeric tokens."""
    return TOKEN_PATTERN.findall(expand_shorthands(text).lower())


def split_clauses(text: str) -> list[list[str]]:
    """Tokenize text clause by clause, dropping empty clauses."""
    clauses = []
    for clause in CLAUSE_PATTERN.split(text):
        tokens = tokenize(clause)
        if tokens:
            clauses.append(tokens)
    return clauses


class VerdictLexicon:
    """Matches comment text against an ordered table of verdict phrases."""

    def __init__(
        self,
        entries: tuple[LexiconEntry, ...] = LEXICON,
        modifier_window: int = DEFAULT_MODIFIER_WINDOW,
    ) -> None:
        """Initialize the lexicon.

        Args:
            entries: Lexicon table; sorted by category precedence
            modifier_window: Max tokens allowed between a modifier and its keyword
        """
        self.entries = tuple(sorted(entries, key=lambda e: e.category.rank))
        self.modifier_window = modifier_window
        self._keywords = set().union(*(entry.keywords for entry in self.entries))

    def match(self, text: str) -> VerdictCategory:
        """Return the highest-precedence verdict found in text.

        Args:
            text: Comment text, already stripped of quotes and code blocks

        Returns:
            Matched category, or UNCLASSIFIED if nothing matched
        """
        found = self.find_all(text)
        if not found:
            return VerdictCategory.UNCLASSIFIED
        return min(found, key=lambda category: category.rank)

    def find_all(self, text: str) -> list[VerdictCategory]:
        """Return one category per verdict keyword occurrence, in text order."""
        found = []
        for tokens in split_clauses(text):
            for index, token in enumerate(tokens):
                if token not in self._keywords:
                    continue
                category = self._match_at(tokens, index)
                if category is not None:
                    found.append(category)
        return found

    def _match_at(self, tokens: list[str], index: int) -> VerdictCategory | None:
        """Classify the keyword at ``tokens[index]``.

        The phrase whose modifier sits closest to the keyword wins; a bare
        keyword only counts when no qualified phrase applies. Equal distances
        fall back to precedence.
        """
        best: tuple[int, int, VerdictCategory] | None = None
        for entry in self.entries:
            for phrase in entry.phrases:
                if phrase[-1] != tokens[index]:
                    continue
                gap = self._modifier_gap(tokens, index, phrase[:-1])
                if gap is None:
                    continue
                candidate = (gap, entry.category.rank, entry.category)
                if best is None or candidate[:2] < best[:2]:
                    best = candidate
        return best[2] if best else None

    def _modifier_gap(self, tokens: list[str], index: int, modifier: tuple[str, ...]) -> int | None:
        """Distance between a modifier and the keyword at index, None if absent.

        A modifier never reaches across another verdict keyword, and a
        negated modifier does not count.
        """
        if not modifier:
            return self.modifier_window + 1

        size = len(modifier)
        for gap in range(self.modifier_window + 1):
            end = index - gap
            start = end - size
            if start < 0:
                break
            if gap and tokens[end] in self._keywords:
                break
            if tuple(tokens[start:end]) == modifier:
                return None if _is_negated(tokens, start) else gap
        return None


def _is_negated(tokens: list[str], start: int) -> bool:
    """Check whether the token before ``tokens[start]`` is a negation."""
    before = start - 1
    if before >= 0 and tokens[before] == "t":
        before -= 1
    return before >= 0 and tokens[before] in NEGATORS

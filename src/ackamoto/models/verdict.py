"""Verdict categories and the labels derived from them."""

from enum import Enum


class Mode(Enum):
    """Which verdict family a run reports on."""

    ACK = "ack"
    NACK = "nack"


class VerdictFamily(Enum):
    """Sentiment family a verdict category belongs to."""

    ACK = "ack"
    NACK = "nack"
    NONE = "none"


class VerdictCategory(Enum):
    """Recognized review verdicts.

    Declaration order is precedence order: when a comment matches several
    categories, the one declared first wins. The same order is used for
    display.
    """

    TESTED_ACK = "Tested ACK"  # Full review, built and tested
    CODE_REVIEW_ACK = "Code Review ACK"
    ACK = "ACK"
    CONCEPT_ACK = "Concept ACK"
    APPROACH_ACK = "Approach ACK"
    UTACK = "utACK"  # Reviewed, not tested
    STRONG_NACK = "Strong NACK"
    NACK = "NACK"
    CONCEPT_NACK = "Concept NACK"
    WEAK_NACK = "Weak NACK"
    UNCLASSIFIED = "Unclassified"

    @property
    def label(self) -> str:
        """Human-readable label, as reviewers write it."""
        return self.value

    @property
    def family(self) -> VerdictFamily:
        """Sentiment family of this category."""
        if self is VerdictCategory.UNCLASSIFIED:
            return VerdictFamily.NONE
        if self.name.endswith("NACK"):
            return VerdictFamily.NACK
        return VerdictFamily.ACK

    @property
    def rank(self) -> int:
        """Precedence rank, 0 being the strongest."""
        return list(VerdictCategory).index(self)

    @property
    def is_classified(self) -> bool:
        """Whether this is a real verdict rather than UNCLASSIFIED."""
        return self is not VerdictCategory.UNCLASSIFIED

    @classmethod
    def classified(cls) -> list["VerdictCategory"]:
        """All categories except UNCLASSIFIED, in precedence order."""
        return [category for category in cls if category.is_classified]

    @classmethod
    def for_mode(cls, mode: Mode) -> list["VerdictCategory"]:
        """Categories in the primary family of a mode."""
        family = primary_family(mode)
        return [category for category in cls if category.family is family]


class Disposition(Enum):
    """Overall state of a pull request's review."""

    ACKED = "ACKed"
    NACKED = "NACKed"
    UNREVIEWED = "Unreviewed"


def primary_family(mode: Mode) -> VerdictFamily:
    """Verdict family that a mode reports on."""
    return VerdictFamily.ACK if mode is Mode.ACK else VerdictFamily.NACK

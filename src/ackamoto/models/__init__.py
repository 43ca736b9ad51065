"""Data models for ackamoto."""

from ackamoto.models.comment import ClassifiedComment, PullRequestMeta, RawComment
from ackamoto.models.report import (
    AggregationResult,
    CategoryBucket,
    PRReport,
    ReviewerState,
    VerdictReport,
)
from ackamoto.models.verdict import (
    Disposition,
    Mode,
    VerdictCategory,
    VerdictFamily,
    primary_family,
)

__all__ = [
    "AggregationResult",
    "CategoryBucket",
    "ClassifiedComment",
    "Disposition",
    "Mode",
    "PRReport",
    "PullRequestMeta",
    "RawComment",
    "ReviewerState",
    "VerdictCategory",
    "VerdictFamily",
    "VerdictReport",
    "primary_family",
]

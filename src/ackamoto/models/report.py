"""Review state and report models."""

from dataclasses import dataclass, field
from datetime import datetime

from ackamoto.models.comment import PullRequestMeta
from ackamoto.models.verdict import Disposition, Mode, VerdictCategory, VerdictFamily


@dataclass(frozen=True)
class ReviewerState:
    """Current verdict of one reviewer on one pull request."""

    pr_number: int
    author: str
    category: VerdictCategory
    timestamp: datetime
    commit: str | None = None
    comment_id: int = 0
    comment_url: str = ""
    author_url: str = ""
    snippet: str = ""

    @property
    def key(self) -> tuple[int, str]:
        """The (PR, author) pair this state belongs to."""
        return (self.pr_number, self.author)


@dataclass(frozen=True)
class AggregationResult:
    """Output of folding a run's classified comments."""

    states: tuple[ReviewerState, ...]
    pr_numbers: frozenset[int] = frozenset()  # PRs with at least one valid comment
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryBucket:
    """Reviewers currently holding one verdict category on a PR."""

    category: VerdictCategory
    reviewers: tuple[ReviewerState, ...] = ()

    @property
    def authors(self) -> list[str]:
        """Reviewer logins in bucket order."""
        return [state.author for state in self.reviewers]

    @property
    def count(self) -> int:
        """Number of reviewers in the bucket."""
        return len(self.reviewers)


@dataclass(frozen=True)
class PRReport:
    """Aggregated review state of a single pull request."""

    pr: PullRequestMeta
    buckets: tuple[CategoryBucket, ...]
    disposition: Disposition
    primary_count: int = 0
    last_activity: datetime | None = None

    @property
    def number(self) -> int:
        """Pull request number."""
        return self.pr.number

    @property
    def total(self) -> int:
        """Number of reviewers with a verdict."""
        return sum(bucket.count for bucket in self.buckets)

    def bucket(self, category: VerdictCategory) -> CategoryBucket:
        """Get the bucket for a category (empty if absent)."""
        for bucket in self.buckets:
            if bucket.category is category:
                return bucket
        return CategoryBucket(category=category)

    def authors_by_category(self) -> dict[VerdictCategory, list[str]]:
        """Ordered mapping from category to reviewer logins."""
        return {bucket.category: bucket.authors for bucket in self.buckets}

    def counts(self) -> dict[VerdictCategory, int]:
        """Ordered mapping from category to reviewer count."""
        return {bucket.category: bucket.count for bucket in self.buckets}

    def reviewers(self, family: VerdictFamily | None = None) -> list[ReviewerState]:
        """All reviewer states, optionally limited to one verdict family."""
        return [
            state
            for bucket in self.buckets
            if family is None or bucket.category.family is family
            for state in bucket.reviewers
        ]


@dataclass(frozen=True)
class VerdictReport:
    """Everything one run hands to the renderer."""

    mode: Mode
    generated_at: datetime
    pull_requests: tuple[PRReport, ...] = ()
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def reviewer_count(self) -> int:
        """Number of (PR, reviewer) verdicts across the report."""
        return sum(report.total for report in self.pull_requests)

    @property
    def primary_count(self) -> int:
        """Number of verdicts in the mode's primary family."""
        return sum(report.primary_count for report in self.pull_requests)

    @property
    def disposition_counts(self) -> dict[Disposition, int]:
        """Count PRs by disposition."""
        counts: dict[Disposition, int] = dict.fromkeys(Disposition, 0)
        for report in self.pull_requests:
            counts[report.disposition] += 1
        return counts

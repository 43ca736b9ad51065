"""Pull request and comment models."""

from dataclasses import dataclass
from datetime import datetime

from ackamoto.models.verdict import VerdictCategory


@dataclass(frozen=True)
class PullRequestMeta:
    """Metadata for a pull request, as delivered by the fetcher."""

    number: int
    title: str
    author: str | None = None
    url: str = ""
    state: str = "open"
    merged: bool = False
    is_placeholder: bool = False

    @classmethod
    def placeholder(cls, number: int) -> "PullRequestMeta":
        """Stand-in metadata for a PR seen in comments but not in the PR listing."""
        return cls(number=number, title=f"PR #{number}", is_placeholder=True)


@dataclass(frozen=True)
class RawComment:
    """A single PR comment as fetched.

    Fields may be missing when the source delivered a broken record; the
    aggregator skips those with a warning.
    """

    pr_number: int | None
    author: str | None
    body: str
    created_at: datetime | None
    comment_id: int = 0
    url: str = ""
    author_url: str = ""


@dataclass(frozen=True)
class ClassifiedComment:
    """A raw comment with the verdict found in its text."""

    raw: RawComment
    category: VerdictCategory
    commit: str | None = None
    snippet: str = ""

    @property
    def is_classified(self) -> bool:
        """Whether a verdict was found."""
        return self.category.is_classified

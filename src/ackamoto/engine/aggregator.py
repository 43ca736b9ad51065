"""Review state aggregator: folds classified comments into current verdicts."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from ackamoto.models.comment import ClassifiedComment, PullRequestMeta, RawComment
from ackamoto.models.report import AggregationResult, ReviewerState

logger = logging.getLogger(__name__)


@dataclass
class AggregatorConfig:
    """Configuration for the aggregator."""

    exclude_bots: bool = True
    bot_markers: tuple[str, ...] = ("bot",)
    ignored_authors: tuple[str, ...] = ("bitcoin-core-ci",)


class ReviewStateAggregator:
    """Keeps the latest verdict of every reviewer on every pull request."""

    def __init__(self, config: AggregatorConfig | None = None) -> None:
        """Initialize the aggregator.

        Args:
            config: Optional configuration
        """
        self.config = config or AggregatorConfig()

    def aggregate(
        self,
        comments: Iterable[ClassifiedComment],
        pull_requests: Mapping[int, PullRequestMeta] | None = None,
    ) -> AggregationResult:
        """Fold a run's classified comments into reviewer states.

        Algorithm:
        1. Skip records with no PR, author or usable timestamp (with a warning)
        2. Drop bots, ignored authors and comments by the PR's own author
        3. Sort by (PR, author, timestamp, comment id)
        4. Replay each (PR, author) group: a categorized comment replaces the
           running state, an unclassified one leaves it alone

        Args:
            comments: Classified comments in any order
            pull_requests: PR metadata by number, used for self-review exclusion

        Returns:
            Final states for every pair holding a verdict, plus warnings
        """
        pull_requests = pull_requests or {}
        warnings: list[str] = []
        pr_numbers: set[int] = set()
        usable: list[tuple[datetime, ClassifiedComment]] = []

        for comment in comments:
            raw = comment.raw
            defect = self._find_defect(raw)
            if defect:
                message = (
                    f"Skipping comment {raw.comment_id} on PR #{raw.pr_number}: {defect}"
                )
                logger.warning(message)
                warnings.append(message)
                continue

            pr_numbers.add(raw.pr_number)

            if self._is_ignored_author(raw.author):
                logger.debug(f"Ignoring comment {raw.comment_id} from {raw.author}")
                continue

            if self._is_self_review(raw, pull_requests.get(raw.pr_number)):
                logger.debug(f"Ignoring self-review by {raw.author} on PR #{raw.pr_number}")
                continue

            usable.append((self._normalize_timestamp(raw.created_at), comment))

        usable.sort(
            key=lambda item: (
                item[1].raw.pr_number,
                item[1].raw.author,
                item[0],
                item[1].raw.comment_id or 0,
            )
        )

        states: dict[tuple[int, str], ReviewerState] = {}
        for timestamp, comment in usable:
            if not comment.is_classified:
                continue
            state = self._to_state(comment, timestamp)
            states[state.key] = state

        logger.info(
            f"Aggregated {len(usable)} comments into {len(states)} reviewer verdicts "
            f"across {len(pr_numbers)} PRs"
        )

        return AggregationResult(
            states=tuple(states[key] for key in sorted(states)),
            pr_numbers=frozenset(pr_numbers),
            warnings=tuple(warnings),
        )

    def _find_defect(self, raw: RawComment) -> str | None:
        """Describe what makes a record unusable, None if it is fine."""
        if not isinstance(raw.pr_number, int):
            return "missing PR number"
        if not raw.author:
            return "missing author"
        if raw.created_at is None:
            return "missing timestamp"
        if not isinstance(raw.created_at, datetime):
            return f"malformed timestamp {raw.created_at!r}"
        return None

    def _is_ignored_author(self, author: str) -> bool:
        """Check if an author is a bot or explicitly ignored."""
        login = author.lower()
        if login in {name.lower() for name in self.config.ignored_authors}:
            return True
        if self.config.exclude_bots:
            return any(marker in login for marker in self.config.bot_markers)
        return False

    def _is_self_review(self, raw: RawComment, pr: PullRequestMeta | None) -> bool:
        """Check if a comment was written by the PR's author."""
        if pr is None or not pr.author:
            return False
        return raw.author.lower() == pr.author.lower()

    def _normalize_timestamp(self, timestamp: datetime) -> datetime:
        """Treat naive timestamps as UTC so all timestamps compare."""
        if timestamp.tzinfo is None:
            return timestamp.replace(tzinfo=timezone.utc)
        return timestamp

    def _to_state(self, comment: ClassifiedComment, timestamp: datetime) -> ReviewerState:
        """Build the reviewer state a categorized comment produces."""
        raw = comment.raw
        return ReviewerState(
            pr_number=raw.pr_number,
            author=raw.author,
            category=comment.category,
            timestamp=timestamp,
            commit=comment.commit,
            comment_id=raw.comment_id,
            comment_url=raw.url,
            author_url=raw.author_url,
            snippet=comment.snippet,
        )

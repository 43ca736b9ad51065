"""Report builder: per-PR summaries from the final reviewer states."""

import logging
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from ackamoto.models.comment import PullRequestMeta
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

logger = logging.getLogger(__name__)

SORT_KEYS = ("activity", "number", "primary")

_NO_ACTIVITY = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class ReportBuilderConfig:
    """Configuration for the report builder."""

    sort_by: str = "activity"
    primary_only: bool = False


class ReportBuilder:
    """Turns reviewer states into an ordered list of PR reports."""

    def __init__(self, config: ReportBuilderConfig | None = None) -> None:
        """Initialize the report builder.

        Args:
            config: Optional configuration

        Raises:
            ValueError: If the configured sort key is unknown
        """
        self.config = config or ReportBuilderConfig()
        if self.config.sort_by not in SORT_KEYS:
            raise ValueError(
                f"Unknown sort key {self.config.sort_by!r}, expected one of {', '.join(SORT_KEYS)}"
            )

    def build(
        self,
        aggregation: AggregationResult,
        pull_requests: Mapping[int, PullRequestMeta],
        mode: Mode = Mode.ACK,
        generated_at: datetime | None = None,
    ) -> VerdictReport:
        """Build the report for one run.

        Every PR in the metadata gets a report, as does every PR that only
        shows up in comments (with placeholder metadata and a warning).

        Args:
            aggregation: Output of the aggregator
            pull_requests: PR metadata by number
            mode: Which verdict family is primary for this run
            generated_at: Report timestamp (default: now)

        Returns:
            Report with PRs in presentation order
        """
        warnings = list(aggregation.warnings)

        states_by_pr: dict[int, list[ReviewerState]] = defaultdict(list)
        for state in aggregation.states:
            states_by_pr[state.pr_number].append(state)

        numbers = set(pull_requests) | set(states_by_pr) | aggregation.pr_numbers
        reports = []
        for number in sorted(numbers):
            pr = pull_requests.get(number)
            if pr is None:
                message = f"PR #{number} has comments but no metadata, using a placeholder"
                logger.warning(message)
                warnings.append(message)
                pr = PullRequestMeta.placeholder(number)
            reports.append(self._build_pr_report(pr, states_by_pr.get(number, []), mode))

        if self.config.primary_only:
            reports = [report for report in reports if report.primary_count > 0]

        reports.sort(key=self._sort_key, reverse=True)

        return VerdictReport(
            mode=mode,
            generated_at=generated_at or datetime.now(timezone.utc),
            pull_requests=tuple(reports),
            warnings=tuple(warnings),
        )

    def _build_pr_report(
        self, pr: PullRequestMeta, states: list[ReviewerState], mode: Mode
    ) -> PRReport:
        """Bucket one PR's reviewers by verdict."""
        by_category: dict[VerdictCategory, list[ReviewerState]] = defaultdict(list)
        for state in states:
            by_category[state.category].append(state)

        buckets = tuple(
            CategoryBucket(
                category=category,
                reviewers=tuple(
                    sorted(by_category[category], key=lambda s: (s.timestamp, s.author))
                ),
            )
            for category in VerdictCategory.classified()
        )

        family = primary_family(mode)
        return PRReport(
            pr=pr,
            buckets=buckets,
            disposition=self._disposition(buckets),
            primary_count=sum(b.count for b in buckets if b.category.family is family),
            last_activity=max((s.timestamp for s in states), default=None),
        )

    def _disposition(self, buckets: tuple[CategoryBucket, ...]) -> Disposition:
        """NACKed beats ACKed; no verdicts at all means unreviewed."""
        families = {bucket.category.family for bucket in buckets if bucket.count}
        if VerdictFamily.NACK in families:
            return Disposition.NACKED
        if VerdictFamily.ACK in families:
            return Disposition.ACKED
        return Disposition.UNREVIEWED

    def _sort_key(self, report: PRReport) -> tuple:
        """Descending sort key for the configured ordering."""
        activity = (report.last_activity is not None, report.last_activity or _NO_ACTIVITY)
        if self.config.sort_by == "number":
            return (report.number,)
        if self.config.sort_by == "primary":
            return (report.primary_count, *activity, report.number)
        return (*activity, report.number)

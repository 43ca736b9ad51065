"""Verdict tracking pipeline: classify, aggregate, build.

The engine itself does no I/O. ``fetch_and_track`` is the one place where
fetching and the engine meet.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime

from ackamoto.config import Config
from ackamoto.engine.aggregator import ReviewStateAggregator
from ackamoto.engine.classifier import CommentClassifier
from ackamoto.engine.lexicon import VerdictLexicon
from ackamoto.engine.report_builder import ReportBuilder
from ackamoto.github.client import GitHubClient
from ackamoto.models.comment import PullRequestMeta, RawComment
from ackamoto.models.report import VerdictReport
from ackamoto.models.verdict import Mode

logger = logging.getLogger(__name__)


def build_classifier(config: Config) -> CommentClassifier:
    """Create a classifier from configuration."""
    lexicon = VerdictLexicon(modifier_window=config.classifier.modifier_window)
    return CommentClassifier(lexicon=lexicon, snippet_length=config.classifier.snippet_length)


def track_verdicts(
    comments: Iterable[RawComment],
    pull_requests: Mapping[int, PullRequestMeta],
    mode: Mode = Mode.ACK,
    config: Config | None = None,
    generated_at: datetime | None = None,
) -> VerdictReport:
    """Turn a run's raw comments into a verdict report.

    Args:
        comments: Raw comments, in any order
        pull_requests: PR metadata by number
        mode: Which verdict family the report is about
        config: Configuration (defaults if omitted)
        generated_at: Report timestamp (default: now)

    Returns:
        The report, with any data warnings attached
    """
    config = config or Config()

    classified = build_classifier(config).classify_all(comments)
    aggregation = ReviewStateAggregator(config.aggregator).aggregate(classified, pull_requests)
    report = ReportBuilder(config.report).build(
        aggregation, pull_requests, mode=mode, generated_at=generated_at
    )

    logger.info(
        f"{mode.value.upper()} report: {len(report.pull_requests)} PRs, "
        f"{report.primary_count} {mode.value.upper()}s, {len(report.warnings)} warnings"
    )
    return report


def fetch_and_track(client: GitHubClient, config: Config, mode: Mode) -> VerdictReport:
    """Fetch the configured repository and build its verdict report.

    Args:
        client: GitHub client
        config: Configuration
        mode: Which verdict family the report is about

    Returns:
        The report, with fetch warnings ahead of data warnings

    Raises:
        FetchError: If the PR listing cannot be fetched
    """
    if not config.github.token:
        logger.warning("No GITHUB_TOKEN found. API requests will be limited.")

    limit = min(config.pr_limit, config.fetch.per_page * config.fetch.max_pages)
    fetched = client.fetch(
        config.github.repo,
        limit=limit,
        request_delay=config.fetch.request_delay_seconds,
    )

    report = track_verdicts(fetched.comments, fetched.pull_requests, mode=mode, config=config)
    return replace(report, warnings=tuple(fetched.warnings) + report.warnings)

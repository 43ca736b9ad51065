"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

BASE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """Timestamp a number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def make_comment():
    """Factory for raw comments with unique ids."""
    from ackamoto.models.comment import RawComment

    ids = iter(range(1, 100_000))

    def _make(
        body: str,
        author: str = "alice",
        pr_number: int = 100,
        minutes: int = 0,
        comment_id: int | None = None,
    ) -> RawComment:
        comment_id = comment_id if comment_id is not None else next(ids)
        return RawComment(
            pr_number=pr_number,
            author=author,
            body=body,
            created_at=at(minutes),
            comment_id=comment_id,
            url=f"https://github.com/bitcoin/bitcoin/pull/{pr_number}#issuecomment-{comment_id}",
            author_url=f"https://github.com/{author}",
        )

    return _make


@pytest.fixture
def make_classified(make_comment):
    """Factory for classified comments with a given category."""
    from ackamoto.models.comment import ClassifiedComment

    def _make(category, author="alice", pr_number=100, minutes=0, commit=None, comment_id=None):
        raw = make_comment(
            category.label,
            author=author,
            pr_number=pr_number,
            minutes=minutes,
            comment_id=comment_id,
        )
        return ClassifiedComment(raw=raw, category=category, commit=commit)

    return _make


@pytest.fixture
def make_state():
    """Factory for reviewer states."""
    from ackamoto.models.report import ReviewerState

    def _make(category, author="alice", pr_number=100, minutes=0, commit=None):
        return ReviewerState(
            pr_number=pr_number,
            author=author,
            category=category,
            timestamp=at(minutes),
            commit=commit,
        )

    return _make


@pytest.fixture
def pull_requests() -> dict:
    """PR metadata for two PRs: #100 by bob, #200 by carol."""
    from ackamoto.models.comment import PullRequestMeta

    return {
        100: PullRequestMeta(
            number=100,
            title="wallet: add descriptor import",
            author="bob",
            url="https://github.com/bitcoin/bitcoin/pull/100",
        ),
        200: PullRequestMeta(
            number=200,
            title="net: refactor peer eviction",
            author="carol",
            url="https://github.com/bitcoin/bitcoin/pull/200",
        ),
    }

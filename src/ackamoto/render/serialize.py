"""JSON-ready form of a verdict report."""

from typing import Any

from ackamoto.models.report import CategoryBucket, PRReport, ReviewerState, VerdictReport


def _state_to_dict(state: ReviewerState) -> dict[str, Any]:
    return {
        "author": state.author,
        "author_url": state.author_url,
        "timestamp": state.timestamp.isoformat(),
        "commit": state.commit,
        "comment_id": state.comment_id,
        "comment_url": state.comment_url,
        "snippet": state.snippet,
    }


def _bucket_to_dict(bucket: CategoryBucket) -> dict[str, Any]:
    return {
        "category": bucket.category.label,
        "family": bucket.category.family.value,
        "count": bucket.count,
        "reviewers": [_state_to_dict(state) for state in bucket.reviewers],
    }


def pr_report_to_dict(report: PRReport) -> dict[str, Any]:
    """Serialize one PR report."""
    return {
        "number": report.pr.number,
        "title": report.pr.title,
        "url": report.pr.url,
        "author": report.pr.author,
        "state": report.pr.state,
        "merged": report.pr.merged,
        "placeholder": report.pr.is_placeholder,
        "disposition": report.disposition.value,
        "total": report.total,
        "primary_count": report.primary_count,
        "last_activity": report.last_activity.isoformat() if report.last_activity else None,
        "buckets": [_bucket_to_dict(bucket) for bucket in report.buckets],
    }


def report_to_dict(report: VerdictReport) -> dict[str, Any]:
    """Serialize a full report: one record per PR, one sub-record per bucket.

    Args:
        report: Verdict report

    Returns:
        Dict made of JSON-compatible values only
    """
    return {
        "mode": report.mode.value,
        "generated_at": report.generated_at.isoformat(),
        "pull_requests": [pr_report_to_dict(pr) for pr in report.pull_requests],
        "warnings": list(report.warnings),
    }

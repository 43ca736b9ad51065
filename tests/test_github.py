"""Tests for GitHub integration."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest


def _mock_pr(number, title="Some change", author="bob", merged=False):
    pr = MagicMock()
    pr.number = number
    pr.title = title
    pr.user.login = author
    pr.html_url = f"https://github.com/bitcoin/bitcoin/pull/{number}"
    pr.state = "closed" if merged else "open"
    pr.merged_at = datetime(2025, 6, 3, tzinfo=timezone.utc) if merged else None
    pr.get_issue_comments.return_value = []
    return pr


def _mock_comment(comment_id, body, author="alice"):
    comment = MagicMock()
    comment.id = comment_id
    comment.body = body
    comment.created_at = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
    comment.html_url = f"https://github.com/bitcoin/bitcoin/pull/1#issuecomment-{comment_id}"
    comment.user.login = author
    comment.user.html_url = f"https://github.com/{author}"
    return comment


class TestGitHubClient:
    """Tests for GitHub API client."""

    def test_authenticates_with_token(self):
        """Test that a token is passed as auth and pagination is configured."""
        from ackamoto.github.client import GitHubClient

        with patch("ackamoto.github.client.Github") as mock_github:
            GitHubClient(token="test-token", per_page=50)

            kwargs = mock_github.call_args.kwargs
            assert kwargs["per_page"] == 50
            assert "auth" in kwargs

    def test_unauthenticated_without_token(self):
        """Test that no auth is configured without a token."""
        from ackamoto.github.client import GitHubClient

        with patch("ackamoto.github.client.Github") as mock_github:
            GitHubClient(token="", base_url="https://ghe.example.com/api/v3")

            kwargs = mock_github.call_args.kwargs
            assert "auth" not in kwargs
            assert kwargs["base_url"] == "https://ghe.example.com/api/v3"

    def test_lists_newest_prs_up_to_limit(self):
        """Test that the PR listing stops at the limit."""
        from ackamoto.github.client import GitHubClient

        with patch("ackamoto.github.client.Github") as mock_github:
            repo = mock_github.return_value.get_repo.return_value
            repo.get_pulls.return_value = [_mock_pr(n) for n in (30, 20, 10)]

            client = GitHubClient(token="test-token")
            pulls = client.list_pull_requests("bitcoin/bitcoin", limit=2)

            assert [pr.number for pr in pulls] == [30, 20]
            repo.get_pulls.assert_called_once_with(state="all", sort="created", direction="desc")

    def test_listing_failure_raises_fetch_error(self):
        """Test that API errors on the listing become FetchError."""
        from github.GithubException import GithubException

        from ackamoto.github.client import FetchError, GitHubClient

        with patch("ackamoto.github.client.Github") as mock_github:
            mock_github.return_value.get_repo.side_effect = GithubException(
                404, {"message": "Not Found"}, None
            )

            client = GitHubClient(token="test-token")
            with pytest.raises(FetchError, match="bitcoin/nope"):
                client.list_pull_requests("bitcoin/nope", limit=10)


class TestFetch:
    """Tests for GitHubClient.fetch."""

    def test_converts_prs_and_comments(self):
        """Test conversion of PyGithub objects into plain records."""
        from ackamoto.github.client import GitHubClient

        pr = _mock_pr(100, title="wallet: add descriptor import", merged=True)
        pr.get_issue_comments.return_value = [_mock_comment(7, "ACK ab12cd34")]

        with patch("ackamoto.github.client.Github") as mock_github, patch(
            "ackamoto.github.client.time.sleep"
        ):
            mock_github.return_value.get_repo.return_value.get_pulls.return_value = [pr]

            result = GitHubClient(token="test-token").fetch("bitcoin/bitcoin", limit=10)

        meta = result.pull_requests[100]
        assert meta.title == "wallet: add descriptor import"
        assert meta.author == "bob"
        assert meta.merged
        assert meta.state == "closed"

        (comment,) = result.comments
        assert comment.pr_number == 100
        assert comment.author == "alice"
        assert comment.body == "ACK ab12cd34"
        assert comment.comment_id == 7
        assert comment.author_url == "https://github.com/alice"
        assert result.warnings == []

    def test_deleted_user_has_no_author(self):
        """Test that comments from deleted accounts carry no author."""
        from ackamoto.github.client import GitHubClient

        pr = _mock_pr(100)
        ghost = _mock_comment(8, "ACK")
        ghost.user = None
        pr.get_issue_comments.return_value = [ghost]

        with patch("ackamoto.github.client.Github") as mock_github, patch(
            "ackamoto.github.client.time.sleep"
        ):
            mock_github.return_value.get_repo.return_value.get_pulls.return_value = [pr]

            result = GitHubClient().fetch("bitcoin/bitcoin", limit=10)

        assert result.comments[0].author is None
        assert result.comments[0].author_url == ""

    def test_comment_failure_is_a_warning(self):
        """Test that one PR's failed comment fetch does not abort the run."""
        from github.GithubException import GithubException

        from ackamoto.github.client import GitHubClient

        broken = _mock_pr(200)
        broken.get_issue_comments.side_effect = GithubException(502, {"message": "Bad Gateway"}, None)
        healthy = _mock_pr(100)
        healthy.get_issue_comments.return_value = [_mock_comment(9, "NACK")]

        with patch("ackamoto.github.client.Github") as mock_github, patch(
            "ackamoto.github.client.time.sleep"
        ):
            mock_github.return_value.get_repo.return_value.get_pulls.return_value = [
                broken,
                healthy,
            ]

            result = GitHubClient().fetch("bitcoin/bitcoin", limit=10)

        assert set(result.pull_requests) == {100, 200}
        assert [c.comment_id for c in result.comments] == [9]
        assert len(result.warnings) == 1
        assert "PR #200" in result.warnings[0]

    def test_sleeps_between_prs(self):
        """Test the delay between per-PR requests."""
        from ackamoto.github.client import GitHubClient

        with patch("ackamoto.github.client.Github") as mock_github, patch(
            "ackamoto.github.client.time.sleep"
        ) as mock_sleep:
            mock_github.return_value.get_repo.return_value.get_pulls.return_value = [
                _mock_pr(n) for n in (3, 2, 1)
            ]

            GitHubClient().fetch("bitcoin/bitcoin", limit=10, request_delay=0.5)

        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.5)

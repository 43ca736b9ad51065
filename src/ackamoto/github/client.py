"""GitHub API client: fetches pull requests and their comments."""

import logging
import time
from dataclasses import dataclass, field

import requests
from github import Auth, Github
from github.GithubException import GithubException
from github.IssueComment import IssueComment
from github.PullRequest import PullRequest

from ackamoto.models.comment import PullRequestMeta, RawComment

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when the pull request listing cannot be fetched."""


@dataclass
class FetchResult:
    """Everything fetched for one run."""

    pull_requests: dict[int, PullRequestMeta] = field(default_factory=dict)
    comments: list[RawComment] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class GitHubClient:
    """Client for reading PRs and issue comments from GitHub."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        per_page: int = 100,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub token; unauthenticated if empty
            base_url: Optional base URL for GitHub Enterprise
            per_page: Page size for paginated listings
        """
        kwargs: dict = {"per_page": per_page}
        if token:
            kwargs["auth"] = Auth.Token(token)
        if base_url:
            kwargs["base_url"] = base_url
        self._gh = Github(**kwargs)

    def list_pull_requests(self, repo_name: str, limit: int) -> list[PullRequest]:
        """List the newest pull requests of a repository, open or closed.

        Args:
            repo_name: Repository in "owner/name" format
            limit: Maximum number of PRs to return

        Returns:
            Pull requests, newest first

        Raises:
            FetchError: If the listing cannot be fetched
        """
        pulls: list[PullRequest] = []
        try:
            repo = self._gh.get_repo(repo_name)
            for pr in repo.get_pulls(state="all", sort="created", direction="desc"):
                if len(pulls) >= limit:
                    break
                pulls.append(pr)
        except (GithubException, requests.RequestException) as e:
            raise FetchError(f"Failed to fetch PRs for {repo_name}: {e}") from e

        logger.info(f"Found {len(pulls)} pull requests in {repo_name}")
        return pulls

    def fetch(self, repo_name: str, limit: int, request_delay: float = 0.2) -> FetchResult:
        """Fetch PR metadata and issue comments for the newest PRs.

        A PR whose comments cannot be fetched is kept with no comments and a
        warning.

        Args:
            repo_name: Repository in "owner/name" format
            limit: Maximum number of PRs to scan
            request_delay: Seconds to wait between per-PR requests

        Returns:
            Fetched metadata, comments and warnings

        Raises:
            FetchError: If the PR listing cannot be fetched
        """
        pulls = self.list_pull_requests(repo_name, limit)
        result = FetchResult(pull_requests={pr.number: self._to_meta(pr) for pr in pulls})

        for i, pr in enumerate(pulls):
            if i % 10 == 0:
                logger.info(f"Processing PR {i + 1}/{len(pulls)}")

            try:
                comments = list(pr.get_issue_comments())
            except (GithubException, requests.RequestException) as e:
                message = f"Failed to fetch comments for PR #{pr.number}: {e}"
                logger.warning(message)
                result.warnings.append(message)
                comments = []

            result.comments.extend(self._to_raw_comment(pr.number, c) for c in comments)

            if request_delay and i < len(pulls) - 1:
                time.sleep(request_delay)

        logger.info(f"Fetched {len(result.comments)} comments from {len(pulls)} PRs")
        return result

    def _to_meta(self, pr: PullRequest) -> PullRequestMeta:
        """Convert a PyGithub pull request to metadata."""
        return PullRequestMeta(
            number=pr.number,
            title=pr.title or "",
            author=pr.user.login if pr.user else None,
            url=pr.html_url or "",
            state=pr.state or "open",
            merged=pr.merged_at is not None,
        )

    def _to_raw_comment(self, pr_number: int, comment: IssueComment) -> RawComment:
        """Convert a PyGithub issue comment to a raw comment.

        Comments from deleted accounts come through with no author.
        """
        user = comment.user
        return RawComment(
            pr_number=pr_number,
            author=user.login if user else None,
            body=comment.body or "",
            created_at=comment.created_at,
            comment_id=comment.id,
            url=comment.html_url or "",
            author_url=(user.html_url or "") if user else "",
        )

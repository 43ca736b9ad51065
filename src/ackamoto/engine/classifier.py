"""Comment classifier: one raw comment in, one classified comment out."""

import logging
import re
from collections.abc import Iterable

from ackamoto.engine.lexicon import VerdictLexicon
from ackamoto.models.comment import ClassifiedComment, RawComment

logger = logging.getLogger(__name__)

# Backtick info strings cannot contain backticks: "```x``` y" is inline code
FENCE_OPEN_PATTERN = re.compile(r"^ {0,3}(`{3,})[^`]*$|^ {0,3}(~{3,}).*$")
FENCE_CLOSE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})\s*$")
QUOTE_PATTERN = re.compile(r"^\s*>")
HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)

# Abbreviated or full commit hash, bare, backticked, after "commit" or in a URL
COMMIT_PATTERN = re.compile(r"\b([0-9a-f]{7,40})\b", re.IGNORECASE)

DEFAULT_SNIPPET_LENGTH = 200


def strip_quoted_text(body: str) -> str:
    """Remove text the comment author did not write themselves.

    Drops quoted-reply lines, fenced code blocks and HTML comments. An
    unclosed fence hides everything after it.

    Args:
        body: Raw comment body

    Returns:
        The author's own text
    """
    body = HTML_COMMENT_PATTERN.sub("", body)

    kept = []
    fence: str | None = None
    for line in body.splitlines():
        if fence is not None:
            close = FENCE_CLOSE_PATTERN.match(line)
            if close and close.group(1)[0] == fence[0] and len(close.group(1)) >= len(fence):
                fence = None
            continue
        opening = FENCE_OPEN_PATTERN.match(line)
        if opening:
            fence = opening.group(1) or opening.group(2)
            continue
        if QUOTE_PATTERN.match(line):
            continue
        kept.append(line)

    return "\n".join(kept)


def extract_commit(text: str) -> str | None:
    """Find the first commit hash referenced in text.

    A hash is a 7-40 character hexadecimal word mixing digits and letters,
    which keeps plain numbers and words like "decade" out.
    """
    for match in COMMIT_PATTERN.finditer(text):
        candidate = match.group(1).lower()
        if any(c.isdigit() for c in candidate) and any(c.isalpha() for c in candidate):
            return candidate
    return None


def truncate_comment(body: str, max_length: int = DEFAULT_SNIPPET_LENGTH) -> str:
    """Keep whole lines of a comment up to max_length characters."""
    result = ""
    for line in body.splitlines():
        if len(result) + len(line) > max_length:
            result += "..."
            break
        result += line + "\n"
    return result.strip()


class CommentClassifier:
    """Assigns a verdict category and commit reference to comments."""

    def __init__(
        self,
        lexicon: VerdictLexicon | None = None,
        snippet_length: int = DEFAULT_SNIPPET_LENGTH,
    ) -> None:
        """Initialize the classifier.

        Args:
            lexicon: Verdict lexicon (default table if omitted)
            snippet_length: Max characters kept in a comment snippet
        """
        self.lexicon = lexicon or VerdictLexicon()
        self.snippet_length = snippet_length

    def classify(self, comment: RawComment) -> ClassifiedComment:
        """Classify a single comment.

        Never fails: text with no recognizable verdict comes back as
        UNCLASSIFIED.

        Args:
            comment: Raw comment from the fetcher

        Returns:
            Classified comment
        """
        text = strip_quoted_text(comment.body or "")
        category = self.lexicon.match(text)
        commit = extract_commit(text)

        logger.debug(
            f"Comment {comment.comment_id} by {comment.author} on PR #{comment.pr_number}: "
            f"{category.label}" + (f" @ {commit}" if commit else "")
        )

        return ClassifiedComment(
            raw=comment,
            category=category,
            commit=commit,
            snippet=truncate_comment(text, self.snippet_length),
        )

    def classify_all(self, comments: Iterable[RawComment]) -> list[ClassifiedComment]:
        """Classify every comment, preserving input order."""
        return [self.classify(comment) for comment in comments]

"""Tests for the comment classifier."""

import pytest


class TestStripQuotedText:
    """Tests for strip_quoted_text."""

    def test_drops_quote_lines(self):
        """Test that quoted-reply lines are removed."""
        from ackamoto.engine.classifier import strip_quoted_text

        body = "> NACK\n>> older quote\n  > indented quote\nmy own text"
        assert strip_quoted_text(body) == "my own text"

    def test_drops_fenced_blocks(self):
        """Test that backtick and tilde fences are removed with their contents."""
        from ackamoto.engine.classifier import strip_quoted_text

        body = "before\n```diff\n- ACK\n```\nmiddle\n~~~\nNACK\n~~~\nafter"
        assert strip_quoted_text(body) == "before\nmiddle\nafter"

    def test_unclosed_fence_hides_rest(self):
        """Test that an unclosed fence swallows the remainder."""
        from ackamoto.engine.classifier import strip_quoted_text

        assert strip_quoted_text("text\n```\nACK\nmore") == "text"

    def test_inline_code_span_is_not_a_fence(self):
        """Test that a line opening with a triple-backtick span keeps what follows."""
        from ackamoto.engine.classifier import strip_quoted_text

        body = "```make check``` passes.\n\nACK"
        assert strip_quoted_text(body) == body

    def test_fence_closes_on_long_enough_run(self):
        """Test that only a matching run at least as long as the opener closes a fence."""
        from ackamoto.engine.classifier import strip_quoted_text

        body = "before\n````\n```\nNACK\n~~~~\n```` \nafter"
        assert strip_quoted_text(body) == "before\nafter"

    def test_drops_html_comments(self):
        """Test that HTML comments are removed."""
        from ackamoto.engine.classifier import strip_quoted_text

        assert strip_quoted_text("<!-- ACK\nhidden -->visible").strip() == "visible"


class TestExtractCommit:
    """Tests for extract_commit."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("ACK ab12cd34", "ab12cd34"),
            ("ACK `ab12cd34ef`", "ab12cd34ef"),
            ("ACK commit 0123abcd", "0123abcd"),
            ("ACK ABCD1234", "abcd1234"),
            (
                "ACK https://github.com/bitcoin/bitcoin/commit/fa12bc34de56",
                "fa12bc34de56",
            ),
            ("ACK fa12bc3 and then 99aa88bb", "fa12bc3"),
        ],
    )
    def test_finds_hashes(self, text, expected):
        """Test that commit hashes are found in their usual spellings."""
        from ackamoto.engine.classifier import extract_commit

        assert extract_commit(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["ACK 12345678", "ACK deadbeef", "ACK ab12cd", "ACK", "see #31245"],
    )
    def test_ignores_non_hashes(self, text):
        """Test that numbers, hex-looking words and short tokens are ignored."""
        from ackamoto.engine.classifier import extract_commit

        assert extract_commit(text) is None


class TestTruncateComment:
    """Tests for truncate_comment."""

    def test_short_comment_unchanged(self):
        """Test that short comments are kept whole."""
        from ackamoto.engine.classifier import truncate_comment

        assert truncate_comment("line one\nline two") == "line one\nline two"

    def test_cuts_at_line_boundary(self):
        """Test that truncation keeps whole lines and adds an ellipsis."""
        from ackamoto.engine.classifier import truncate_comment

        assert truncate_comment("aaaa\nbbbb\ncccc", max_length=9) == "aaaa\nbbbb\n..."


class TestCommentClassifier:
    """Tests for CommentClassifier."""

    def test_quoted_nack_ignored(self, make_comment):
        """Test that a quoted NACK does not outweigh the author's own ACK."""
        from ackamoto.engine.classifier import CommentClassifier
        from ackamoto.models.verdict import VerdictCategory

        comment = make_comment("> NACK, this breaks the wallet\n\nI disagree. ACK")
        result = CommentClassifier().classify(comment)

        assert result.category is VerdictCategory.ACK

    def test_code_block_only_is_unclassified(self, make_comment):
        """Test that a verdict inside a code block is not the author's verdict."""
        from ackamoto.engine.classifier import CommentClassifier
        from ackamoto.models.verdict import VerdictCategory

        comment = make_comment("Output:\n```\nACK received from peer\n```")
        result = CommentClassifier().classify(comment)

        assert result.category is VerdictCategory.UNCLASSIFIED
        assert not result.is_classified

    def test_inline_code_before_verdict(self, make_comment):
        """Test that an inline code span on its own line does not hide the verdict."""
        from ackamoto.engine.classifier import CommentClassifier
        from ackamoto.models.verdict import VerdictCategory

        comment = make_comment("```make check``` passes on my machine.\n\nACK ab12cd34")
        result = CommentClassifier().classify(comment)

        assert result.category is VerdictCategory.ACK
        assert result.commit == "ab12cd34"

    def test_attaches_commit(self, make_comment):
        """Test that the referenced commit is attached."""
        from ackamoto.engine.classifier import CommentClassifier
        from ackamoto.models.verdict import VerdictCategory

        result = CommentClassifier().classify(make_comment("ACK ab12cd34"))

        assert result.category is VerdictCategory.ACK
        assert result.commit == "ab12cd34"

    def test_commit_in_quote_ignored(self, make_comment):
        """Test that commit hashes in quoted text are not attributed."""
        from ackamoto.engine.classifier import CommentClassifier

        result = CommentClassifier().classify(make_comment("> ACK ab12cd34ef\nThanks"))

        assert result.commit is None

    def test_empty_body(self, make_comment):
        """Test that an empty body degrades to unclassified."""
        from ackamoto.engine.classifier import CommentClassifier
        from ackamoto.models.verdict import VerdictCategory

        result = CommentClassifier().classify(make_comment(""))

        assert result.category is VerdictCategory.UNCLASSIFIED
        assert result.commit is None
        assert result.snippet == ""

    def test_keeps_raw_comment(self, make_comment):
        """Test that the classified comment wraps the original record."""
        from ackamoto.engine.classifier import CommentClassifier

        comment = make_comment("Concept ACK")
        result = CommentClassifier().classify(comment)

        assert result.raw is comment
        assert result.snippet == "Concept ACK"

    def test_snippet_excludes_quotes(self, make_comment):
        """Test that the snippet shows only the author's text."""
        from ackamoto.engine.classifier import CommentClassifier

        result = CommentClassifier(snippet_length=10).classify(
            make_comment("> quoted\nACK\nsome longer explanation here")
        )

        assert result.snippet == "ACK\n..."

    def test_classify_all_keeps_order(self, make_comment):
        """Test that classify_all returns one result per comment, in order."""
        from ackamoto.engine.classifier import CommentClassifier
        from ackamoto.models.verdict import VerdictCategory

        comments = [make_comment("NACK"), make_comment("nice"), make_comment("utACK")]
        results = CommentClassifier().classify_all(comments)

        assert [r.category for r in results] == [
            VerdictCategory.NACK,
            VerdictCategory.UNCLASSIFIED,
            VerdictCategory.UTACK,
        ]

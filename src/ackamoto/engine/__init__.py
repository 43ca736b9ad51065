"""Verdict extraction and aggregation engine."""

from ackamoto.engine.aggregator import AggregatorConfig, ReviewStateAggregator
from ackamoto.engine.classifier import CommentClassifier
from ackamoto.engine.lexicon import LEXICON, LexiconEntry, VerdictLexicon
from ackamoto.engine.report_builder import ReportBuilder, ReportBuilderConfig

__all__ = [
    "AggregatorConfig",
    "CommentClassifier",
    "LEXICON",
    "LexiconEntry",
    "ReportBuilder",
    "ReportBuilderConfig",
    "ReviewStateAggregator",
    "VerdictLexicon",
]

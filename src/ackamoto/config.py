"""Configuration loading and validation for ackamoto."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ackamoto.engine.aggregator import AggregatorConfig
from ackamoto.engine.report_builder import SORT_KEYS, ReportBuilderConfig

OUTPUT_FORMATS = ("html", "json")


@dataclass
class GitHubSettings:
    """GitHub source configuration."""

    token: str = ""
    repo: str = "bitcoin/bitcoin"
    base_url: str | None = None  # For GitHub Enterprise


@dataclass
class FetchSettings:
    """How much to fetch and how fast."""

    per_page: int = 100
    max_pages: int = 5
    pr_limit_with_token: int = 250
    pr_limit_without_token: int = 50
    request_delay_seconds: float = 0.2


@dataclass
class ClassifierSettings:
    """Comment classifier configuration."""

    modifier_window: int = 2
    snippet_length: int = 200


@dataclass
class OutputSettings:
    """Output configuration."""

    path: str = "index.html"
    format: str = "html"
    project_name: str = "Bitcoin Core"
    logo_dir: str | None = None  # Published next to the page, e.g. "images"


@dataclass
class Config:
    """Complete application configuration."""

    github: GitHubSettings = field(default_factory=GitHubSettings)
    fetch: FetchSettings = field(default_factory=FetchSettings)
    classifier: ClassifierSettings = field(default_factory=ClassifierSettings)
    aggregator: AggregatorConfig = field(default_factory=AggregatorConfig)
    report: ReportBuilderConfig = field(default_factory=ReportBuilderConfig)
    output: OutputSettings = field(default_factory=OutputSettings)

    @property
    def pr_limit(self) -> int:
        """Number of PRs to scan; unauthenticated runs get a smaller budget."""
        if self.github.token:
            return self.fetch.pr_limit_with_token
        return self.fetch.pr_limit_without_token


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file and environment.

    Args:
        config_path: Path to config file (default: ackamoto.yaml)

    Returns:
        Loaded configuration
    """
    if config_path is None:
        config_path = Path("ackamoto.yaml")
        if not config_path.exists():
            config_path = Path("config.example.yaml")

    raw_config: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}

    raw_config = _expand_env_vars(raw_config)

    return _parse_config(raw_config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in config."""
    if isinstance(obj, str):
        if obj.startswith("${") and obj.endswith("}"):
            env_var = obj[2:-1]
            return os.environ.get(env_var, "")
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _parse_config(raw: dict[str, Any]) -> Config:
    """Parse raw config dict into Config object."""
    github_raw = raw.get("github") or {}
    github = GitHubSettings(
        token=github_raw.get("token") or os.environ.get("GITHUB_TOKEN", ""),
        repo=github_raw.get("repo", "bitcoin/bitcoin"),
        base_url=github_raw.get("base_url"),
    )

    fetch_raw = raw.get("fetch") or {}
    fetch = FetchSettings(
        per_page=fetch_raw.get("per_page", 100),
        max_pages=fetch_raw.get("max_pages", 5),
        pr_limit_with_token=fetch_raw.get("pr_limit_with_token", 250),
        pr_limit_without_token=fetch_raw.get("pr_limit_without_token", 50),
        request_delay_seconds=fetch_raw.get("request_delay_seconds", 0.2),
    )

    classifier_raw = raw.get("classifier") or {}
    classifier = ClassifierSettings(
        modifier_window=classifier_raw.get("modifier_window", 2),
        snippet_length=classifier_raw.get("snippet_length", 200),
    )

    agg_raw = raw.get("aggregator") or {}
    aggregator = AggregatorConfig(
        exclude_bots=agg_raw.get("exclude_bots", True),
        bot_markers=tuple(agg_raw.get("bot_markers", ["bot"])),
        ignored_authors=tuple(agg_raw.get("ignored_authors", ["bitcoin-core-ci"])),
    )

    report_raw = raw.get("report") or {}
    report = ReportBuilderConfig(
        sort_by=report_raw.get("sort_by", "activity"),
        primary_only=report_raw.get("primary_only", False),
    )

    out_raw = raw.get("output") or {}
    output = OutputSettings(
        path=out_raw.get("path", "index.html"),
        format=out_raw.get("format", "html"),
        project_name=out_raw.get("project_name", "Bitcoin Core"),
        logo_dir=out_raw.get("logo_dir"),
    )

    return Config(
        github=github,
        fetch=fetch,
        classifier=classifier,
        aggregator=aggregator,
        report=report,
        output=output,
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of errors.

    A missing GitHub token is not an error: runs without one fall back to
    the smaller unauthenticated PR budget.

    Args:
        config: Configuration to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if config.github.repo.count("/") != 1 or not all(config.github.repo.split("/")):
        errors.append(f"github.repo must look like 'owner/name', got {config.github.repo!r}")

    if not 1 <= config.fetch.per_page <= 100:
        errors.append(f"fetch.per_page must be between 1 and 100, got {config.fetch.per_page}")

    if config.fetch.max_pages < 1:
        errors.append(f"fetch.max_pages must be at least 1, got {config.fetch.max_pages}")

    for name in ("pr_limit_with_token", "pr_limit_without_token"):
        if getattr(config.fetch, name) < 0:
            errors.append(f"fetch.{name} must not be negative")

    if config.fetch.request_delay_seconds < 0:
        errors.append("fetch.request_delay_seconds must not be negative")

    if config.classifier.modifier_window < 0:
        errors.append("classifier.modifier_window must not be negative")

    if config.report.sort_by not in SORT_KEYS:
        errors.append(
            f"report.sort_by must be one of {', '.join(SORT_KEYS)}, got {config.report.sort_by!r}"
        )

    if config.output.format not in OUTPUT_FORMATS:
        errors.append(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {config.output.format!r}"
        )

    return errors

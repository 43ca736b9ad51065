"""Static HTML page for a verdict report."""

from collections import defaultdict
from datetime import datetime, timezone
from html import escape

from ackamoto.models.report import ReviewerState, VerdictReport
from ackamoto.models.verdict import Mode, primary_family

# (site name, verdict word, site title) per mode
SITES = {
    Mode.ACK: ("ackamoto", "ACK", "ACKamoto"),
    Mode.NACK: ("nackamoto", "NACK", "NACKamoto"),
}

FONTS_URL = (
    "https://fonts.googleapis.com/css2?family=Roboto:wght@100;400"
    "&family=Roboto+Mono:wght@100;400&family=Cormorant+Garamond:wght@300;400&display=swap"
)

STYLE = """
        :root {
            --bg-color: #f8f5ea;
            --text-color: #222;
            --border-color: #e5e5e5;
        }
        @media (prefers-color-scheme: dark) {
            :root {
                --bg-color: #000;
                --text-color: #fff;
                --border-color: #333;
            }
        }
        body {
            font-family: 'Roboto Mono', monospace;
            line-height: 1.2;
            color: var(--text-color);
            max-width: 900px;
            margin: 0 auto;
            padding: 2rem;
            background: var(--bg-color);
        }
        .title-section { text-align: center; margin-bottom: 8rem; }
        .logo { height: 16rem; width: auto; display: block; margin: 0 auto; }
        .site-title { font-family: 'Cormorant Garamond', serif; font-weight: 300; font-size: 4rem; }
        .logo-dark { display: none; }
        @media (prefers-color-scheme: dark) {
            .logo-light { display: none; }
            .logo-dark { display: block; }
        }
        .last-updated, .date-header {
            color: #888;
            font-family: 'Cormorant Garamond', serif;
            font-weight: 300;
            transform: scaleX(0.85);
            text-align: left;
        }
        .last-updated { margin: 0 0 3rem 0; }
        .date-header { font-size: 1rem; margin: 3rem 0 4rem 0; }
        .ack-entry { display: flex; flex-direction: column; gap: 1rem; margin-bottom: 4rem; }
        a { color: var(--text-color); text-decoration: underline; text-underline-offset: 0.3em; }
        .pr-title { word-wrap: break-word; }
        .ack-type {
            display: inline-block;
            padding: 0.5rem;
            border: 2px solid var(--text-color);
            width: fit-content;
        }
        .commit { color: #888; }
        .error-message {
            font-size: 1.4rem;
            text-align: center;
            margin: 2rem 0;
            padding: 2rem;
            border: 2px solid var(--text-color);
        }
        @media (max-width: 768px) {
            body { padding: 1rem; }
            .logo { height: 8rem; }
        }
"""


def _head(mode: Mode, project_name: str, logo_dir: str | None = None) -> str:
    site_name, verdict, _ = SITES[mode]
    icon = ""
    if logo_dir:
        icon = f'    <link rel="icon" type="image/png" href="{escape(logo_dir)}/{site_name}-logo.png">\n'
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(project_name)} {verdict}s - {site_name}.com</title>
{icon}    <link href="{escape(FONTS_URL)}" rel="stylesheet">
    <style>{STYLE}    </style>
</head>
"""


def _title_section(mode: Mode, logo_dir: str | None = None) -> str:
    """Logo images when a logo directory is published, the site name otherwise."""
    site_name, _, site_title = SITES[mode]
    if not logo_dir:
        return f"""    <div class="title-section">
        <h1 class="site-title">{site_title}</h1>
    </div>
"""
    logo_dir = escape(logo_dir)
    return f"""    <div class="title-section">
        <img src="{logo_dir}/{site_name}-logo.png" alt="{site_title}" class="logo logo-light">
        <img src="{logo_dir}/{site_name}-logo-dark.png" alt="{site_title}" class="logo logo-dark">
    </div>
"""


def _entry(state: ReviewerState, pr_title: str, pr_url: str) -> str:
    commit = f'\n            <div class="commit">{escape(state.commit)}</div>' if state.commit else ""
    reviewer_url = state.comment_url or state.author_url
    return f"""        <div class="ack-entry">
            <a href="{escape(pr_url)}" target="_blank" class="pr-number">#{state.pr_number}</a>
            <div class="pr-title" title="{escape(pr_title)}">{escape(pr_title)}</div>
            <div class="ack-type">{escape(state.category.label)}</div>{commit}
            <a href="{escape(reviewer_url)}" target="_blank" class="commenter">{escape(state.author)}</a>
        </div>
"""


def render_page(
    report: VerdictReport,
    project_name: str = "Bitcoin Core",
    logo_dir: str | None = None,
) -> str:
    """Render a report as a static HTML page.

    Only verdicts in the report mode's family are listed, grouped by the
    date of the comment that produced them, newest first.

    Args:
        report: Verdict report
        project_name: Name of the tracked project, used in the page title
        logo_dir: Published directory holding the site logos, if any

    Returns:
        HTML document
    """
    family = primary_family(report.mode)
    updated = report.generated_at.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    entries_by_date: dict[str, list[tuple[datetime, str]]] = defaultdict(list)
    for pr_report in report.pull_requests:
        for state in pr_report.reviewers(family):
            date_key = state.timestamp.astimezone(timezone.utc).strftime("%Y-%m-%d")
            entries_by_date[date_key].append(
                (state.timestamp, _entry(state, pr_report.pr.title, pr_report.pr.url))
            )

    parts = [
        _head(report.mode, project_name, logo_dir),
        "<body>\n",
        _title_section(report.mode, logo_dir),
        f'    <p class="last-updated">Last updated at {updated}</p>\n',
    ]

    for date_key in sorted(entries_by_date, reverse=True):
        entries = sorted(entries_by_date[date_key], key=lambda item: item[0], reverse=True)
        parts.append(f'    <h2 class="date-header">{date_key}</h2>\n')
        parts.append('    <div class="acks-container">\n')
        parts.extend(html for _, html in entries)
        parts.append("    </div>\n")

    parts.append("</body>\n</html>\n")
    return "".join(parts)


def render_error_page(
    message: str,
    mode: Mode,
    project_name: str = "Bitcoin Core",
    logo_dir: str | None = None,
) -> str:
    """Render the page published when data could not be fetched."""
    _, verdict, _ = SITES[mode]
    return (
        _head(mode, project_name, logo_dir)
        + f"""<body>
    <h1>{escape(project_name)} {verdict}s</h1>
    <div class="error-message">
        {escape(message)}<br><br>
        The site will automatically retry on the next scheduled run.
    </div>
</body>
</html>
"""
    )

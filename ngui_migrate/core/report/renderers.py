"""Report renderers: console (click), HTML (Jinja2) and JSON.

Renderers only format what is already in the CompatibilityReport.
"""

import dataclasses
import json
import logging
from pathlib import Path

import click
from jinja2 import Environment, PackageLoader, select_autoescape

from ..errors import FileIOError
from .models import CompatibilityReport

logger = logging.getLogger(__name__)

_STATUS_STYLE = {
    "supported": ("✓", "green"),
    "partial": ("⚠", "yellow"),
    "unsupported": ("✗", "red"),
}

_PRIORITY_COLOR = {"high": "red", "medium": "yellow", "low": "white"}

_env = Environment(
    loader=PackageLoader("ngui_migrate.core.report", "templates"),
    autoescape=select_autoescape(["html", "html.j2"]),
)


def score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def render_console(report: CompatibilityReport) -> None:
    """Print a colorized summary to stdout."""
    click.echo(click.style("\nag-Grid to ng-ui Migration Analysis\n", fg="blue", bold=True))
    click.echo(click.style(f"Overall Compatibility Score: {report.overall_score}%\n", fg=score_color(report.overall_score)))

    click.echo(click.style("File Analysis:", bold=True))
    click.echo(f"  Total files scanned: {report.total_files}")
    click.echo(f"  Files using ag-Grid: {report.affected_files}\n")

    click.echo(click.style("Feature Compatibility:", bold=True))
    click.echo(click.style(f"  ✓ Fully supported: {report.compatibility.full}", fg="green"))
    click.echo(click.style(f"  ⚠ Partially supported: {report.compatibility.partial}", fg="yellow"))
    click.echo(click.style(f"  ✗ Unsupported: {report.compatibility.unsupported}\n", fg="red"))

    for feature in report.features:
        icon, color = _STATUS_STYLE[feature.status]
        click.echo(click.style(f"  {icon} {feature.feature} ({feature.usage_count} usages)", fg=color))
        if feature.migration_notes:
            click.echo(f"      {feature.migration_notes}")

    if report.manual_changes:
        click.echo(click.style(f"\nManual Changes Required ({len(report.manual_changes)}):", bold=True))
        for change in report.manual_changes:
            click.echo(
                click.style(f"  [{change.priority.upper()}] ", fg=_PRIORITY_COLOR[change.priority])
                + f"{change.file_path}:{change.line} {change.description}"
            )
            click.echo(f"      {change.suggestion}")

    effort = report.estimated_effort
    if effort is not None:
        click.echo(click.style("\nEstimated Effort:", bold=True))
        click.echo(f"  Automatic: {effort.automatic}%")
        click.echo(f"  Manual: {effort.manual}%")
        click.echo(f"  Time estimate: {effort.time_estimate}")
        click.echo(f"  Complexity: {effort.complexity}\n")


def render_html(report: CompatibilityReport) -> str:
    template = _env.get_template("report.html.j2")
    return template.render(report=report, score_color=score_color(report.overall_score))


def render_json(report: CompatibilityReport) -> str:
    return json.dumps(dataclasses.asdict(report), indent=2)


def write_report(report: CompatibilityReport, output_path: str, json_output: bool = False) -> str:
    """Write the report as HTML (default) or JSON.

    Raises:
        FileIOError: If the file cannot be written
    """
    content = render_json(report) if json_output else render_html(report)
    try:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileIOError(output_path, f"Cannot write report: {e}") from e
    logger.info(f"Report written to {output_path}")
    return output_path

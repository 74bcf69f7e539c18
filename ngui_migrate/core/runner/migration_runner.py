"""Migration orchestration: analyze, migrate, validate, rollback, wizard.

Console output goes through click; diagnostics go through logging.
"""

import difflib
import logging
import os
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

import click

from ..config import MigrateConfig
from ..constants import PROJECT_MARKER_FILES
from ..errors import BackupMissingError, FileIOError, ProjectNotFoundError
from ..mappings import MappingRegistry
from ..report import CompatibilityReport, analyze_compatibility, render_console, render_json, write_report
from ..scanner import ProjectScanner, UsageRecord, detect_language
from ..transformers import ApplyOutcome, Transformation, apply_transformations, generate_transformations
from ..validation import MigrationValidator, ValidationReport
from . import backup as backups
from .manifest import update_manifest
from .models import (
    MigrationError,
    MigrationResult,
    MigrationScope,
    MigrationStage,
    MigrationWarning,
    RollbackResult,
)

logger = logging.getLogger(__name__)


def resolve_project(project_path: str) -> str:
    """Absolute project root.

    Raises:
        ProjectNotFoundError: If the path is not an existing directory
    """
    root = os.path.abspath(project_path)
    if not os.path.isdir(root):
        raise ProjectNotFoundError(f"Project directory not found: {project_path}")
    return root


def check_project_shape(project_root: str) -> List[MigrationWarning]:
    """Warn about missing package.json / angular.json / tsconfig.json."""
    return [
        MigrationWarning(
            file_path=os.path.join(project_root, name),
            message=f"{name} not found - this may not be an Angular project",
        )
        for name in PROJECT_MARKER_FILES
        if not os.path.isfile(os.path.join(project_root, name))
    ]


def filter_records(
    records: Iterable[UsageRecord],
    project_root: str,
    files: Optional[Sequence[str]] = None,
    scope: MigrationScope = MigrationScope.FULL,
) -> List[UsageRecord]:
    """Restrict records to selected files and to the scope's file types."""
    selected = None
    if files:
        selected = {os.path.abspath(os.path.join(project_root, f)) for f in files}

    kept = []
    for record in records:
        if selected is not None and os.path.abspath(record.file_path) not in selected:
            continue
        language = detect_language(record.file_path)
        if scope == MigrationScope.CONFIG and language not in ("typescript", "javascript"):
            continue
        if scope == MigrationScope.TEMPLATES and language != "html":
            continue
        kept.append(record)
    return kept


def group_by_file(transformations: Iterable[Transformation]) -> Dict[str, List[Transformation]]:
    grouped: Dict[str, List[Transformation]] = OrderedDict()
    for t in transformations:
        grouped.setdefault(t.file_path, []).append(t)
    return grouped


class MigrationRunner:
    """Runs the ag-Grid → ng-ui migration for one project at a time."""

    def __init__(self, config: Optional[MigrateConfig] = None, registry: Optional[MappingRegistry] = None):
        self.config = config or MigrateConfig()
        self.registry = registry or self.config.build_registry()
        self.last_records: List[UsageRecord] = []

    def _scanner(self) -> ProjectScanner:
        return ProjectScanner(self.registry, [*self.config.exclude_dirs, self.config.backup_dir])

    # ── analyze ───────────────────────────────────────────────────────

    def analyze(
        self,
        project_path: str,
        report_path: Optional[str] = None,
        json_output: bool = False,
    ) -> CompatibilityReport:
        """Scan the project and report compatibility; never modifies project files."""
        root = resolve_project(project_path)
        click.echo(click.style(f"Analyzing {root} for ag-Grid usage...", fg="blue"))

        scanner = self._scanner()
        records = scanner.scan(root)
        self.last_records = records
        report = analyze_compatibility(records, total_files=scanner.files_scanned, registry=self.registry)

        if not records:
            click.echo(click.style("No ag-Grid usage found in the project.", fg="yellow"))

        if report_path:
            write_report(report, report_path, json_output)
            click.echo(click.style(f"Report saved to {report_path}", fg="green"))
        elif json_output:
            click.echo(render_json(report))
        else:
            render_console(report)
        return report

    # ── migrate ───────────────────────────────────────────────────────

    def migrate(
        self,
        project_path: str,
        dry_run: bool = False,
        create_backup: bool = True,
        interactive: bool = False,
        force: bool = False,
        files: Optional[Sequence[str]] = None,
        scope: MigrationScope = MigrationScope.FULL,
    ) -> MigrationResult:
        """Scan, generate and apply (or preview) every transformation.

        A failing stage ends the run with ``success=False`` and
        ``failed_stage`` set; per-file write failures are recorded and
        the remaining files are still processed.

        Raises:
            ProjectNotFoundError: If the project root does not exist
        """
        root = resolve_project(project_path)
        result = MigrationResult()
        result.warnings.extend(check_project_shape(root))
        stage = MigrationStage.SCANNING

        try:
            scanner = self._scanner()
            records = filter_records(scanner.scan(root), root, files, scope)
            for skipped in scanner.skipped:
                result.warnings.append(
                    MigrationWarning(skipped.file_path, f"File skipped: {skipped.reason}")
                )

            if not records:
                click.echo(click.style("No ag-Grid usage found - nothing to migrate.", fg="yellow"))
                return result

            click.echo(f"Found ag-Grid usage in {len(records)} files")

            if interactive and not force and not dry_run:
                stage = MigrationStage.AWAITING_CONFIRMATION
                if not click.confirm(f"Migrate {len(records)} files to ng-ui?", default=True):
                    click.echo(click.style("Migration cancelled.", fg="yellow"))
                    result.cancelled = True
                    result.success = False
                    return result

            if create_backup and not dry_run:
                stage = MigrationStage.BACKING_UP
                result.backup_path = backups.create_backup(root, self.config.backup_dir)

            stage = MigrationStage.GENERATING_TRANSFORMATIONS
            batch = generate_transformations(records, self.registry)
            for w in batch.warnings:
                result.warnings.append(MigrationWarning(w.file_path, w.message, w.line, w.column, w.suggestion))

            stage = MigrationStage.PREVIEWING if dry_run else MigrationStage.APPLYING
            for file_path, transformations in group_by_file(batch.transformations).items():
                result.files_processed += 1
                try:
                    outcome = self._apply_file(file_path, transformations, dry_run)
                except FileIOError as e:
                    logger.error(f"Failed to migrate {file_path}: {e}")
                    result.errors.append(MigrationError(file_path, e.message))
                    continue

                result.transformations.extend(outcome.applied)
                for mismatch in outcome.skipped:
                    result.warnings.append(
                        MigrationWarning(
                            mismatch.file_path,
                            f"Skipped edit, expected text not found: {mismatch.old_text!r}",
                            line=mismatch.line,
                        )
                    )
                if outcome.changed and not dry_run:
                    result.files_modified += 1

            if not dry_run:
                stage = MigrationStage.UPDATING_MANIFEST
                update_manifest(root, self.registry, self.config.target_dependencies)

            stage = MigrationStage.DONE
        except Exception as e:
            logger.error(f"Migration failed during {stage.value}: {e}")
            result.failed_stage = stage
            result.errors.append(MigrationError(root, f"Migration failed during {stage.value}: {e}"))

        if result.errors:
            result.success = False
        self._print_summary(result, dry_run)
        return result

    def _apply_file(self, file_path: str, transformations: List[Transformation], dry_run: bool) -> ApplyOutcome:
        try:
            with open(file_path, "r", encoding="utf-8", newline="") as f:
                original = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(file_path, f"Cannot read file: {e}") from e

        outcome = apply_transformations(original, transformations)

        if dry_run:
            self._print_diff(file_path, original, outcome.text)
        elif outcome.text != original:
            try:
                with open(file_path, "w", encoding="utf-8", newline="") as f:
                    f.write(outcome.text)
            except OSError as e:
                raise FileIOError(file_path, f"Cannot write file: {e}") from e
            logger.info(f"Applied {len(outcome.applied)} transformations to {file_path}")
        return outcome

    def _print_diff(self, file_path: str, original: str, updated: str) -> None:
        diff = difflib.unified_diff(
            original.splitlines(),
            updated.splitlines(),
            fromfile=file_path,
            tofile=f"{file_path} (migrated)",
            lineterm="",
        )
        for line in diff:
            if line.startswith("+") and not line.startswith("+++"):
                click.echo(click.style(line, fg="green"))
            elif line.startswith("-") and not line.startswith("---"):
                click.echo(click.style(line, fg="red"))
            else:
                click.echo(line)

    def _print_summary(self, result: MigrationResult, dry_run: bool) -> None:
        title = "Dry run complete" if dry_run else "Migration complete"
        color = "green" if result.success else "red"
        click.echo(click.style(f"\n{title}", fg=color, bold=True))
        click.echo(f"  Files processed: {result.files_processed}")
        click.echo(f"  Files modified: {result.files_modified}")
        click.echo(f"  Transformations: {len(result.transformations)}")
        if result.backup_path:
            click.echo(f"  Backup: {result.backup_path}")
        if result.warnings:
            click.echo(click.style(f"  Warnings: {len(result.warnings)}", fg="yellow"))
            for w in result.warnings:
                location = f"{w.file_path}:{w.line}" if w.line else w.file_path
                click.echo(click.style(f"    {location} {w.message}", fg="yellow"))
        if result.errors:
            click.echo(click.style(f"  Errors: {len(result.errors)}", fg="red"))
            for e in result.errors:
                click.echo(click.style(f"    {e.file_path} {e.message}", fg="red"))

    # ── validate / rollback ───────────────────────────────────────────

    def validate(self, project_path: str) -> ValidationReport:
        root = resolve_project(project_path)
        click.echo(click.style(f"Validating {root}...", fg="blue"))
        validator = MigrationValidator(
            self.registry,
            self.config.validation,
            [*self.config.exclude_dirs, self.config.backup_dir],
        )
        report = validator.validate_project(root)

        for check in report.checks:
            status = click.style("PASS", fg="green") if check.passed else click.style("FAIL", fg="red")
            click.echo(f"  [{status}] {check.name}")
            for finding in check.findings:
                color = "red" if finding.severity == "error" else "yellow"
                location = f"{finding.file_path}:{finding.line}" if finding.line else finding.file_path
                click.echo(click.style(f"      {location} {finding.message}", fg=color))

        if report.passed:
            click.echo(click.style("Validation passed.", fg="green"))
        else:
            click.echo(click.style(f"Validation failed with {len(report.errors)} errors.", fg="red"))
        return report

    def rollback(self, project_path: str, backup_path: Optional[str] = None) -> RollbackResult:
        """Restore the project from a backup (the newest one by default).

        Raises:
            BackupMissingError: If no backup exists
        """
        root = resolve_project(project_path)
        if backup_path is None:
            backup_path = backups.find_latest_backup(root, self.config.backup_dir)
            if backup_path is None:
                raise BackupMissingError(f"No backups found in {os.path.join(root, self.config.backup_dir)}")

        restored = backups.restore_backup(root, backup_path)
        click.echo(click.style(f"Rolled back {restored} files from {backup_path}", fg="green"))
        return RollbackResult(project_path=root, backup_path=backup_path, files_restored=restored)

    # ── wizard ────────────────────────────────────────────────────────

    def wizard(self, project_path: str) -> Optional[MigrationResult]:
        """Interactive analyze → options → migrate."""
        root = resolve_project(project_path)
        report = self.analyze(root)
        if not self.last_records:
            return None

        if not click.confirm("Proceed with migration?", default=True):
            click.echo("Migration cancelled.")
            return None

        backup = click.confirm("Create a backup before migrating?", default=True)
        dry_run = click.confirm("Run in dry-run mode (preview only)?", default=False)
        scope = MigrationScope(
            click.prompt(
                "Migration scope",
                type=click.Choice([s.value for s in MigrationScope]),
                default=MigrationScope.FULL.value,
            )
        )

        files = None
        if scope == MigrationScope.SELECTIVE:
            files = self._prompt_files(root)

        if click.confirm("Save an HTML compatibility report?", default=False):
            write_report(report, os.path.join(root, self.config.report_filename))

        return self.migrate(
            root,
            dry_run=dry_run,
            create_backup=backup,
            force=True,
            files=files,
            scope=scope,
        )

    def _prompt_files(self, root: str) -> List[str]:
        paths = [record.file_path for record in self.last_records]
        for i, path in enumerate(paths, start=1):
            click.echo(f"  {i}. {os.path.relpath(path, root)}")
        answer = click.prompt("Files to migrate (comma-separated numbers, blank for all)", default="", show_default=False)

        selected = []
        for part in answer.split(","):
            part = part.strip()
            if part.isdigit() and 1 <= int(part) <= len(paths):
                selected.append(paths[int(part) - 1])
        return selected or paths

"""Post-migration validator.

Runs the TypeScript compiler and the Angular production build as
external processes, then re-reads the project looking for leftover
ag-Grid imports, tags and classes.  Checks run one after another and
a failing check never stops the next one.
"""

import json
import logging
import os
import re
import subprocess
from typing import Callable, List, Optional, Sequence

from ..config import ValidationSettings
from ..constants import MAX_TOOL_OUTPUT_LINES, TARGET_MODULES
from ..errors import ExternalProcessError
from ..mappings import MappingRegistry, get_default_registry
from ..mappings.tables import UNSUPPORTED_EVENTS
from ..scanner.utils import LineIndex, collect_files, detect_language
from .models import CheckResult, Finding, ValidationReport

logger = logging.getLogger(__name__)

# from 'x' / import 'x' / require('x')
_IMPORT_SOURCE_RE = re.compile(r"(?:\bfrom\s+|\bimport\s+|\brequire\(\s*)(['\"])([^'\"]+)\1")
_LEFTOVER_SYMBOL_RE = re.compile(r"\bAgGrid\w*")
_CLASS_ATTR_RE = re.compile(r"\bclass\s*=\s*(?:\"([^\"]*)\"|'([^']*)')", re.IGNORECASE)
_NGUI_GRID_RE = re.compile(r"<ngui-grid\b((?:[^>\"']|\"[^\"]*\"|'[^']*')*)>", re.IGNORECASE)
_REQUIRED_BINDINGS = (
    ("[data]", re.compile(r"\[data\]|(?<![\w\-\[])data\s*=")),
    ("[columns]", re.compile(r"\[columns\]|(?<![\w\-\[])columns\s*=")),
)
_ERROR_LINE_RE = re.compile(r"\berror\b", re.IGNORECASE)


class MigrationValidator:
    """Validates a migrated project."""

    def __init__(
        self,
        registry: Optional[MappingRegistry] = None,
        settings: Optional[ValidationSettings] = None,
        exclude_dirs: Sequence[str] = (),
    ):
        self.registry = registry or get_default_registry()
        self.settings = settings or ValidationSettings()
        self.exclude_dirs = tuple(exclude_dirs)

    def validate_project(self, project_path: str) -> ValidationReport:
        project_path = os.path.abspath(project_path)
        report = ValidationReport(project_path=project_path)

        checks: List[Callable[[str], CheckResult]] = [
            self.check_typescript,
            self.check_angular_build,
            self.check_imports,
            self.check_templates,
            self.check_dependencies,
        ]
        for check in checks:
            result = check(project_path)
            report.checks.append(result)
            logger.info(
                f"Validation check '{result.name}': "
                f"{'passed' if result.passed else 'failed'} "
                f"({len(result.errors)} errors, {len(result.warnings)} warnings)"
            )

        return report

    # ── External tools ────────────────────────────────────────────────

    def _run_command(self, cmd: List[str], cwd: str) -> subprocess.CompletedProcess:
        """Run a command to completion.

        Raises:
            ExternalProcessError: If the command cannot be started, times out
                or exits non-zero
        """
        command = " ".join(cmd)
        try:
            proc = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.settings.timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            raise ExternalProcessError(command, f"timed out after {self.settings.timeout_seconds}s") from e
        except FileNotFoundError as e:
            raise ExternalProcessError(command, f"command not found: {cmd[0]}") from e
        except OSError as e:
            raise ExternalProcessError(command, str(e)) from e

        if proc.returncode != 0:
            raise ExternalProcessError(
                command,
                f"exited with code {proc.returncode}",
                returncode=proc.returncode,
                output=(proc.stdout or "") + (proc.stderr or ""),
            )
        return proc

    def _tool_check(self, name: str, cmd: List[str], project_path: str, required_file: str) -> CheckResult:
        result = CheckResult(name=name)
        config_file = os.path.join(project_path, required_file)
        if not os.path.isfile(config_file):
            result.findings.append(
                Finding(config_file, 0, f"{required_file} not found, {name} check skipped", "warning")
            )
            return result

        try:
            self._run_command(cmd, project_path)
        except ExternalProcessError as e:
            logger.warning(f"{name} check failed: {e}")
            error_lines = [line.strip() for line in e.output.splitlines() if _ERROR_LINE_RE.search(line)]
            if not error_lines:
                result.findings.append(Finding(project_path, 0, str(e)))
            for line in error_lines[:MAX_TOOL_OUTPUT_LINES]:
                result.findings.append(Finding(project_path, 0, line))
        return result

    def check_typescript(self, project_path: str) -> CheckResult:
        return self._tool_check("typescript", self.settings.tsc_command, project_path, "tsconfig.json")

    def check_angular_build(self, project_path: str) -> CheckResult:
        return self._tool_check("angular_build", self.settings.build_command, project_path, "angular.json")

    # ── Residual patterns ─────────────────────────────────────────────

    def _files(self, project_path: str, languages: Sequence[str]) -> List[str]:
        return [
            path for path in collect_files(project_path, self.exclude_dirs)
            if detect_language(path) in languages
        ]

    def _read(self, file_path: str, result: CheckResult) -> Optional[str]:
        try:
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            logger.warning(f"Cannot read {file_path}: {e}")
            result.findings.append(Finding(file_path, 0, f"Cannot read file: {e}", "warning"))
            return None

    def check_imports(self, project_path: str) -> CheckResult:
        result = CheckResult(name="imports")
        for file_path in self._files(project_path, ("typescript", "javascript")):
            content = self._read(file_path, result)
            if content is None:
                continue
            for line_no, line in enumerate(content.split("\n"), start=1):
                sources = [m.group(2) for m in _IMPORT_SOURCE_RE.finditer(line)]
                for source in sources:
                    if "ag-grid" in source:
                        if source in self.registry.imports or self.registry.is_source_package(source):
                            result.findings.append(
                                Finding(file_path, line_no, f"Found unmigrated ag-Grid import from '{source}'")
                            )
                        else:
                            result.findings.append(
                                Finding(
                                    file_path,
                                    line_no,
                                    f"Remaining ag-Grid import '{source}' - migration may be incomplete",
                                    "warning",
                                )
                            )
                    elif source.startswith("@ng-ui/"):
                        module = source.split("/")[1] if "/" in source else ""
                        if module not in TARGET_MODULES:
                            result.findings.append(
                                Finding(file_path, line_no, f"Invalid ng-ui module import: '{source}'")
                            )
                if sources:
                    continue
                for match in _LEFTOVER_SYMBOL_RE.finditer(line):
                    result.findings.append(
                        Finding(file_path, line_no, f"Leftover ag-Grid symbol '{match.group(0)}'", "warning")
                    )
        return result

    def check_templates(self, project_path: str) -> CheckResult:
        result = CheckResult(name="templates")
        old_selectors = [s for s in self.registry.selectors if "-" in s]
        old_tag_re = re.compile(
            r"<(" + "|".join(re.escape(s) for s in old_selectors) + r")(?=[\s/>])", re.IGNORECASE
        ) if old_selectors else None

        for file_path in self._files(project_path, ("html",)):
            content = self._read(file_path, result)
            if content is None:
                continue
            index = LineIndex(content)

            if old_tag_re is not None:
                for match in old_tag_re.finditer(content):
                    line, _ = index.position(match.start())
                    result.findings.append(
                        Finding(file_path, line, f"Found unmigrated {match.group(1)} component")
                    )

            for match in _CLASS_ATTR_RE.finditer(content):
                value = match.group(1) if match.group(1) is not None else match.group(2)
                if "ag-theme-" in value:
                    line, _ = index.position(match.start())
                    result.findings.append(
                        Finding(file_path, line, "ag-Grid theme class still in use", "warning")
                    )

            for match in _NGUI_GRID_RE.finditer(content):
                line, _ = index.position(match.start())
                attributes = match.group(1)
                for binding, pattern in _REQUIRED_BINDINGS:
                    if not pattern.search(attributes):
                        result.findings.append(
                            Finding(file_path, line, f"ngui-grid is missing required {binding} binding")
                        )

            for event in UNSUPPORTED_EVENTS:
                start = content.find(event)
                while start >= 0:
                    line, _ = index.position(start)
                    result.findings.append(
                        Finding(file_path, line, f"Unsupported event binding {event}")
                    )
                    start = content.find(event, start + len(event))
        return result

    def check_dependencies(self, project_path: str) -> CheckResult:
        result = CheckResult(name="dependencies")
        manifest = os.path.join(project_path, "package.json")
        if not os.path.isfile(manifest):
            result.findings.append(Finding(manifest, 0, "package.json not found", "warning"))
            return result

        try:
            with open(manifest, "r", encoding="utf-8") as f:
                package = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            result.findings.append(Finding(manifest, 0, f"Cannot read package.json: {e}"))
            return result

        declared = {}
        for section in ("dependencies", "devDependencies"):
            declared.update(package.get(section) or {})

        for name in sorted(declared):
            if self.registry.is_source_package(name):
                result.findings.append(
                    Finding(manifest, 0, f"ag-Grid package '{name}' is still declared", "warning")
                )
        if not any(name.startswith("@ng-ui/") for name in declared):
            result.findings.append(Finding(manifest, 0, "No @ng-ui packages declared", "warning"))
        return result


def validate_project(
    project_path: str,
    registry: Optional[MappingRegistry] = None,
    settings: Optional[ValidationSettings] = None,
) -> ValidationReport:
    """Validate a migrated project; the report is truthy when it passed."""
    return MigrationValidator(registry, settings).validate_project(project_path)

"""Validation result models."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Finding:
    file_path: str
    line: int
    message: str
    severity: str = "error"  # "error" | "warning"


@dataclass
class CheckResult:
    """Result of one validation check."""

    name: str
    findings: List[Finding] = field(default_factory=list)

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if f.severity == "warning"]

    @property
    def passed(self) -> bool:
        """Warnings never fail a check."""
        return not self.errors


@dataclass
class ValidationReport:
    project_path: str
    checks: List[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def errors(self) -> List[Finding]:
        return [f for check in self.checks for f in check.errors]

    @property
    def warnings(self) -> List[Finding]:
        return [f for check in self.checks for f in check.warnings]

    def __bool__(self) -> bool:
        return self.passed

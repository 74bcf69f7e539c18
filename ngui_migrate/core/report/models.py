"""Compatibility report data models."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FeatureCompatibility:
    feature: str
    status: str  # "supported" | "partial" | "unsupported"
    usage_count: int
    description: str
    migration_notes: Optional[str] = None


@dataclass
class ManualChange:
    file_path: str
    line: int
    description: str
    reason: str
    suggestion: str
    priority: str  # "high" | "medium" | "low"


@dataclass
class EstimatedEffort:
    automatic: int  # percentage of effort points handled automatically
    manual: int
    time_estimate: str
    complexity: str  # "low" | "medium" | "high"


@dataclass
class CompatibilitySummary:
    full: int = 0
    partial: int = 0
    unsupported: int = 0


@dataclass
class CompatibilityReport:
    """Scored summary of how much detected ag-Grid usage maps onto ng-ui.

    ``overall_score`` is computed by the analyzer from ``features``.
    """

    overall_score: int
    total_files: int
    affected_files: int
    compatibility: CompatibilitySummary
    features: List[FeatureCompatibility] = field(default_factory=list)
    manual_changes: List[ManualChange] = field(default_factory=list)
    estimated_effort: Optional[EstimatedEffort] = None

"""Compatibility analysis and report rendering."""

from .analyzer import analyze_compatibility, compute_overall_score, feature_status
from .models import (
    CompatibilityReport,
    CompatibilitySummary,
    EstimatedEffort,
    FeatureCompatibility,
    ManualChange,
)
from .renderers import render_console, render_html, render_json, write_report

__all__ = [
    "analyze_compatibility",
    "compute_overall_score",
    "feature_status",
    "render_console",
    "render_html",
    "render_json",
    "write_report",
    "CompatibilityReport",
    "CompatibilitySummary",
    "EstimatedEffort",
    "FeatureCompatibility",
    "ManualChange",
]

"""
Prometheus metrics for SymptoLens.
"""

from prometheus_client import Counter, Histogram

ANALYSES_TOTAL = Counter(
    "symptolens_analyses_total",
    "Scoring pipeline runs",
    ["outcome"]
)

ANALYSIS_SECONDS = Histogram(
    "symptolens_analysis_seconds",
    "Scoring pipeline latency"
)

CONDITION_LOADS_TOTAL = Counter(
    "symptolens_condition_loads_total",
    "Condition repository loads by data source",
    ["source"]
)

SKIPPED_CONDITIONS_TOTAL = Counter(
    "symptolens_skipped_conditions_total",
    "Malformed condition records skipped during load"
)

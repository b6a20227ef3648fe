"""
In-process counters exported in Prometheus text format at /metrics.

Usage:
    from travel_cms.lib.metrics import get_metrics_collector

    metrics = get_metrics_collector()
    metrics.increment_reviews_moderated(status="APPROVED")
    text = metrics.export_prometheus()
"""
from threading import Lock
from typing import Dict, List, Tuple


Labels = Tuple[Tuple[str, str], ...]

# metric name -> help text
COUNTERS: Dict[str, str] = {
    "reviews_submitted_total": "Total number of reviews submitted",
    "reviews_moderated_total": "Total number of review moderation decisions",
    "review_helpful_votes_total": "Total number of helpful votes on reviews",
    "search_queries_total": "Total number of executed search queries",
    "enquiries_total": "Total number of captured enquiries",
    "revalidations_total": "Total number of page revalidation attempts",
}


def _format_labels(labels: Labels) -> str:
    if not labels:
        return ""
    return "{" + ",".join(f'{key}="{value}"' for key, value in labels) + "}"


class MetricsCollector:
    """
    Thread-safe counter store.

    Counters (labels):
    - reviews_submitted_total
    - reviews_moderated_total (status: APPROVED, REJECTED, PENDING)
    - review_helpful_votes_total
    - search_queries_total (scope: public, admin)
    - enquiries_total (type: package, contact, consultation)
    - revalidations_total (outcome: sent, skipped, failed)
    """

    def __init__(self):
        self._lock = Lock()
        self._counters: Dict[Tuple[str, Labels], int] = {}

    def _increment(self, metric_name: str, amount: int = 1, **labels: str) -> None:
        key = (metric_name, tuple(sorted(labels.items())))
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    # ===== Reviews =====

    def increment_reviews_submitted(self, amount: int = 1):
        self._increment("reviews_submitted_total", amount)

    def increment_reviews_moderated(self, status: str, amount: int = 1):
        """Count a moderation decision by the review's resulting status."""
        self._increment("reviews_moderated_total", amount, status=status.upper())

    def increment_helpful_votes(self, amount: int = 1):
        self._increment("review_helpful_votes_total", amount)

    # ===== Search, enquiries, revalidation =====

    def increment_search_queries(self, scope: str = "public", amount: int = 1):
        """Only searches that reached the store are counted."""
        self._increment("search_queries_total", amount, scope=scope.lower())

    def increment_enquiries(self, enquiry_type: str, amount: int = 1):
        self._increment("enquiries_total", amount, type=enquiry_type.lower())

    def increment_revalidations(self, outcome: str, amount: int = 1):
        self._increment("revalidations_total", amount, outcome=outcome.lower())

    # ===== Export =====

    def export_prometheus(self) -> str:
        """Render every counter that has been incremented, grouped by metric."""
        with self._lock:
            snapshot = dict(self._counters)

        series: Dict[str, List[Tuple[Labels, int]]] = {}
        for (metric_name, labels), value in snapshot.items():
            series.setdefault(metric_name, []).append((labels, value))

        lines: List[str] = []
        for metric_name in sorted(series):
            lines.append(f"# HELP {metric_name} {COUNTERS.get(metric_name, 'Counter metric')}")
            lines.append(f"# TYPE {metric_name} counter")
            for labels, value in sorted(series[metric_name]):
                lines.append(f"{metric_name}{_format_labels(labels)} {value}")
            lines.append("")

        return "\n".join(lines)

    def get_counter_value(self, metric_name: str, labels: Dict[str, str] | None = None) -> int:
        key = (metric_name, tuple(sorted((labels or {}).items())))
        with self._lock:
            return self._counters.get(key, 0)

    def reset_all(self):
        with self._lock:
            self._counters.clear()


_metrics_collector: MetricsCollector | None = None
_metrics_lock = Lock()


def get_metrics_collector() -> MetricsCollector:
    """Process-wide collector, created on first use."""
    global _metrics_collector
    if _metrics_collector is None:
        with _metrics_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def reset_metrics():
    """Zero the global collector (tests)."""
    with _metrics_lock:
        if _metrics_collector is not None:
            _metrics_collector.reset_all()

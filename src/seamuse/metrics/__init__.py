"""Per-tick decision metrics."""

from seamuse.metrics.collector import TickCollector, TickMetrics

__all__ = ["TickCollector", "TickMetrics"]

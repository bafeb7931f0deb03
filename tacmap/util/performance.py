"""
Performance measurement utilities.

Provides a context manager for timing named blocks of code, with
aggregation and a plain-text report. Tracking is off by default; when
disabled, measure_block() costs one attribute check.

Usage Examples:
    enable_performance_tracking()

    with measure_block("mapgen.hydrology"):
        layer.apply(ctx)

    print(get_performance_report(filter_prefix="mapgen."))
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class PerformanceStats:
    """Statistics for a measured operation."""

    name: str
    call_count: int = 0
    total_time: float = 0.0
    min_time: float = float("inf")
    max_time: float = 0.0

    def add_measurement(self, duration: float) -> None:
        """Add a new timing measurement."""
        self.call_count += 1
        self.total_time += duration
        self.min_time = min(self.min_time, duration)
        self.max_time = max(self.max_time, duration)

    @property
    def avg_time(self) -> float:
        """Average time per call across all measurements."""
        return self.total_time / self.call_count if self.call_count > 0 else 0.0


class PerformanceTracker:
    """Tracks timing statistics for named operations."""

    def __init__(self) -> None:
        self.stats: dict[str, PerformanceStats] = {}
        self.enabled = False

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def reset(self) -> None:
        """Reset all collected statistics."""
        self.stats.clear()

    @contextmanager
    def measure_block(self, name: str) -> Iterator[None]:
        """Context manager to measure a block of code.

        Args:
            name: Identifier for this measurement. Blocks sharing a name
                are aggregated together.
        """
        if not self.enabled:
            yield
            return

        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start_time
            if name not in self.stats:
                self.stats[name] = PerformanceStats(name)
            self.stats[name].add_measurement(duration)

    def get_stats(self, name: str) -> PerformanceStats | None:
        return self.stats.get(name)

    def get_report(self, filter_prefix: str = "") -> str:
        """Generate a formatted report sorted by total time.

        Args:
            filter_prefix: If provided, only include measurements whose
                names start with this prefix.
        """
        if not self.stats:
            return "No performance data collected."

        stats_to_show = [
            stats
            for name, stats in self.stats.items()
            if name.startswith(filter_prefix)
        ]
        if not stats_to_show:
            return f"No performance data found for prefix '{filter_prefix}'."

        title = "Performance Report"
        if filter_prefix:
            title += f" (filtered by '{filter_prefix}')"

        lines = [title, "=" * len(title)]
        lines.append(
            f"{'Name':<25} {'Calls':<8} {'Total(ms)':<10} "
            f"{'Avg(ms)':<10} {'Min(ms)':<10} {'Max(ms)':<10}"
        )
        lines.append("-" * 78)
        lines.extend(
            f"{stat.name:<25} "
            f"{stat.call_count:<8} "
            f"{stat.total_time * 1000:<10.2f} "
            f"{stat.avg_time * 1000:<10.2f} "
            f"{stat.min_time * 1000:<10.2f} "
            f"{stat.max_time * 1000:<10.2f}"
            for stat in sorted(stats_to_show, key=lambda s: s.total_time, reverse=True)
        )
        return "\n".join(lines)


# Global performance tracker instance
perf_tracker = PerformanceTracker()


def enable_performance_tracking() -> None:
    """Enable global performance tracking."""
    perf_tracker.enable()


def disable_performance_tracking() -> None:
    """Disable global performance tracking."""
    perf_tracker.disable()


def reset_performance_data() -> None:
    """Reset all collected performance data."""
    perf_tracker.reset()


def measure_block(name: str):
    """Context manager for measuring code block performance.

    See PerformanceTracker.measure_block() for detailed documentation.
    """
    return perf_tracker.measure_block(name)


def get_performance_report(filter_prefix: str = "") -> str:
    """Get a formatted performance report."""
    return perf_tracker.get_report(filter_prefix)

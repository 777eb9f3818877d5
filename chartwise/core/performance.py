"""
Performance monitoring and metrics collection.
"""
import inspect
import time
import logging
from typing import Dict, Optional, Any
from functools import wraps
from collections import defaultdict
import threading

logger = logging.getLogger(__name__)

# Keep only the most recent entries per metric
MAX_ENTRIES_PER_METRIC = 1000

# Thread-safe metrics storage
_metrics_lock = threading.Lock()
_metrics: Dict[str, list] = defaultdict(list)


class PerformanceMonitor:
    """Monitor and track performance metrics."""

    @staticmethod
    def record_metric(name: str, value: float, metadata: Optional[Dict[str, Any]] = None):
        """
        Record a performance metric.

        Args:
            name: Metric name (e.g., 'suggestions_request', 'request_duration')
            value: Metric value (usually duration in seconds)
            metadata: Optional metadata (correlation_id, status, row count, etc.)
        """
        with _metrics_lock:
            _metrics[name].append({
                'value': value,
                'timestamp': time.time(),
                'metadata': metadata or {}
            })

            if len(_metrics[name]) > MAX_ENTRIES_PER_METRIC:
                _metrics[name] = _metrics[name][-MAX_ENTRIES_PER_METRIC:]

    @staticmethod
    def get_stats(metric_name: str) -> Optional[Dict[str, float]]:
        """
        Get statistics for a metric.

        Returns:
            Dict with count, min, max, mean and percentiles, or None if no data
        """
        with _metrics_lock:
            return _summarize(_metrics.get(metric_name))

    @staticmethod
    def get_all_metrics() -> Dict[str, Dict[str, float]]:
        """Get statistics for all metrics."""
        with _metrics_lock:
            return {
                name: _summarize(entries)
                for name, entries in _metrics.items()
                if entries
            }

    @staticmethod
    def clear_metrics():
        """Clear all metrics (useful for testing)."""
        with _metrics_lock:
            _metrics.clear()


def _summarize(entries: Optional[list]) -> Optional[Dict[str, float]]:
    # Callers hold _metrics_lock
    if not entries:
        return None

    values = sorted(m['value'] for m in entries)
    return {
        'count': len(values),
        'min': values[0],
        'max': values[-1],
        'mean': sum(values) / len(values),
        'p50': values[len(values) // 2],
        'p95': values[int(len(values) * 0.95)],
        'p99': values[int(len(values) * 0.99)],
    }


def _correlation_id(args, kwargs) -> Optional[str]:
    request = kwargs.get('request')
    if request is None and args:
        request = args[0]
    state = getattr(request, 'state', None)
    return getattr(state, 'correlation_id', None)


def track_performance(metric_name: str):
    """
    Decorator to track function execution time.

    Usage:
        @track_performance("suggestions_request")
        async def suggest(request, body):
            ...
    """
    def record(start_time: float, correlation_id: Optional[str], error: Optional[Exception] = None):
        duration = time.time() - start_time
        metadata = {'correlation_id': correlation_id, 'status': 'error' if error else 'success'}
        if error:
            metadata['error'] = str(error)
        PerformanceMonitor.record_metric(metric_name, duration, metadata)

        if error:
            logger.error(
                f"{metric_name} failed after {duration:.3f}s: {error}",
                extra={'metric': metric_name, 'duration': duration},
                exc_info=True
            )
        else:
            logger.debug(
                f"{metric_name} completed in {duration:.3f}s",
                extra={'metric': metric_name, 'duration': duration}
            )

    def decorator(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time.time()
            correlation_id = _correlation_id(args, kwargs)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                record(start_time, correlation_id, e)
                raise
            record(start_time, correlation_id)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start_time = time.time()
            correlation_id = _correlation_id(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                record(start_time, correlation_id, e)
                raise
            record(start_time, correlation_id)
            return result

        # Return appropriate wrapper based on function type
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator

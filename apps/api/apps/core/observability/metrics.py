"""
Metrics instrumentation wrapper around prometheus_client.
"""
import logging
import time
from functools import wraps

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


class MetricsRegistry:
    """
    Central metrics registry.
    
    Provides typed access to all application metrics.
    """
    
    def __init__(self):
        """Initialize metrics registry."""
        self._setup_metrics()
    
    def _create_counter(self, name, description, labels=None):
        """Create a counter metric."""
        return Counter(name, description, labels or [])
    
    def _create_histogram(self, name, description, labels=None, buckets=None):
        """Create a histogram metric."""
        if buckets:
            return Histogram(name, description, labels or [], buckets=buckets)
        return Histogram(name, description, labels or [])
    
    def _setup_metrics(self):
        """Setup all application metrics."""
        
        # ===================================================================
        # Case Search Metrics
        # ===================================================================
        self.case_search_total = self._create_counter(
            'case_search_total',
            'Case searches executed',
            ['result']  # success, failure
        )
        
        self.case_search_duration_seconds = self._create_histogram(
            'case_search_duration_seconds',
            'Case search duration in seconds',
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
        )
        
        # ===================================================================
        # Report Metrics
        # ===================================================================
        self.report_generation_total = self._create_counter(
            'report_generation_total',
            'PDF report generations',
            ['kind', 'result']  # kind: visit|portfolio
        )
        
        self.report_generation_duration_seconds = self._create_histogram(
            'report_generation_duration_seconds',
            'PDF report generation duration in seconds',
            ['kind'],
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
        )
        
        self.report_items_skipped_total = self._create_counter(
            'report_items_skipped_total',
            'Report items skipped after a recoverable failure',
            ['element', 'reason']  # element: photo|annotation|consent_signature
        )
    
    def track_duration(self, histogram_metric):
        """
        Decorator to track function duration.
        
        Usage:
            @metrics.track_duration(metrics.case_search_duration_seconds)
            def search_cases(search_filter):
                ...
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                try:
                    return func(*args, **kwargs)
                finally:
                    duration = time.time() - start_time
                    histogram_metric.observe(duration)
            return wrapper
        return decorator


# Global metrics instance
metrics = MetricsRegistry()

import time
from prometheus_client import Counter, Histogram, start_http_server
import logging

# Configure logger
logger = logging.getLogger(__name__)

# Define metrics
REQUESTS_TOTAL = Counter(
    'spahost_requests_total',
    'Total number of HTTP requests answered',
    ['method', 'status']
)

REQUEST_TIME = Histogram(
    'spahost_request_seconds',
    'Time spent answering HTTP requests',
    ['method'],
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

DISPATCH_TOTAL = Counter(
    'spahost_dispatch_total',
    'Requests routed by disposition',
    ['disposition']
)


class MetricsCollector:
    """
    Metrics collector for spahost.
    Provides methods for recording request and routing metrics.
    """

    @staticmethod
    def record_dispatch(disposition):
        """
        Record a routing decision.

        Args:
            disposition (str): Disposition chosen for the request
        """
        DISPATCH_TOTAL.labels(disposition=disposition).inc()

    @staticmethod
    def record_request(method, status, duration):
        """
        Record a completed HTTP request.

        Args:
            method (str): HTTP method
            status (int): Response status code
            duration (float): Time to answer in seconds
        """
        REQUESTS_TOTAL.labels(method=method, status=str(status)).inc()
        REQUEST_TIME.labels(method=method).observe(duration)
        logger.debug(f"Recorded request: {method} {status} in {duration:.4f}s")

    @staticmethod
    def request_timer(method):
        """
        Context manager for timing a request.

        Args:
            method (str): HTTP method

        Returns:
            context manager: Timer whose ``status`` is set by the caller
        """
        class Timer:
            status = 500

            def __enter__(self):
                self.start_time = time.perf_counter()
                return self

            def __exit__(self, exc_type, exc_val, exc_tb):
                duration = time.perf_counter() - self.start_time
                MetricsCollector.record_request(method, self.status, duration)

        return Timer()

    @staticmethod
    def start_exporter(port, addr="0.0.0.0"):
        """
        Expose metrics on a dedicated port.

        Args:
            port (int): Port for the Prometheus scrape endpoint
            addr (str): Interface to bind
        """
        start_http_server(port, addr=addr)
        logger.info(f"Prometheus metrics exposed on http://localhost:{port}/metrics")


# Create a singleton instance
metrics = MetricsCollector()

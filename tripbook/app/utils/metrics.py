"""Prometheus metrics for itinerary mutations and external calls."""

from prometheus_client import Counter, Histogram

repository_mutations_total = Counter(
    "tripbook_repository_mutations_total",
    "Total itinerary repository mutations",
    ["op", "outcome"],
)

geocode_requests_total = Counter(
    "tripbook_geocode_requests_total",
    "Total geocoding requests",
    ["kind", "outcome"],
)

geocode_latency_ms = Histogram(
    "tripbook_geocode_latency_ms",
    "Geocoding latency in milliseconds",
    ["kind"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

stale_geocode_results_total = Counter(
    "tripbook_stale_geocode_results_total",
    "Geocode results dropped because a newer click superseded them",
)

photo_conversions_total = Counter(
    "tripbook_photo_conversions_total",
    "Total photo file conversions",
    ["outcome"],
)


class PrometheusTripMetrics:
    """Prometheus-based metrics recorder."""

    def inc_mutation(self, op: str, outcome: str) -> None:
        """Increment repository mutation counter."""
        repository_mutations_total.labels(op=op, outcome=outcome).inc()

    def record_geocode(self, kind: str, outcome: str, latency_ms: float) -> None:
        """Record one geocoding call."""
        geocode_requests_total.labels(kind=kind, outcome=outcome).inc()
        geocode_latency_ms.labels(kind=kind).observe(latency_ms)

    def inc_stale_geocode(self) -> None:
        """Increment dropped stale result counter."""
        stale_geocode_results_total.inc()

    def inc_photo_conversion(self, outcome: str) -> None:
        """Increment photo conversion counter."""
        photo_conversions_total.labels(outcome=outcome).inc()


metrics = PrometheusTripMetrics()

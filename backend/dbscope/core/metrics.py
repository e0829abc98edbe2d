"""Central Prometheus metrics registry.

All application metrics are defined here so that names and labels stay
consistent between the engine, the session controller and the HTTP layer.
"""

from prometheus_client import Counter, Histogram, Info

app_info = Info("dbscope_app", "DBScope application info")

# --- HTTP ---
http_requests_total = Counter(
    "dbscope_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
http_request_duration_seconds = Histogram(
    "dbscope_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

# --- Connection handshake ---
connection_attempts_total = Counter(
    "dbscope_connection_attempts_total",
    "Simulated connection attempts by outcome",
    ["outcome"],  # connected | demo | missing_parameters | timeout
)

# --- Schema catalog ---
schema_listings_total = Counter(
    "dbscope_schema_listings_total",
    "Number of schema catalog listings served",
)

# --- Query execution ---
query_execution_duration_seconds = Histogram(
    "dbscope_query_execution_duration_seconds",
    "Simulated query execution duration in seconds",
    ["statement"],
)
query_result_rows = Histogram(
    "dbscope_query_result_rows",
    "Number of rows returned by a query",
    buckets=[0, 1, 10, 50, 100, 500, 1000],
)
queries_rejected_total = Counter(
    "dbscope_queries_rejected_total",
    "Queries refused by the read-only policy",
)

# --- Session ---
stale_results_discarded_total = Counter(
    "dbscope_stale_results_discarded_total",
    "Results dropped because a newer load superseded them",
)

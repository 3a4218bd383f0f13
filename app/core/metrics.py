from prometheus_client import Counter, Histogram, Info, CollectorRegistry, generate_latest
from prometheus_client.multiprocess import MultiProcessCollector
import os


registry = CollectorRegistry()
if os.getenv('prometheus_multiproc_dir'):
    MultiProcessCollector(registry)


http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0],
    registry=registry
)

http_errors_total = Counter(
    'http_errors_total',
    'Total HTTP errors',
    ['method', 'endpoint', 'status'],
    registry=registry
)

db_queries_total = Counter(
    'db_queries_total',
    'Total database queries',
    ['operation', 'table'],
    registry=registry
)

db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['operation', 'table'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=registry
)

workout_plans_generated_total = Counter(
    'workout_plans_generated_total',
    'Total workout plan generation attempts',
    ['outcome'],
    registry=registry
)

workout_plan_generation_seconds = Histogram(
    'workout_plan_generation_seconds',
    'Workout plan engine run duration in seconds',
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
    registry=registry
)

workout_plan_coverage_gaps_total = Counter(
    'workout_plan_coverage_gaps_total',
    'Required muscle tokens left uncovered by generated plans',
    ['token'],
    registry=registry
)

app_info = Info(
    'app_info',
    'Application information',
    registry=registry
)


def track_http_request(method: str, endpoint: str, status: int, duration: float):
    http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    if status >= 400:
        http_errors_total.labels(method=method, endpoint=endpoint, status=status).inc()


def track_db_query(operation: str, table: str, duration: float):
    db_queries_total.labels(operation=operation, table=table).inc()
    db_query_duration_seconds.labels(operation=operation, table=table).observe(duration)


def track_plan_generation(outcome: str, duration: float, missing_tokens: tuple[str, ...] = ()):
    workout_plans_generated_total.labels(outcome=outcome).inc()
    workout_plan_generation_seconds.observe(duration)
    for token in missing_tokens:
        workout_plan_coverage_gaps_total.labels(token=token).inc()


def get_metrics() -> bytes:
    return generate_latest(registry)


def set_app_info(version: str, environment: str):
    app_info.info({
        'version': version,
        'environment': environment
    })

from prometheus_client import CollectorRegistry, Counter, Histogram, Info, generate_latest


registry = CollectorRegistry()


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
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
    registry=registry
)

workout_session_transitions_total = Counter(
    'workout_session_transitions_total',
    'Workout session lifecycle transitions',
    ['transition'],
    registry=registry
)

training_plan_operations_total = Counter(
    'training_plan_operations_total',
    'Training plan assignment and deletion operations',
    ['operation'],
    registry=registry
)

storage_cleanup_blobs_total = Counter(
    'storage_cleanup_blobs_total',
    'Blobs visited by the orphaned storage sweep, by outcome',
    ['outcome'],
    registry=registry
)

storage_cleanup_runs_total = Counter(
    'storage_cleanup_runs_total',
    'Completed orphaned storage sweeps',
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


def track_session_transition(transition: str):
    workout_session_transitions_total.labels(transition=transition).inc()


def track_plan_operation(operation: str):
    training_plan_operations_total.labels(operation=operation).inc()


def track_storage_cleanup(deleted: int, skipped_recent: int, failed: int):
    storage_cleanup_blobs_total.labels(outcome="deleted").inc(deleted)
    storage_cleanup_blobs_total.labels(outcome="skipped_recent").inc(skipped_recent)
    storage_cleanup_blobs_total.labels(outcome="failed").inc(failed)
    storage_cleanup_runs_total.inc()


def get_metrics() -> bytes:
    return generate_latest(registry)


def set_app_info(version: str, environment: str):
    app_info.info({
        'version': version,
        'environment': environment
    })

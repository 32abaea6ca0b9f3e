# prayertools/metrics.py

from prometheus_client import Counter, Histogram

# Define Prometheus metrics

# Upstream API Metrics
API_REQUESTS_TOTAL = Counter('prayertools_api_requests_total', 'Total upstream API requests', ['adapter_name', 'endpoint', 'status'])
API_REQUEST_DURATION_SECONDS = Histogram('prayertools_api_request_duration_seconds', 'Upstream API request duration in seconds', ['adapter_name', 'endpoint'])

# Notification Metrics
NOTIFICATIONS_DISPATCHED_TOTAL = Counter('prayertools_notifications_dispatched_total', 'Notifications handled by the dispatcher', ['type', 'status'])

# Background Task Metrics
BACKGROUND_TASK_RUNS_TOTAL = Counter('prayertools_background_task_runs_total', 'Total background task runs', ['task_name', 'status'])
BACKGROUND_TASK_DURATION_SECONDS = Histogram('prayertools_background_task_duration_seconds', 'Background task duration in seconds', ['task_name'])

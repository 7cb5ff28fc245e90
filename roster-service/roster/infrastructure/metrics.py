from prometheus_client import Counter, Histogram, Gauge, generate_latest
from fastapi import Response

# HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# Roster
roster_mutations_total = Counter('roster_mutations_total', 'Roster mutations', ['operation'])
roster_size = Gauge('roster_size', 'Number of students in the roster')
storage_errors_total = Counter('storage_errors_total', 'Key-value storage failures', ['operation'])

# Courses
course_fetch_total = Counter('course_fetch_total', 'Course list fetches', ['outcome'])

def metrics_endpoint():
    """Endpoint for Prometheus metrics"""
    return Response(content=generate_latest(), media_type="text/plain")

# prayertools/routes/main_routes.py

import datetime
from flask_smorest import Blueprint
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from ..schemas import HealthSchema

main_bp = Blueprint('Main', __name__, url_prefix='/', description="Service status and metrics.")


def _timestamp():
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


@main_bp.route('/')
def index():
    """Main endpoint for the API. Lists the public endpoint groups."""
    return {
        "message": "Islamic Prayer Tools API",
        "status": "running",
        "endpoints": {
            "health": "/api/health",
            "auth": "/api/auth/login",
            "prayer": "/api/prayer/times",
            "mosques": "/api/mosques/",
            "notifications": "/api/notifications/",
            "location": "/api/location/ip-location",
        },
        "timestamp": _timestamp(),
    }


@main_bp.route('/api/health')
@main_bp.response(200, HealthSchema)
def health():
    """Liveness check."""
    return {"status": "OK", "message": "Islamic Prayer Tools API is running", "timestamp": _timestamp()}


@main_bp.route('/health')
@main_bp.response(200, HealthSchema)
def simple_health():
    """Liveness check for load balancers."""
    return {"status": "OK", "timestamp": _timestamp()}


@main_bp.route('/api/metrics')
def metrics():
    return generate_latest(), 200, {'Content-Type': CONTENT_TYPE_LATEST}

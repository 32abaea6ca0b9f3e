# prayertools/routes/prayer_routes.py
from flask import request, current_app
from flask_smorest import Blueprint

from ..schemas import ApiErrorSchema
from ..services import prayer_service

prayer_bp = Blueprint(
    'Prayer',
    __name__,
    url_prefix='/api/prayer',
    description="Prayer times and Hijri dates, relayed from the AlAdhan API."
)


def _method_arg():
    return request.args.get('method') or current_app.config.get('DEFAULT_CALCULATION_METHOD', prayer_service.DEFAULT_METHOD)


@prayer_bp.route('/times')
@prayer_bp.alt_response(400, schema=ApiErrorSchema, description="Latitude and longitude are required.")
@prayer_bp.alt_response(500, schema=ApiErrorSchema, description="The prayer time service failed.")
def times_by_coordinates():
    """Get today's prayer times for a latitude/longitude."""
    return prayer_service.get_times_by_coordinates(
        request.args.get('latitude'),
        request.args.get('longitude'),
        _method_arg(),
    )


@prayer_bp.route('/times/city')
@prayer_bp.alt_response(400, schema=ApiErrorSchema, description="City is required.")
@prayer_bp.alt_response(500, schema=ApiErrorSchema, description="The prayer time service failed.")
def times_by_city():
    """Get today's prayer times for a city."""
    return prayer_service.get_times_by_city(
        request.args.get('city'),
        request.args.get('country', ''),
        _method_arg(),
    )


@prayer_bp.route('/hijri-date')
@prayer_bp.alt_response(500, schema=ApiErrorSchema, description="The prayer time service failed.")
def hijri_date():
    """Convert a Gregorian date (D-M-YYYY, default today) to the Hijri calendar."""
    return prayer_service.get_hijri_date(request.args.get('date'))

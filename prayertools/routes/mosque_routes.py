# prayertools/routes/mosque_routes.py

from flask import request, g, current_app
from flask_smorest import Blueprint
from marshmallow import ValidationError as SchemaValidationError

from ..errors import ValidationError
from ..schemas import MosqueSearchQuerySchema, MosqueSchema, VerifyMosqueSchema, ApiErrorSchema
from ..services import mosque_service
from ..utils.auth import jwt_required, role_required
from ..utils.constants import Roles

mosque_bp = Blueprint(
    'Mosques',
    __name__,
    url_prefix='/api/mosques',
    description="Operations for finding, submitting and verifying mosques."
)


@mosque_bp.route('/')
@mosque_bp.response(200, MosqueSchema(many=True), description="List of mosques found.")
@mosque_bp.alt_response(400, schema=ApiErrorSchema, description="Invalid query, or only one of lat/lon was given.")
def search_mosques():
    """
    Search the mosque directory.

    Providing lat/lon returns mosques within `radius` km, nearest first.
    Providing `q` matches words in the name and address. Both can be combined.
    Set `verified=true` to only see reviewed mosques.
    """
    try:
        args = MosqueSearchQuerySchema().load(request.args)
    except SchemaValidationError as err:
        raise ValidationError("Invalid search parameters", errors=err.messages)

    lat = args.get('lat')
    lon = args.get('lon')
    text = (args.get('q') or '').strip()
    verified_only = args.get('verified', False)

    if (lat is None) != (lon is None):
        raise ValidationError("Both lat and lon are required for a location search")

    if lat is not None:
        radius = args.get('radius', current_app.config['DEFAULT_SEARCH_RADIUS_KM'])
        return mosque_service.find_nearby_mosques(lat, lon, radius, verified_only=verified_only, text=text)

    if text:
        return mosque_service.search_mosques(text, verified_only=verified_only)

    return mosque_service.list_mosques(verified_only=verified_only)


@mosque_bp.route('/<int:mosque_id>')
@mosque_bp.response(200, MosqueSchema)
@mosque_bp.alt_response(404, schema=ApiErrorSchema, description="Mosque not found.")
def get_mosque(mosque_id):
    """Get a single mosque."""
    return mosque_service.get_mosque(mosque_id)


@mosque_bp.route('/', methods=['POST'])
@jwt_required
@mosque_bp.response(201, MosqueSchema, description="Mosque submitted for review.")
@mosque_bp.alt_response(400, schema=ApiErrorSchema, description="Invalid mosque data.")
@mosque_bp.alt_response(401, schema=ApiErrorSchema, description="Authentication required.")
@mosque_bp.doc(security=[{"Bearer": []}])
def create_mosque():
    """Submit a new mosque. It stays unverified until an admin reviews it."""
    return mosque_service.create_mosque(request.get_json(silent=True), added_by=g.user['id'])


@mosque_bp.route('/<int:mosque_id>/verify', methods=['PUT'])
@role_required(Roles.ADMIN)
@mosque_bp.response(200, MosqueSchema, description="Verification flag updated.")
@mosque_bp.alt_response(403, schema=ApiErrorSchema, description="Admin role required.")
@mosque_bp.alt_response(404, schema=ApiErrorSchema, description="Mosque not found.")
@mosque_bp.doc(security=[{"Bearer": []}])
def verify_mosque(mosque_id):
    """Mark a mosque as verified, or send `{"verified": false}` to revoke it."""
    try:
        data = VerifyMosqueSchema().load(request.get_json(silent=True) or {})
    except SchemaValidationError as err:
        raise ValidationError("Invalid verification data", errors=err.messages)
    return mosque_service.set_mosque_verified(mosque_id, data['verified'])

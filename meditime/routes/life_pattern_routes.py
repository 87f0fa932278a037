# meditime/routes/life_pattern_routes.py
from flask import Blueprint
from meditime.controllers import life_pattern_controller

life_pattern_bp = Blueprint("life_pattern", __name__, url_prefix="/api/v1/life-pattern")

life_pattern_bp.route("", methods=["GET"])(life_pattern_controller.get_life_pattern)
life_pattern_bp.route("", methods=["POST"])(life_pattern_controller.save_life_pattern)

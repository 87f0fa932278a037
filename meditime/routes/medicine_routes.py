# meditime/routes/medicine_routes.py
from flask import Blueprint
from meditime.controllers import medicine_controller

medicine_bp = Blueprint("medicines", __name__, url_prefix="/api/v1/medicines")

medicine_bp.route("/search", methods=["GET"])(medicine_controller.search_medicines)
medicine_bp.route("/<int:medicine_id>", methods=["GET"])(medicine_controller.get_medicine)
medicine_bp.route("/<int:medicine_id>/recommendation", methods=["GET"])(medicine_controller.get_recommendation)
medicine_bp.route("/<int:medicine_id>/interactions", methods=["GET"])(medicine_controller.get_medicine_interactions)
medicine_bp.route("/<int:medicine_id>/add", methods=["POST"])(medicine_controller.add_medicine)

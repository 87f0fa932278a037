# meditime/routes/user_medicine_routes.py
from flask import Blueprint
from meditime.controllers import user_medicine_controller

user_medicine_bp = Blueprint("user_medicines", __name__, url_prefix="/api/v1/user-medicines")

user_medicine_bp.route("", methods=["GET"])(user_medicine_controller.list_user_medicines)
user_medicine_bp.route("/interactions", methods=["GET"])(user_medicine_controller.get_regimen_interactions)
user_medicine_bp.route("/schedule", methods=["GET"])(user_medicine_controller.get_daily_schedule)
user_medicine_bp.route("/<int:user_medicine_id>", methods=["DELETE"])(user_medicine_controller.remove_user_medicine)

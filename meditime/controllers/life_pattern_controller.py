# meditime/controllers/life_pattern_controller.py
from flask import current_app, request
from flask_jwt_extended import jwt_required
from meditime.extensions import db
from meditime.helpers import api_response, current_user_id, parse_flag, require_time
from meditime.services.medicine_store import MedicineStore

OPTIONAL_TIME_FIELDS = (
    "breakfast_time", "lunch_time", "dinner_time", "work_start_time", "work_end_time",
)


@jwt_required()
def get_life_pattern():
    user_id = current_user_id()
    pattern = MedicineStore(db.session).get_life_pattern(user_id)
    return api_response(True, "OK", pattern.to_dict() if pattern else None)


@jwt_required()
def save_life_pattern():
    """Create or update the caller's daily routine."""
    user_id = current_user_id()
    data = request.get_json() or {}

    fields = {
        "wake_up_time": require_time(data, "wake_up_time"),
        "bed_time": require_time(data, "bed_time"),
    }
    for name in OPTIONAL_TIME_FIELDS:
        fields[name] = require_time(data, name, required=False)
    fields["has_driving"] = parse_flag(data, "has_driving")
    fields["has_focus_work"] = parse_flag(data, "has_focus_work")

    store = MedicineStore(db.session)
    try:
        pattern = store.upsert_life_pattern(user_id, **fields)
        store.commit()
    except Exception:
        store.rollback()
        raise

    current_app.logger.info(f"Life pattern saved for user {user_id}")
    return api_response(True, "Life pattern saved", pattern.to_dict())

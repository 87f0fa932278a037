# meditime/controllers/medicine_controller.py
from flask import current_app, jsonify, request
from flask_jwt_extended import jwt_required
from meditime.extensions import db
from meditime.errors import ValidationError
from meditime.helpers import api_response, current_user_id, optional_text, parse_date
from meditime.models.user_medicine import DOSAGE_LIMIT
from meditime.services.interaction_analyzer import InteractionAnalyzer
from meditime.services.medicine_store import MedicineStore
from meditime.services.registration import add_medicine_to_user
from meditime.services.timing_recommender import recommend

MIN_QUERY_LENGTH = 2


def search_medicines():
    query = (request.args.get("q") or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        raise ValidationError("Search query must be at least 2 characters")

    medicines = MedicineStore(db.session).search_medicines(query)
    return jsonify({
        "success": True,
        "data": [m.to_dict() for m in medicines],
        "count": len(medicines),
    }), 200


@jwt_required(optional=True)
def get_medicine(medicine_id):
    """Medicine detail with a once-a-day recommendation for the caller."""
    store = MedicineStore(db.session)
    medicine = store.require_medicine(medicine_id)

    user_id = current_user_id(required=False)
    life_pattern = store.get_life_pattern(user_id) if user_id else None
    recommendation = recommend(medicine, life_pattern, 1)

    return api_response(True, "OK", {
        "medicine": medicine.to_dict(),
        "recommendation": recommendation.to_dict(),
    })


@jwt_required(optional=True)
def get_recommendation(medicine_id):
    store = MedicineStore(db.session)
    medicine = store.require_medicine(medicine_id)

    user_id = current_user_id(required=False)
    life_pattern = store.get_life_pattern(user_id) if user_id else None
    recommendation = recommend(medicine, life_pattern, request.args.get("frequency", 1))

    return api_response(True, "OK", {
        "medicine": medicine.summary(),
        "characteristics": {
            "sleep_inducing": medicine.sleep_inducing.value,
            "alertness_effect": medicine.alertness_effect.value,
            "stomach_irritation": medicine.stomach_irritation,
            "meal_timing": medicine.meal_timing.value,
        },
        "recommendation": recommendation.to_dict(),
    })


@jwt_required(optional=True)
def get_medicine_interactions(medicine_id):
    """Known interactions of a medicine, flagged against the caller's regimen."""
    store = MedicineStore(db.session)
    store.require_medicine(medicine_id)

    user_id = current_user_id(required=False)
    regimen_ids = set()
    if user_id:
        regimen_ids = {um.medicine_id for um in store.active_user_medicines(user_id)}

    report = InteractionAnalyzer(store).for_medicine(medicine_id, regimen_ids)
    data = report.to_dict()
    data.pop("duplicate_ingredients")
    return api_response(True, "OK", data)


@jwt_required()
def add_medicine(medicine_id):
    user_id = current_user_id()
    data = request.get_json() or {}

    start_date = parse_date(data.get("start_date"), "start_date")
    end_date = parse_date(data.get("end_date"), "end_date")
    if start_date and end_date and end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    dosage = optional_text(data, "dosage", DOSAGE_LIMIT)
    notes = optional_text(data, "notes")

    store = MedicineStore(db.session)
    try:
        result = add_medicine_to_user(
            store,
            user_id,
            medicine_id,
            dosage=dosage,
            frequency=data.get("frequency", 1),
            start_date=start_date,
            end_date=end_date,
            notes=notes,
        )
        store.commit()
    except Exception:
        store.rollback()
        raise

    current_app.logger.info(
        f"User {user_id} added medicine {medicine_id} "
        f"(times={result.user_medicine.times}, warnings={result.has_warnings})"
    )
    return api_response(
        True,
        "Medicine added",
        result.user_medicine.to_dict(),
        status_code=201,
        interaction_warnings=result.interaction_warnings,
        duplicate_ingredients=result.duplicate_ingredients,
        has_warnings=result.has_warnings,
    )

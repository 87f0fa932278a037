# meditime/controllers/user_medicine_controller.py
from flask import current_app
from flask_jwt_extended import jwt_required
from meditime.extensions import db
from meditime.helpers import api_response, current_user_id
from meditime.services.interaction_analyzer import InteractionAnalyzer
from meditime.services.medicine_store import MedicineStore


@jwt_required()
def list_user_medicines():
    user_id = current_user_id()
    regimen = MedicineStore(db.session).active_user_medicines(user_id)
    return api_response(True, "OK", [um.to_dict() for um in regimen])


@jwt_required()
def remove_user_medicine(user_medicine_id):
    user_id = current_user_id()
    store = MedicineStore(db.session)
    try:
        store.remove_user_medicine(user_id, user_medicine_id)
        store.commit()
    except Exception:
        store.rollback()
        raise

    current_app.logger.info(f"User {user_id} removed user_medicine {user_medicine_id}")
    return api_response(True, "Medicine removed")


@jwt_required()
def get_regimen_interactions():
    """Interactions and duplicated ingredients among the caller's active medicines."""
    user_id = current_user_id()
    store = MedicineStore(db.session)
    medicines = [um.medicine for um in store.active_user_medicines(user_id)]

    report = InteractionAnalyzer(store).for_medicine_set(medicines)
    data = report.to_dict()
    data.pop("user_medicine_interactions")
    return api_response(True, "OK", data)


@jwt_required()
def get_daily_schedule():
    """Every active dose of the day in clock order."""
    user_id = current_user_id()
    doses = []
    for um in MedicineStore(db.session).active_user_medicines(user_id):
        for time in um.times:
            doses.append({
                "time": time,
                "user_medicine_id": um.id,
                "medicine": um.medicine.summary(),
                "dosage": um.dosage,
            })
    # "HH:MM" sorts lexically in clock order
    doses.sort(key=lambda dose: dose["time"])
    return api_response(True, "OK", doses)

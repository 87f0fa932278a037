"""Adding a medicine to a user's regimen."""

import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from meditime.errors import AlreadyExistsError
from meditime.helpers import coerce_frequency
from meditime.models import MedicineStatus
from meditime.services.interaction_analyzer import InteractionAnalyzer, shared_ingredients
from meditime.services.timing_recommender import recommend

logger = logging.getLogger(__name__)

DEFAULT_DOSAGE = "1 tablet"


@dataclass
class RegistrationResult:
    user_medicine: Any
    interaction_warnings: List[Dict[str, Any]] = field(default_factory=list)
    duplicate_ingredients: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_warnings(self):
        return bool(self.interaction_warnings or self.duplicate_ingredients)


def add_medicine_to_user(store, user_id, medicine_id, dosage=None, frequency=1,
                         start_date=None, end_date=None, notes=None):
    """
    Register ``medicine_id`` for the user and cache its recommended times.

    Interaction and duplicate-ingredient findings are returned as warnings;
    they never block the registration. The caller commits.
    """
    medicine = store.require_medicine(medicine_id)

    if store.find_active_user_medicine(user_id, medicine_id):
        raise AlreadyExistsError("Medicine already added", error_code="EMEDICINE_ALREADY_ADDED")

    regimen = store.active_user_medicines(user_id)
    regimen_ids = {um.medicine_id for um in regimen}

    report = InteractionAnalyzer(store).for_medicine(medicine_id, regimen_ids)
    duplicates = shared_ingredients(medicine, [um.medicine for um in regimen])

    frequency = coerce_frequency(frequency)
    recommendation = recommend(medicine, store.get_life_pattern(user_id), frequency)

    user_medicine = store.add_user_medicine(
        user_id=user_id,
        medicine_id=medicine.id,
        dosage=(dosage or "").strip() or DEFAULT_DOSAGE,
        frequency=frequency,
        start_date=start_date or datetime.date.today(),
        end_date=end_date,
        notes=notes,
        status=MedicineStatus.ACTIVE,
    )
    user_medicine.medicine = medicine
    user_medicine.times = recommendation.recommended_times

    if report.user_medicine_interactions or duplicates:
        logger.info(
            "user=%s added medicine=%s with %d interaction and %d ingredient warnings",
            user_id, medicine_id, len(report.user_medicine_interactions), len(duplicates),
        )

    return RegistrationResult(
        user_medicine=user_medicine,
        interaction_warnings=report.user_medicine_interactions,
        duplicate_ingredients=duplicates,
    )

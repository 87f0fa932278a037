"""Data access for medicines, interactions, life patterns and user regimens.

Services receive a store built around the request session instead of
reaching for ``db`` themselves, so the same code runs against any session.
"""

from sqlalchemy import and_, or_
from sqlalchemy.orm import joinedload

from meditime.errors import NotFoundError
from meditime.models import (
    DrugInteraction,
    LifePattern,
    Medicine,
    MedicineStatus,
    UserMedicine,
)

SEARCH_LIMIT = 20


class MedicineStore:
    def __init__(self, session):
        self.session = session

    # -- medicines ---------------------------------------------------------

    def get_medicine(self, medicine_id):
        return self.session.get(Medicine, medicine_id)

    def require_medicine(self, medicine_id):
        medicine = self.get_medicine(medicine_id)
        if medicine is None:
            raise NotFoundError("Medicine not found", error_code="MEDICINE_NOT_FOUND")
        return medicine

    def find_medicine_by_name(self, name):
        return self.session.query(Medicine).filter(Medicine.name == name).first()

    def search_medicines(self, query, limit=SEARCH_LIMIT):
        # autoescape: "%" and "_" in the query match literally
        return (
            self.session.query(Medicine)
            .filter(or_(
                Medicine.name.contains(query, autoescape=True),
                Medicine.generic_name.contains(query, autoescape=True),
            ))
            .order_by(Medicine.name.asc())
            .limit(limit)
            .all()
        )

    def add_medicine(self, **fields):
        medicine = Medicine(**fields)
        self.session.add(medicine)
        return medicine

    # -- interactions ------------------------------------------------------

    def _interaction_query(self):
        return self.session.query(DrugInteraction).options(
            joinedload(DrugInteraction.medicine_a),
            joinedload(DrugInteraction.medicine_b),
        )

    def interactions_involving(self, medicine_id):
        """Every interaction with ``medicine_id`` on either side of the pair."""
        return (
            self._interaction_query()
            .filter(or_(
                DrugInteraction.medicine_a_id == medicine_id,
                DrugInteraction.medicine_b_id == medicine_id,
            ))
            .order_by(DrugInteraction.id)
            .all()
        )

    def interactions_within(self, medicine_ids):
        """Interactions whose both sides are in ``medicine_ids``."""
        ids = list(medicine_ids)
        if not ids:
            return []
        return (
            self._interaction_query()
            .filter(and_(
                DrugInteraction.medicine_a_id.in_(ids),
                DrugInteraction.medicine_b_id.in_(ids),
            ))
            .order_by(DrugInteraction.id)
            .all()
        )

    # -- life pattern ------------------------------------------------------

    def get_life_pattern(self, user_id):
        return self.session.query(LifePattern).filter_by(user_id=user_id).first()

    def upsert_life_pattern(self, user_id, **fields):
        pattern = self.get_life_pattern(user_id)
        if not pattern:
            pattern = LifePattern(user_id=user_id)
        for key, value in fields.items():
            setattr(pattern, key, value)
        self.session.add(pattern)
        return pattern

    # -- user medicines ----------------------------------------------------

    def active_user_medicines(self, user_id):
        return (
            self.session.query(UserMedicine)
            .options(joinedload(UserMedicine.medicine))
            .filter_by(user_id=user_id, status=MedicineStatus.ACTIVE)
            .order_by(UserMedicine.created_at.desc(), UserMedicine.id.desc())
            .all()
        )

    def find_active_user_medicine(self, user_id, medicine_id):
        return (
            self.session.query(UserMedicine)
            .filter_by(user_id=user_id, medicine_id=medicine_id, status=MedicineStatus.ACTIVE)
            .first()
        )

    def get_user_medicine(self, user_id, user_medicine_id):
        return (
            self.session.query(UserMedicine)
            .filter_by(id=user_medicine_id, user_id=user_id)
            .first()
        )

    def add_user_medicine(self, **fields):
        user_medicine = UserMedicine(**fields)
        self.session.add(user_medicine)
        return user_medicine

    def remove_user_medicine(self, user_id, user_medicine_id):
        user_medicine = self.get_user_medicine(user_id, user_medicine_id)
        if user_medicine is None:
            raise NotFoundError("Medicine not found in your list", error_code="USER_MEDICINE_NOT_FOUND")
        user_medicine.remove()
        return user_medicine

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

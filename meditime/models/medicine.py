from datetime import datetime
from meditime.extensions import db
from meditime.models.enums import AlertnessEffect, MealTiming, SleepInducing

TEXT_LIMIT = 500


class Medicine(db.Model):
    __tablename__ = "medicines"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, index=True, nullable=False)
    generic_name = db.Column(db.String(255), nullable=True, index=True)
    ingredients = db.Column(db.Text, nullable=True)        # comma separated
    company = db.Column(db.String(255), nullable=True)
    class_name = db.Column(db.String(255), nullable=True)

    effect = db.Column(db.String(TEXT_LIMIT), nullable=True)
    usage = db.Column(db.String(TEXT_LIMIT), nullable=True)
    side_effects = db.Column(db.String(TEXT_LIMIT), nullable=True)
    precautions = db.Column(db.String(TEXT_LIMIT), nullable=True)

    sleep_inducing = db.Column(db.Enum(SleepInducing), nullable=False, default=SleepInducing.NONE)
    alertness_effect = db.Column(db.Enum(AlertnessEffect), nullable=False, default=AlertnessEffect.NONE)
    stomach_irritation = db.Column(db.Boolean, nullable=False, default=False)
    meal_timing = db.Column(db.Enum(MealTiming), nullable=False, default=MealTiming.ANYTIME)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def summary(self):
        return {"id": self.id, "name": self.name, "generic_name": self.generic_name}

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "generic_name": self.generic_name,
            "ingredients": self.ingredients,
            "company": self.company,
            "class_name": self.class_name,
            "effect": self.effect,
            "usage": self.usage,
            "side_effects": self.side_effects,
            "precautions": self.precautions,
            "sleep_inducing": self.sleep_inducing.value,
            "alertness_effect": self.alertness_effect.value,
            "stomach_irritation": self.stomach_irritation,
            "meal_timing": self.meal_timing.value,
        }

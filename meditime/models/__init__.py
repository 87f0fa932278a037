from .enums import (
    AlertnessEffect,
    InteractionType,
    MealTiming,
    MedicineStatus,
    SeverityLevel,
    SleepInducing,
)
from .user import User
from .medicine import Medicine
from .life_pattern import LifePattern
from .user_medicine import UserMedicine
from .drug_interaction import DrugInteraction

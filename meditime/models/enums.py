import enum


class SleepInducing(enum.Enum):
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class AlertnessEffect(enum.Enum):
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class MealTiming(enum.Enum):
    BEFORE_MEAL = "BEFORE_MEAL"
    AFTER_MEAL = "AFTER_MEAL"
    WITH_MEAL = "WITH_MEAL"
    ANYTIME = "ANYTIME"


class SeverityLevel(enum.Enum):
    SEVERE = "SEVERE"
    MODERATE = "MODERATE"
    MILD = "MILD"

    @property
    def rank(self):
        return _SEVERITY_RANK[self]

    @property
    def label(self):
        return _SEVERITY_LABELS[self]


class InteractionType(enum.Enum):
    EFFECT_INCREASE = "EFFECT_INCREASE"
    EFFECT_DECREASE = "EFFECT_DECREASE"
    SIDE_EFFECT_INCREASE = "SIDE_EFFECT_INCREASE"
    ABSORPTION_CHANGE = "ABSORPTION_CHANGE"

    @property
    def label(self):
        return _INTERACTION_LABELS[self]


class MedicineStatus(enum.Enum):
    ACTIVE = "ACTIVE"
    REMOVED = "REMOVED"


_SEVERITY_RANK = {
    SeverityLevel.SEVERE: 0,
    SeverityLevel.MODERATE: 1,
    SeverityLevel.MILD: 2,
}

_SEVERITY_LABELS = {
    SeverityLevel.SEVERE: "Warning",
    SeverityLevel.MODERATE: "Caution",
    SeverityLevel.MILD: "Note",
}

_INTERACTION_LABELS = {
    InteractionType.EFFECT_INCREASE: "Increased effect",
    InteractionType.EFFECT_DECREASE: "Decreased effect",
    InteractionType.SIDE_EFFECT_INCREASE: "More side effects",
    InteractionType.ABSORPTION_CHANGE: "Changed absorption",
}

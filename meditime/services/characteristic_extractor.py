"""
Import-time classification of medicine records.

Raw text from a drug-database export is scanned for keywords to derive the
four attributes the timing recommender works from. The rules are substring
matches over one lower-cased buffer, applied per axis in a fixed order; the
first rule that matches decides the value.
"""

from dataclasses import dataclass, asdict
from typing import Mapping, Optional

from meditime.models.enums import AlertnessEffect, MealTiming, SleepInducing
from meditime.models.medicine import TEXT_LIMIT

# Header aliases, first non-empty wins. Korean names are the public
# MFDS drug-product export columns.
FIELD_ALIASES = {
    "name": ("name", "품목명", "제품명"),
    "generic_name": ("generic_name", "주성분", "성분명"),
    "ingredients": ("ingredients", "원료성분", "성분"),
    "company": ("company", "업체명", "제조사"),
    "class_name": ("class_name", "분류명", "약효분류"),
    "effect": ("effect", "효능효과", "효능"),
    "usage": ("usage", "용법용량", "용법"),
    "precautions": ("precautions", "주의사항", "사용상주의사항"),
    "side_effects": ("side_effects", "부작용"),
}

STRONG_SEDATIVE_KEYWORDS = (
    "수면제", "졸피뎀", "스틸녹스", "렘수면",
    "hypnotic", "zolpidem", "stilnox", "rem sleep",
)
SEDATION_KEYWORDS = (
    "졸음", "수면", "클로르페니라민", "디펜히드라민", "멜라토닌", "진정",
    "drowsiness", "drowsy", "sedation", "sedative", "chlorpheniramine",
    "diphenhydramine", "melatonin",
)
ANTIHISTAMINE_MARKERS = ("항히스타민", "클로르", "antihistamine", "chlorphen")

THYROID_KEYWORDS = (
    "갑상선호르몬", "신지로이드", "레보티록신",
    "thyroid hormone", "synthroid", "levothyroxine",
)
STIMULANT_KEYWORDS = (
    "카페인", "불면", "각성", "티록신", "에페드린", "슈도에페드린",
    "caffeine", "insomnia", "ephedrine", "pseudoephedrine", "decongestant",
)

GASTRIC_KEYWORDS = (
    "위장", "소염", "이부프로펜", "아스피린", "nsaid", "식후",
    "stomach", "gastric", "anti-inflammatory", "ibuprofen", "aspirin",
    "naproxen", "after meal",
)

BEFORE_MEAL_KEYWORDS = ("식전", "공복", "before meal", "empty stomach")
AFTER_MEAL_KEYWORDS = ("식후", "after meal")
WITH_MEAL_KEYWORDS = ("식사 중", "식사와 함께", "during meal", "with meal")


@dataclass
class MedicineAttributes:
    name: str
    generic_name: str
    ingredients: str
    company: str
    class_name: str
    effect: str
    usage: str
    side_effects: str
    precautions: str
    sleep_inducing: SleepInducing
    alertness_effect: AlertnessEffect
    stomach_irritation: bool
    meal_timing: MealTiming

    def to_model_kwargs(self):
        return asdict(self)


def _field(raw: Mapping[str, Optional[str]], key: str) -> str:
    for alias in FIELD_ALIASES[key]:
        value = raw.get(alias)
        if value:
            return str(value).strip()
    return ""


def _has_any(buffer: str, keywords) -> bool:
    return any(k in buffer for k in keywords)


def classify_sleep_inducing(buffer: str) -> SleepInducing:
    if _has_any(buffer, STRONG_SEDATIVE_KEYWORDS):
        return SleepInducing.HIGH
    if _has_any(buffer, SEDATION_KEYWORDS) and _has_any(buffer, ANTIHISTAMINE_MARKERS):
        return SleepInducing.MEDIUM
    return SleepInducing.NONE


def classify_alertness(buffer: str) -> AlertnessEffect:
    if _has_any(buffer, THYROID_KEYWORDS):
        return AlertnessEffect.HIGH
    if _has_any(buffer, STIMULANT_KEYWORDS):
        return AlertnessEffect.MEDIUM
    return AlertnessEffect.NONE


def classify_stomach_irritation(buffer: str) -> bool:
    return _has_any(buffer, GASTRIC_KEYWORDS)


def classify_meal_timing(buffer: str, stomach_irritation: bool) -> MealTiming:
    if _has_any(buffer, BEFORE_MEAL_KEYWORDS):
        return MealTiming.BEFORE_MEAL
    if _has_any(buffer, AFTER_MEAL_KEYWORDS) or stomach_irritation:
        return MealTiming.AFTER_MEAL
    if _has_any(buffer, WITH_MEAL_KEYWORDS):
        return MealTiming.WITH_MEAL
    return MealTiming.ANYTIME


def extract(raw_fields: Mapping[str, Optional[str]]) -> MedicineAttributes:
    """Classify one raw import row. Missing fields are treated as empty."""
    fields = {key: _field(raw_fields, key) for key in FIELD_ALIASES}

    buffer = " ".join((
        fields["name"],
        fields["generic_name"],
        fields["effect"],
        fields["usage"],
        fields["precautions"],
        fields["side_effects"],
    )).lower()

    stomach_irritation = classify_stomach_irritation(buffer)

    return MedicineAttributes(
        name=fields["name"],
        generic_name=fields["generic_name"],
        ingredients=fields["ingredients"] or fields["generic_name"],
        company=fields["company"],
        class_name=fields["class_name"],
        effect=fields["effect"][:TEXT_LIMIT],
        usage=fields["usage"][:TEXT_LIMIT],
        side_effects=fields["side_effects"][:TEXT_LIMIT],
        precautions=fields["precautions"][:TEXT_LIMIT],
        sleep_inducing=classify_sleep_inducing(buffer),
        alertness_effect=classify_alertness(buffer),
        stomach_irritation=stomach_irritation,
        meal_timing=classify_meal_timing(buffer, stomach_irritation),
    )

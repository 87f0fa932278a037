"""
Dosing-time recommendation.

Maps a medicine's classification (sleep inducing, alertness effect, stomach
irritation, meal timing) and the user's daily routine to one or more
"HH:MM" suggestions. Rules are checked in a fixed order and the first one
that applies decides the times:

    sedation > stimulant > gastric (after meal) > before meal > after meal
    > with meal > spread over the active window

Hours are wall-clock and wrap modulo 24. Missing or malformed routine
fields fall back to the defaults below; the recommender never raises.
"""

import enum
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Tuple

from meditime.helpers import coerce_frequency, format_hhmm, parse_hhmm
from meditime.models.enums import AlertnessEffect, MealTiming, SleepInducing

logger = logging.getLogger(__name__)

DEFAULT_WAKE = (7, 0)
DEFAULT_BED = (23, 0)
DEFAULT_BREAKFAST = (8, 0)
DEFAULT_LUNCH = (12, 30)
DEFAULT_DINNER = (19, 0)

MEAL_OFFSET_MINUTES = 30

NO_LIFE_PATTERN_TEXT = (
    "Set up your daily routine on My Page to get dosing times "
    "matched to your day."
)


class TimeSlot(enum.Enum):
    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    EVENING = "EVENING"
    BEDTIME = "BEDTIME"


# class-name substring -> extra warnings
CLASS_WARNINGS = (
    (("antibiotic", "항생제"), [
        "Take antibiotics regularly for the whole prescribed course. "
        "Do not stop early even if you feel better.",
    ]),
    (("diabet", "당뇨"), [
        "If you notice signs of low blood sugar (cold sweat, shaking, "
        "dizziness), take sugar right away and contact your doctor.",
    ]),
    (("hypertens", "고혈압"), [
        "If you feel very dizzy or your blood pressure drops too low, ask "
        "your doctor whether the dosing time should change.",
    ]),
    (("sleep aid", "hypnotic", "수면제"), [
        "Sleeping pills can cause dependence; follow your doctor's "
        "instructions.",
        "Make sure you can sleep for at least 7-8 hours after a dose.",
    ]),
)


@dataclass
class Recommendation:
    recommended_times: List[str] = field(default_factory=list)
    reason: str = ""
    chronopharmacology: str = ""
    characteristics: List[str] = field(default_factory=list)
    special_warnings: List[str] = field(default_factory=list)
    life_pattern_consideration: str = ""
    time_slot: Optional[TimeSlot] = None

    def to_dict(self):
        data = asdict(self)
        data["time_slot"] = self.time_slot.value if self.time_slot else None
        return data


@dataclass
class DailyRoutine:
    """A life pattern with every time resolved to (hour, minute)."""
    wake: Tuple[int, int] = DEFAULT_WAKE
    bed: Tuple[int, int] = DEFAULT_BED
    breakfast: Tuple[int, int] = DEFAULT_BREAKFAST
    lunch: Tuple[int, int] = DEFAULT_LUNCH
    dinner: Tuple[int, int] = DEFAULT_DINNER
    has_driving: bool = False
    has_focus_work: bool = False

    @classmethod
    def from_life_pattern(cls, life_pattern):
        if life_pattern is None:
            return cls()

        def resolve(attr, default):
            parsed = parse_hhmm(getattr(life_pattern, attr, None))
            return parsed if parsed is not None else default

        return cls(
            wake=resolve("wake_up_time", DEFAULT_WAKE),
            bed=resolve("bed_time", DEFAULT_BED),
            breakfast=resolve("breakfast_time", DEFAULT_BREAKFAST),
            lunch=resolve("lunch_time", DEFAULT_LUNCH),
            dinner=resolve("dinner_time", DEFAULT_DINNER),
            has_driving=bool(getattr(life_pattern, "has_driving", False)),
            has_focus_work=bool(getattr(life_pattern, "has_focus_work", False)),
        )

    @property
    def wake_hour(self):
        return self.wake[0]

    @property
    def bed_hour(self):
        return self.bed[0]

    @property
    def active_hours(self):
        if self.bed_hour > self.wake_hour:
            return self.bed_hour - self.wake_hour
        return 24 - self.wake_hour + self.bed_hour


def _as_enum(enum_cls, value, default):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _slot_for(time_str):
    hour = int(time_str[:2])
    if 5 <= hour < 12:
        return TimeSlot.MORNING
    if 12 <= hour < 17:
        return TimeSlot.AFTERNOON
    if 17 <= hour < 21:
        return TimeSlot.EVENING
    return TimeSlot.BEDTIME


def _meal_anchors(routine, frequency):
    if frequency == 1:
        return [routine.breakfast]
    if frequency == 2:
        return [routine.breakfast, routine.dinner]
    return [routine.breakfast, routine.lunch, routine.dinner]


def spread_over_active_window(routine, frequency):
    """Evenly spaced doses between wake and bed time, first at wake + 1h."""
    wake, window = routine.wake_hour, routine.active_hours
    if frequency == 1:
        hours = [wake + 1]
    elif frequency == 2:
        hours = [wake + 1, wake + window // 2]
    elif frequency == 3:
        hours = [wake + 1, wake + window // 3, wake + window * 2 // 3]
    else:
        interval = max(1, window // frequency)
        hours = [wake + 1 + i * interval for i in range(frequency)]
    return [format_hhmm(h) for h in hours]


def _sedation(rec, routine, level):
    if level == SleepInducing.HIGH:
        rec.recommended_times = [format_hhmm(routine.bed_hour - 1)]
        rec.reason = (
            "This medicine causes strong sedation and may make you drowsy, "
            "so it is usually taken shortly before bed."
        )
        rec.chronopharmacology = (
            "Melatonin is released at night to bring on sleep. Taking a "
            "sedating medicine during that window works with the body's "
            "own sleep signal."
        )
        if routine.has_driving:
            rec.special_warnings.append(
                "If you drive often, avoid driving for at least 8 hours "
                "after taking this medicine."
            )
        if routine.has_focus_work:
            rec.special_warnings.append(
                "Avoid taking it before work that needs concentration."
            )
    else:
        rec.recommended_times = [format_hhmm(routine.bed_hour - 2)]
        rec.reason = (
            "This medicine may cause moderate drowsiness (sedation), so it "
            "is usually taken in the evening."
        )
        rec.chronopharmacology = (
            "Activity winds down in the evening, so a mildly sedating dose "
            "then interferes least with the day."
        )
        if routine.has_driving or routine.has_focus_work:
            rec.special_warnings.append(
                "Daytime doses may cause drowsiness or poorer "
                "concentration; take care when driving or focusing."
            )


def _stimulant(rec, routine, level):
    if level == AlertnessEffect.HIGH:
        rec.recommended_times = [format_hhmm(routine.wake_hour, 30)]
        rec.reason = (
            "This medicine has a strong stimulating effect and can disturb "
            "sleep, so it is usually taken in the morning."
        )
        rec.chronopharmacology = (
            "Cortisol peaks in the morning. A stimulating dose then follows "
            "the natural rhythm, while an evening dose can suppress "
            "melatonin and cause insomnia."
        )
    else:
        rec.recommended_times = [format_hhmm(routine.wake_hour + 1)]
        rec.reason = (
            "This medicine has a mild stimulating effect, so a morning dose "
            "keeps it from affecting sleep."
        )
        rec.chronopharmacology = (
            "Stimulating the central nervous system late in the day can "
            "disturb melatonin release and the sleep cycle."
        )
    rec.special_warnings.append(
        "Evening doses may cause insomnia; avoid taking it in the evening."
    )


def _gastric(rec, routine):
    rec.recommended_times = [format_hhmm(routine.breakfast[0], 30)]
    rec.reason = (
        "This medicine can irritate the stomach, so it is best taken after "
        "breakfast."
    )
    rec.chronopharmacology = (
        "After a meal the stomach lining is protected by food, which "
        "softens irritation from the medicine."
    )


def _before_meal(rec, routine, frequency):
    rec.recommended_times = [
        format_hhmm(h, m - MEAL_OFFSET_MINUTES)
        for h, m in _meal_anchors(routine, frequency)
    ]
    rec.reason = (
        "This medicine works best on an empty stomach; take it about 30 "
        "minutes before a meal."
    )
    rec.chronopharmacology = (
        "An empty stomach absorbs the medicine faster, and some medicines "
        "are absorbed less when taken with food."
    )


def _after_meal(rec, routine, frequency):
    rec.recommended_times = [
        format_hhmm(h, m + MEAL_OFFSET_MINUTES)
        for h, m in _meal_anchors(routine, frequency)
    ]
    rec.reason = "This medicine is recommended after meals."
    rec.chronopharmacology = (
        "Food in the stomach eases irritation of the stomach lining, and "
        "some medicines are absorbed better with food."
    )


def _with_meal(rec, routine):
    rec.recommended_times = [format_hhmm(*routine.breakfast)]
    rec.reason = "This medicine is recommended during or right after a meal."
    rec.chronopharmacology = (
        "Taking it with food keeps absorption steady and helps prevent "
        "side effects such as low blood sugar."
    )


def _anytime(rec, routine, frequency):
    rec.recommended_times = spread_over_active_window(routine, frequency)
    rec.reason = (
        "The dosing time for this medicine is flexible. Take it at the "
        "same time(s) every day."
    )
    rec.chronopharmacology = (
        "Regular dosing keeps blood levels steady and the effect "
        "consistent."
    )


def _characteristics(sleep, alert, stomach_irritation):
    items = []
    if sleep == SleepInducing.HIGH:
        items.append("Strong sleep-inducing ingredient - may cause drowsiness")
    elif sleep == SleepInducing.MEDIUM:
        items.append("Moderate sleep-inducing effect - drowsiness possible")
    if alert == AlertnessEffect.HIGH:
        items.append("Strong stimulating effect - may disturb sleep")
    elif alert == AlertnessEffect.MEDIUM:
        items.append("Moderate stimulating effect - take care with evening doses")
    if stomach_irritation:
        items.append("May irritate the stomach - take after meals")
    return items


def _life_pattern_consideration(life_pattern, sleep, alert, meal_timing):
    if life_pattern is None:
        return NO_LIFE_PATTERN_TEXT

    notes = [
        f"Wake time: {life_pattern.wake_up_time}, bed time: {life_pattern.bed_time}."
    ]
    if sleep != SleepInducing.NONE and getattr(life_pattern, "work_start_time", None):
        notes.append(f"Avoid taking it before work starts ({life_pattern.work_start_time}).")
    if alert != AlertnessEffect.NONE:
        notes.append(f"Take it at least 6 hours before bed time ({life_pattern.bed_time}).")
    if getattr(life_pattern, "breakfast_time", None) and meal_timing != MealTiming.ANYTIME:
        notes.append(f"Line doses up with your meals (breakfast: {life_pattern.breakfast_time}).")
    return " ".join(notes)


def _class_warnings(class_name):
    lowered = (class_name or "").lower()
    warnings = []
    for markers, messages in CLASS_WARNINGS:
        if any(m in lowered for m in markers):
            warnings.extend(messages)
    return warnings


def recommend(medicine, life_pattern=None, frequency=1) -> Recommendation:
    """
    Suggest dosing times for ``medicine``.

    ``medicine`` is anything exposing the four classification attributes and
    ``class_name`` (a Medicine row or extractor output). ``life_pattern`` may
    be None. Times are returned in generation order, not sorted.
    """
    frequency = coerce_frequency(frequency)
    routine = DailyRoutine.from_life_pattern(life_pattern)

    sleep = _as_enum(SleepInducing, getattr(medicine, "sleep_inducing", None), SleepInducing.NONE)
    alert = _as_enum(AlertnessEffect, getattr(medicine, "alertness_effect", None), AlertnessEffect.NONE)
    meal_timing = _as_enum(MealTiming, getattr(medicine, "meal_timing", None), MealTiming.ANYTIME)
    stomach_irritation = bool(getattr(medicine, "stomach_irritation", False))

    rec = Recommendation()

    if sleep in (SleepInducing.HIGH, SleepInducing.MEDIUM):
        _sedation(rec, routine, sleep)
    elif alert in (AlertnessEffect.HIGH, AlertnessEffect.MEDIUM):
        _stimulant(rec, routine, alert)
    elif stomach_irritation and meal_timing == MealTiming.AFTER_MEAL:
        _gastric(rec, routine)
    elif meal_timing == MealTiming.BEFORE_MEAL:
        _before_meal(rec, routine, frequency)
    elif meal_timing == MealTiming.AFTER_MEAL:
        _after_meal(rec, routine, frequency)
    elif meal_timing == MealTiming.WITH_MEAL:
        _with_meal(rec, routine)
    else:
        _anytime(rec, routine, frequency)

    if stomach_irritation:
        rec.special_warnings.append(
            "Taking it on an empty stomach may cause heartburn or stomach "
            "discomfort; take it after a meal."
        )
    rec.special_warnings.extend(_class_warnings(getattr(medicine, "class_name", None)))

    rec.characteristics = _characteristics(sleep, alert, stomach_irritation)
    rec.life_pattern_consideration = _life_pattern_consideration(
        life_pattern, sleep, alert, meal_timing
    )
    rec.time_slot = _slot_for(rec.recommended_times[0])

    logger.debug(
        "Recommended %s for medicine=%s (sleep=%s alert=%s meal=%s freq=%d)",
        rec.recommended_times, getattr(medicine, "name", None),
        sleep.value, alert.value, meal_timing.value, frequency,
    )
    return rec

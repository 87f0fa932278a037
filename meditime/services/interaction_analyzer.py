"""
Drug interaction and duplicate-ingredient reports.

Two entry points over a snapshot of the interaction table:

- ``for_medicine``: everything known about one medicine, flagged against the
  user's current regimen.
- ``for_medicine_set``: conflicts inside a regimen, plus active ingredients
  that appear in more than one of its medicines.

Interactions are always listed SEVERE, MODERATE, MILD; ties keep query order.
Nothing here writes to the database.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List

from meditime.models.enums import SeverityLevel

logger = logging.getLogger(__name__)


@dataclass
class DuplicateIngredient:
    ingredient: str
    medicines: List[Dict[str, Any]]

    def to_dict(self):
        return {"ingredient": self.ingredient, "medicines": self.medicines}


@dataclass
class InteractionReport:
    interactions: List[Dict[str, Any]] = field(default_factory=list)
    user_medicine_interactions: List[Dict[str, Any]] = field(default_factory=list)
    duplicate_ingredients: List[DuplicateIngredient] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self):
        return {
            "interactions": self.interactions,
            "user_medicine_interactions": self.user_medicine_interactions,
            "duplicate_ingredients": [d.to_dict() for d in self.duplicate_ingredients],
            "summary": self.summary,
        }


def split_ingredients(ingredients):
    """Comma separated ingredient text -> unique lower-cased tokens, in order."""
    tokens = []
    for token in (ingredients or "").split(","):
        token = token.strip().lower()
        if token and token not in tokens:
            tokens.append(token)
    return tokens


def sort_by_severity(items, key=lambda item: item.severity_level):
    # sorted() is stable, so equal severities keep their query order
    return sorted(items, key=lambda item: key(item).rank)


def severity_counts(severities):
    severities = list(severities)
    return {
        "severe_count": severities.count(SeverityLevel.SEVERE),
        "moderate_count": severities.count(SeverityLevel.MODERATE),
        "mild_count": severities.count(SeverityLevel.MILD),
    }


def format_interaction(interaction, medicine_id=None, candidate_ids=()):
    data = {
        "id": interaction.id,
        "medicine_a": interaction.medicine_a.summary() if interaction.medicine_a else None,
        "medicine_b": interaction.medicine_b.summary() if interaction.medicine_b else None,
        "severity_level": interaction.severity_level.value,
        "severity_label": interaction.severity_level.label,
        "interaction_type": interaction.interaction_type.value,
        "interaction_type_label": interaction.interaction_type.label,
        "description": interaction.description,
        "recommendation": interaction.recommendation,
    }
    if medicine_id is not None:
        other = interaction.other_side(medicine_id)
        data["other_medicine"] = other.summary() if other else None
        data["in_current_regimen"] = other is not None and other.id in candidate_ids
    return data


def find_duplicate_ingredients(medicines):
    """Group medicines by shared ingredient token; keep groups of 2 or more."""
    groups = OrderedDict()
    for medicine in medicines:
        for token in split_ingredients(medicine.ingredients):
            groups.setdefault(token, []).append({"id": medicine.id, "name": medicine.name})
    return [
        DuplicateIngredient(ingredient=token, medicines=members)
        for token, members in groups.items()
        if len(members) > 1
    ]


def shared_ingredients(new_medicine, existing_medicines):
    """Ingredients of ``new_medicine`` already present in the regimen."""
    new_tokens = split_ingredients(new_medicine.ingredients)
    shared = []
    for existing in existing_medicines:
        existing_tokens = split_ingredients(existing.ingredients)
        for token in new_tokens:
            if token in existing_tokens:
                shared.append({
                    "ingredient": token,
                    "existing_medicine": {"id": existing.id, "name": existing.name},
                })
    return shared


class InteractionAnalyzer:
    def __init__(self, store):
        self.store = store

    def for_medicine(self, medicine_id, candidate_medicine_ids=()):
        """All known interactions of one medicine, flagged against a regimen."""
        candidates = set(candidate_medicine_ids)
        rows = sort_by_severity(self.store.interactions_involving(medicine_id))
        interactions = [format_interaction(r, medicine_id, candidates) for r in rows]
        in_regimen = [i for i in interactions if i["in_current_regimen"]]

        summary = {"total_interactions": len(interactions)}
        summary.update(severity_counts(r.severity_level for r in rows))
        summary["has_user_medicine_conflict"] = bool(in_regimen)

        logger.debug(
            "medicine=%s interactions=%d in_regimen=%d",
            medicine_id, len(interactions), len(in_regimen),
        )
        return InteractionReport(
            interactions=interactions,
            user_medicine_interactions=in_regimen,
            summary=summary,
        )

    def for_medicine_set(self, medicines):
        """
        Conflicts inside a set of medicines plus duplicated ingredients.

        ``medicines`` are Medicine rows (the user's active regimen). With
        fewer than two there is nothing to compare and no query is issued.
        """
        medicines = list(medicines)
        if len(medicines) < 2:
            return InteractionReport(summary=self._set_summary(len(medicines), [], []))

        ids = {m.id for m in medicines}
        rows = sort_by_severity(self.store.interactions_within(ids))
        duplicates = find_duplicate_ingredients(medicines)

        return InteractionReport(
            interactions=[format_interaction(r) for r in rows],
            duplicate_ingredients=duplicates,
            summary=self._set_summary(len(medicines), rows, duplicates),
        )

    @staticmethod
    def _set_summary(total, rows, duplicates):
        summary = {"total_medicines": total, "interaction_count": len(rows)}
        summary.update(severity_counts(r.severity_level for r in rows))
        summary["has_duplicate_ingredients"] = bool(duplicates)
        return summary

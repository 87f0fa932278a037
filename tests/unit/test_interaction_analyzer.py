"""
Unit tests for interaction and duplicate-ingredient reports.

The analyzer only talks to its store through two query methods, so a small
in-memory store stands in for the database here.
"""

from types import SimpleNamespace

from meditime.models.enums import InteractionType, SeverityLevel
from meditime.services.interaction_analyzer import (
    InteractionAnalyzer,
    find_duplicate_ingredients,
    shared_ingredients,
    sort_by_severity,
    split_ingredients,
)


def make_medicine(medicine_id, name, ingredients=""):
    med = SimpleNamespace(id=medicine_id, name=name, generic_name=None, ingredients=ingredients)
    med.summary = lambda: {"id": med.id, "name": med.name, "generic_name": med.generic_name}
    return med


def make_interaction(interaction_id, medicine_a, medicine_b, severity):
    row = SimpleNamespace(
        id=interaction_id,
        medicine_a_id=medicine_a.id,
        medicine_b_id=medicine_b.id,
        medicine_a=medicine_a,
        medicine_b=medicine_b,
        severity_level=severity,
        interaction_type=InteractionType.EFFECT_INCREASE,
        description="desc",
        recommendation=None,
    )
    row.other_side = lambda mid: medicine_b if mid == medicine_a.id else medicine_a
    return row


class FakeStore:
    def __init__(self, interactions=()):
        self.interactions = list(interactions)
        self.calls = []

    def interactions_involving(self, medicine_id):
        self.calls.append(("involving", medicine_id))
        return [
            i for i in self.interactions
            if medicine_id in (i.medicine_a_id, i.medicine_b_id)
        ]

    def interactions_within(self, medicine_ids):
        self.calls.append(("within", set(medicine_ids)))
        ids = set(medicine_ids)
        return [
            i for i in self.interactions
            if i.medicine_a_id in ids and i.medicine_b_id in ids
        ]


class TestIngredientHelpers:
    def test_split_normalizes_and_deduplicates(self):
        assert split_ingredients(" A, b ,, a , C ") == ["a", "b", "c"]

    def test_split_empty(self):
        assert split_ingredients(None) == []
        assert split_ingredients("") == []

    def test_duplicates_across_medicines(self):
        m1 = make_medicine(1, "M1", "A, B")
        m2 = make_medicine(2, "M2", "b , c")

        duplicates = find_duplicate_ingredients([m1, m2])

        assert len(duplicates) == 1
        assert duplicates[0].ingredient == "b"
        assert [m["id"] for m in duplicates[0].medicines] == [1, 2]

    def test_repeated_token_in_one_medicine_is_not_a_duplicate(self):
        m1 = make_medicine(1, "M1", "a, a")
        m2 = make_medicine(2, "M2", "z")

        assert find_duplicate_ingredients([m1, m2]) == []

    def test_shared_ingredients_against_regimen(self):
        new = make_medicine(3, "New", "acetaminophen, caffeine")
        existing = [make_medicine(1, "Cold pill", "Acetaminophen"), make_medicine(2, "Other", "zinc")]

        shared = shared_ingredients(new, existing)

        assert shared == [{
            "ingredient": "acetaminophen",
            "existing_medicine": {"id": 1, "name": "Cold pill"},
        }]


class TestSeverityOrdering:
    def test_sorted_severe_first_and_stable(self):
        a, b = make_medicine(1, "A"), make_medicine(2, "B")
        rows = [
            make_interaction(1, a, b, SeverityLevel.MILD),
            make_interaction(2, a, b, SeverityLevel.SEVERE),
            make_interaction(3, a, b, SeverityLevel.MODERATE),
            make_interaction(4, a, b, SeverityLevel.SEVERE),
        ]

        assert [r.id for r in sort_by_severity(rows)] == [2, 4, 3, 1]


class TestForMedicine:
    def test_flags_interactions_with_current_regimen(self):
        target, in_regimen, elsewhere = (
            make_medicine(1, "Target"), make_medicine(2, "Mine"), make_medicine(3, "Other"),
        )
        store = FakeStore([
            make_interaction(10, target, elsewhere, SeverityLevel.MILD),
            make_interaction(11, in_regimen, target, SeverityLevel.SEVERE),
        ])

        report = InteractionAnalyzer(store).for_medicine(1, candidate_medicine_ids=[2])

        assert [i["id"] for i in report.interactions] == [11, 10]
        assert report.interactions[0]["other_medicine"]["id"] == 2
        assert [i["id"] for i in report.user_medicine_interactions] == [11]
        assert report.summary == {
            "total_interactions": 2,
            "severe_count": 1,
            "moderate_count": 0,
            "mild_count": 1,
            "has_user_medicine_conflict": True,
        }

    def test_no_regimen_means_no_conflict(self):
        a, b = make_medicine(1, "A"), make_medicine(2, "B")
        store = FakeStore([make_interaction(1, a, b, SeverityLevel.MODERATE)])

        report = InteractionAnalyzer(store).for_medicine(1)

        assert report.user_medicine_interactions == []
        assert report.summary["has_user_medicine_conflict"] is False

    def test_medicine_without_interactions(self):
        report = InteractionAnalyzer(FakeStore()).for_medicine(99)

        assert report.interactions == []
        assert report.summary["total_interactions"] == 0


class TestForMedicineSet:
    def test_fewer_than_two_medicines_skip_the_query(self):
        store = FakeStore()
        analyzer = InteractionAnalyzer(store)

        empty = analyzer.for_medicine_set([])
        single = analyzer.for_medicine_set([make_medicine(1, "Only", "a")])

        assert store.calls == []
        assert empty.summary["total_medicines"] == 0
        assert single.summary["total_medicines"] == 1
        assert single.summary["interaction_count"] == 0
        assert single.duplicate_ingredients == []

    def test_reports_conflicts_and_duplicates(self):
        m1 = make_medicine(1, "Cold A", "acetaminophen, chlorpheniramine")
        m2 = make_medicine(2, "Cold B", "Acetaminophen")
        m3 = make_medicine(3, "Unrelated", "zinc")
        outside = make_medicine(4, "Not mine")
        store = FakeStore([
            make_interaction(1, m1, m3, SeverityLevel.MILD),
            make_interaction(2, m2, m1, SeverityLevel.SEVERE),
            make_interaction(3, m1, outside, SeverityLevel.SEVERE),
        ])

        report = InteractionAnalyzer(store).for_medicine_set([m1, m2, m3])

        assert store.calls == [("within", {1, 2, 3})]
        assert [i["id"] for i in report.interactions] == [2, 1]
        assert "other_medicine" not in report.interactions[0]
        assert [d.ingredient for d in report.duplicate_ingredients] == ["acetaminophen"]
        assert report.summary == {
            "total_medicines": 3,
            "interaction_count": 2,
            "severe_count": 1,
            "moderate_count": 0,
            "mild_count": 1,
            "has_duplicate_ingredients": True,
        }

    def test_report_serializes(self):
        m1, m2 = make_medicine(1, "A", "x"), make_medicine(2, "B", "x")

        data = InteractionAnalyzer(FakeStore()).for_medicine_set([m1, m2]).to_dict()

        assert data["duplicate_ingredients"] == [{
            "ingredient": "x",
            "medicines": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
        }]
        assert data["interactions"] == []

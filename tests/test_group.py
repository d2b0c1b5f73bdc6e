import unittest

from engine.categories import rank, worst_of
from engine.group import full_access_map, merge_group, passport_access_map
from models.schemas import AccessCategory, AccessSource, EnhancedAccessResult, Traveler
from tests.helpers import benefit_resolver, passport_resolver


def traveler(id, passports, holdings=()):
    return Traveler(id=id, name=f"Traveler {id}", passports=list(passports), visa_holdings=list(holdings))


class MergeGroupTests(unittest.TestCase):
    def setUp(self):
        self.passports = passport_resolver()
        self.benefits = benefit_resolver()

    def merge(self, *travelers):
        return merge_group(list(travelers), self.passports, self.benefits)

    def full_access(self, t):
        passport_map = passport_access_map(self.passports, t.passports)
        benefits = self.benefits.resolve_benefits(t.visa_holdings, passport_map)
        return full_access_map(passport_map, benefits)

    def test_no_active_travelers(self):
        outcome = self.merge(traveler("a", []), traveler("b", [], ["us-visa"]))
        self.assertEqual(outcome.results, [])
        self.assertEqual(outcome.visa_benefit_counts, {})

    def test_single_traveler_passport_access(self):
        outcome = self.merge(traveler("a", ["DE"]))
        thailand = next(r for r in outcome.results if r.destination == "TH")

        self.assertEqual(thailand.category, AccessCategory.VISA_FREE)
        self.assertEqual(thailand.days, 30)
        self.assertEqual(thailand.source, AccessSource.PASSPORT)
        self.assertEqual(thailand.per_person, {})
        self.assertEqual(outcome.visa_benefit_counts, {"a": {}})

    def test_single_traveler_benefit_replaces_passport_entry(self):
        outcome = self.merge(traveler("a", ["US"], ["us-visa"]))
        turkey = [r for r in outcome.results if r.destination == "TR"]

        self.assertEqual(len(turkey), 1)
        self.assertEqual(turkey[0].category, AccessCategory.E_VISA)
        self.assertEqual(turkey[0].days, 30)
        self.assertEqual(turkey[0].source, AccessSource.VISA_BENEFIT)
        self.assertEqual(turkey[0].visa_holding_id, "us-visa")
        self.assertEqual(outcome.visa_benefit_counts, {"a": {"us-visa": 1}})

    def test_inactive_travelers_are_ignored(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", []))
        self.assertEqual(len(outcome.results), len(self.passports.resolve("DE")))
        self.assertEqual(list(outcome.visa_benefit_counts), ["a"])

    def test_group_takes_worst_category(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", ["IN"]))
        japan = next(r for r in outcome.results if r.destination == "JP")

        self.assertEqual(japan.category, AccessCategory.VISA_REQUIRED)
        self.assertIsNone(japan.days)
        self.assertEqual(japan.per_person["a"].category, AccessCategory.VISA_FREE)
        self.assertEqual(japan.per_person["a"].days, 90)
        self.assertEqual(japan.per_person["b"].category, AccessCategory.VISA_REQUIRED)

    def test_destination_missing_for_one_traveler_is_excluded(self):
        outcome = self.merge(traveler("a", ["US"]), traveler("b", ["DE"]))
        self.assertNotIn("XX", [r.destination for r in outcome.results])

    def test_results_are_exactly_the_intersection(self):
        group = [traveler("a", ["US"], ["us-visa"]), traveler("b", ["DE"]), traveler("c", ["IN"], ["schengen-visa"])]
        outcome = self.merge(*group)

        keys = [set(self.full_access(t)) for t in group]
        self.assertEqual({r.destination for r in outcome.results}, set.intersection(*keys))

    def test_group_category_and_days_invariants(self):
        group = [traveler("a", ["US"], ["us-visa"]), traveler("b", ["DE"]), traveler("c", ["IN"], ["schengen-visa"])]
        outcome = self.merge(*group)
        self.assertTrue(outcome.results)

        for r in outcome.results:
            members = list(r.per_person.values())
            self.assertEqual(r.category, worst_of(*(m.category for m in members)))
            if r.days is not None:
                self.assertEqual(r.category, AccessCategory.VISA_FREE)

    def test_group_days_is_minimum_when_everyone_is_visa_free(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", ["IN"], ["schengen-visa"]))
        georgia = next(r for r in outcome.results if r.destination == "GE")

        self.assertEqual(georgia.category, AccessCategory.VISA_FREE)
        self.assertEqual(georgia.days, 90)

    def test_worse_group_category_drops_days(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", ["US"], ["us-visa"]))
        turkey = next(r for r in outcome.results if r.destination == "TR")

        self.assertEqual(turkey.category, AccessCategory.E_VISA)
        self.assertIsNone(turkey.days)

    def test_attribution_comes_from_last_benefit_user(self):
        outcome = self.merge(
            traveler("a", ["IN"], ["schengen-visa"]),
            traveler("b", ["IN"], ["us-visa"]),
        )
        georgia = next(r for r in outcome.results if r.destination == "GE")
        self.assertEqual(georgia.source, AccessSource.VISA_BENEFIT)
        self.assertEqual(georgia.visa_holding_id, "us-visa")

        outcome = self.merge(traveler("a", ["IN"], ["schengen-visa"]), traveler("b", ["DE"]))
        turkey = next(r for r in outcome.results if r.destination == "TR")
        self.assertEqual(turkey.source, AccessSource.VISA_BENEFIT)
        self.assertEqual(turkey.visa_holding_id, "schengen-visa")
        self.assertEqual(turkey.conditions, ["Schengen multi-entry"])
        self.assertEqual(turkey.days, 90)

    def test_passport_only_group_is_passport_sourced(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", ["US"]))
        self.assertTrue(all(r.source is AccessSource.PASSPORT for r in outcome.results))
        self.assertTrue(all(r.visa_holding_id is None for r in outcome.results))

    def test_traveler_without_data_empties_group(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", ["QQ"]))
        self.assertEqual(outcome.results, [])
        self.assertEqual(outcome.visa_benefit_counts, {"a": {}, "b": {}})

    def test_benefit_counts_keyed_by_traveler(self):
        outcome = self.merge(traveler("a", ["DE"]), traveler("b", ["IN"], ["schengen-visa", "bogus"]))
        self.assertEqual(outcome.visa_benefit_counts, {"a": {}, "b": {"schengen-visa": 3, "bogus": 0}})


class FullAccessMapTests(unittest.TestCase):
    def test_equal_rank_benefit_keeps_passport_entry(self):
        passport = {"GE": EnhancedAccessResult(destination="GE", category=AccessCategory.VISA_FREE, days=30)}
        benefit = EnhancedAccessResult(
            destination="GE", category=AccessCategory.VISA_FREE, days=90, source=AccessSource.VISA_BENEFIT
        )
        merged = full_access_map(passport, [benefit])
        self.assertEqual(merged["GE"].source, AccessSource.PASSPORT)

    def test_better_benefit_wins_and_new_destinations_append(self):
        passport = {"TR": EnhancedAccessResult(destination="TR", category=AccessCategory.VISA_REQUIRED)}
        benefits = [
            EnhancedAccessResult(destination="TR", category=AccessCategory.E_VISA, source=AccessSource.VISA_BENEFIT),
            EnhancedAccessResult(destination="MX", category=AccessCategory.VISA_FREE, source=AccessSource.VISA_BENEFIT),
        ]
        merged = full_access_map(passport, benefits)
        self.assertEqual(list(merged), ["TR", "MX"])
        self.assertLess(rank(merged["TR"].category), rank(AccessCategory.VISA_REQUIRED))


if __name__ == "__main__":
    unittest.main()

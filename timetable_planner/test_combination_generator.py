import unittest
from itertools import combinations as pairs
from unittest.mock import MagicMock

from .combination_generator import CombinationGenerator, generate_combinations, has_time_clash
from .testing import make_class, make_index, make_module, make_session


class HasTimeClashTests(unittest.TestCase):

    def assertClash(self, a, b, expected):
        self.assertEqual(has_time_clash(a, b), expected)
        self.assertEqual(has_time_clash(b, a), expected)

    def test_different_days_never_clash(self):
        self.assertClash(make_class(day="Mon"), make_class(day="Tue"), False)

    def test_day_tokens_are_normalized(self):
        self.assertClash(make_class(day="Monday"), make_class(day="MON"), True)

    def test_back_to_back_sessions_do_not_clash(self):
        self.assertClash(make_class(start="0900", end="1000"), make_class(start="1000", end="1100"), False)

    def test_overlapping_times_clash(self):
        self.assertClash(make_class(start="0900", end="1000"), make_class(start="0930", end="1030"), True)

    def test_colon_and_short_times(self):
        self.assertClash(make_class(start="9:00", end="10:00"), make_class(start="0930", end="1030"), True)
        self.assertClash(make_class(start="8:00", end="9:00"), make_class(start="0900", end="1000"), False)

    def test_disjoint_weeks_do_not_clash(self):
        self.assertClash(make_class(weeks=[1, 3, 5]), make_class(weeks=[2, 4, 6]), False)

    def test_shared_week_clashes(self):
        self.assertClash(make_class(weeks=[1, 3, 5]), make_class(weeks=[5, 6]), True)

    def test_unknown_weeks_are_assumed_to_clash(self):
        self.assertClash(make_class(weeks=[]), make_class(weeks=[2]), True)

    def test_duck_typed_sessions(self):
        a = MagicMock(day="Wed", start_time="1400", end_time="1600", weeks=[1])
        b = make_session(day="Wednesday", start="1500", end="1700", weeks=[1])
        self.assertClash(a, b, True)


class CombinationGeneratorTests(unittest.TestCase):

    def setUp(self):
        self.cs1010 = make_module(
            "CS1010",
            make_index("A", make_session(day="Mon", start="0900", end="1000")),
            make_index("B", make_session(day="Mon", start="1100", end="1200")),
        )
        self.cs2040 = make_module(
            "CS2040",
            make_index("C", make_session(type="Tutorial", day="Mon", start="0900", end="1000")),
        )

    def test_empty_module_list(self):
        outcome = generate_combinations([])
        self.assertEqual(outcome.combinations, ())
        self.assertFalse(outcome.truncated)

    def test_clashing_index_is_pruned(self):
        outcome = generate_combinations([self.cs1010, self.cs2040])

        self.assertEqual(len(outcome.combinations), 1)
        combination = outcome.combinations[0]
        self.assertEqual(combination.index_for("CS1010"), "B")
        self.assertEqual(combination.index_for("CS2040"), "C")
        self.assertEqual(len(combination.classes), 2)
        self.assertFalse(outcome.truncated)

    def test_module_order_is_preserved(self):
        outcome = generate_combinations([self.cs2040, self.cs1010])
        self.assertEqual([m.code for m in outcome.combinations[0].modules], ["CS2040", "CS1010"])

    def test_every_combination_is_clash_free(self):
        modules = [
            make_module(
                f"MOD{m}",
                *[
                    make_index(f"{m}{i}", make_session(day=day, start=f"{8 + i:02d}00", end=f"{9 + i:02d}00"))
                    for i, day in enumerate(["Mon", "Tue", "Mon", "Wed"])
                ],
            )
            for m in range(3)
        ]
        outcome = generate_combinations(modules)

        self.assertGreater(len(outcome.combinations), 0)
        for combination in outcome.combinations:
            self.assertEqual(len(combination.modules), 3)
            for a, b in pairs(combination.classes, 2):
                if a.module_code != b.module_code:
                    self.assertFalse(has_time_clash(a, b))

    def test_no_combination_when_every_option_clashes(self):
        clashing = make_module("CS2030", make_index("D", make_session(day="Mon", start="0800", end="1300")))
        outcome = generate_combinations([self.cs1010, clashing])
        self.assertEqual(outcome.combinations, ())
        self.assertFalse(outcome.truncated)

    def test_combination_cap_truncates(self):
        modules = [
            make_module(code, *[make_index(f"{code}-{day}", make_session(day=day)) for day in ("Mon", "Tue", "Wed")])
            for code in ("X", "Y")
        ]
        self.assertEqual(len(generate_combinations(modules).combinations), 6)

        outcome = CombinationGenerator(modules, max_combinations=2).generate_combinations()
        self.assertEqual(len(outcome.combinations), 2)
        self.assertTrue(outcome.truncated)

    def test_recursive_call_cap_truncates(self):
        modules = [
            make_module(code, *[make_index(f"{code}-{day}", make_session(day=day)) for day in ("Mon", "Tue")])
            for code in ("X", "Y", "Z")
        ]
        outcome = CombinationGenerator(modules, max_recursive_calls=4).generate_combinations()

        self.assertTrue(outcome.truncated)
        self.assertEqual(outcome.recursive_calls, 4)
        self.assertEqual(outcome.combinations, ())

    def test_exact_result_cap_is_not_truncation(self):
        outcome = CombinationGenerator([self.cs1010, self.cs2040], max_combinations=1).generate_combinations()
        self.assertEqual(len(outcome.combinations), 1)
        self.assertFalse(outcome.truncated)

    def test_class_attribute_caps_can_be_overridden(self):
        class SmallGenerator(CombinationGenerator):
            MAX_COMBINATIONS = 1

        modules = [make_module("X", make_index("1", make_session(day="Mon")), make_index("2", make_session(day="Tue")))]
        outcome = SmallGenerator(modules).generate_combinations()
        self.assertEqual(len(outcome.combinations), 1)
        self.assertTrue(outcome.truncated)


if __name__ == '__main__':
    unittest.main()

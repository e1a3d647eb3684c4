import unittest
from unittest.mock import patch

from .combination_formatter import CombinationFormatter
from .models import DayStartEnd, DaysOfWeek, GenerationFilters, VenuePreference
from .result_validator import combination_warnings, validate_combination, validate_generated_results
from .testing import make_class, make_combination


class ValidateCombinationTests(unittest.TestCase):

    def test_valid_combination(self):
        combination = make_combination(
            make_class("CS1010", day="Mon", start="0900", end="1000"),
            make_class("CS2040", day="Mon", start="1000", end="1100"),
        )
        self.assertEqual(validate_combination(combination, GenerationFilters()), [])

    def test_clash_between_modules(self):
        combination = make_combination(
            make_class("CS1010", day="Mon", start="0900", end="1000"),
            make_class("CS2040", day="Mon", start="0930", end="1030"),
        )
        errors = validate_combination(combination, GenerationFilters(), label="Timetable")
        self.assertEqual(len(errors), 1)
        self.assertTrue(errors[0].startswith("Timetable: Time clash detected"))

    def test_overlap_within_one_index_is_allowed(self):
        combination = make_combination(
            make_class("CS1010", type="Lecture", day="Mon", start="0900", end="1000"),
            make_class("CS1010", type="Tutorial", day="Mon", start="0900", end="1000"),
        )
        self.assertEqual(validate_combination(combination, GenerationFilters()), [])

    def test_filter_violations(self):
        filters = GenerationFilters(
            days_of_week=DaysOfWeek(monday=False),
            venue_preference=VenuePreference(include_online=False),
            day_start_end=DayStartEnd(start_after="1000", end_before="1200", start_enabled=True, end_enabled=True),
        )
        combination = make_combination(
            make_class("CS1010", day="Mon", start="0900", end="1300", venue="Zoom"),
        )
        errors = validate_combination(combination, filters)

        self.assertEqual(len(errors), 4)
        self.assertIn("violates day filter (MON not selected)", errors[0])
        self.assertIn("online classes are not allowed", errors[1])
        self.assertIn("before allowed start time", errors[2])
        self.assertIn("after allowed end time", errors[3])


class ValidateGeneratedResultsTests(unittest.TestCase):

    def test_empty_results_warn(self):
        report = validate_generated_results([], GenerationFilters(), ["CS1010"])
        self.assertTrue(report.valid)
        self.assertEqual(len(report.warnings), 1)

    def test_missing_module_warns(self):
        combination = make_combination(make_class("CS1010"))
        report = validate_generated_results([combination], GenerationFilters(), ["CS1010", "CS2040"])
        self.assertTrue(report.valid)
        self.assertEqual(report.warnings, ["Module CS2040 does not appear in any generated combination"])

    @patch("timetable_planner.result_validator.logger")
    def test_errors_are_logged(self, mock_logger):
        combination = make_combination(
            make_class("CS1010", day="Mon", start="0900", end="1000"),
            make_class("CS2040", day="Mon", start="0900", end="1000"),
        )
        report = validate_generated_results([combination], GenerationFilters(), ["CS1010", "CS2040"])

        self.assertFalse(report.valid)
        self.assertTrue(report.errors[0].startswith("Combination[0]"))
        mock_logger.error.assert_called_once()

    def test_combination_warnings(self):
        combination = make_combination(make_class("CS1010", index_number="10001"))
        mismatched = make_class("CS1010", index_number="10002", day="Tue")
        combination = combination.__class__(
            modules=combination.modules, classes=combination.classes + (mismatched,)
        )
        warnings = combination_warnings(combination)
        self.assertEqual(len(warnings), 1)
        self.assertIn("index 10001 is selected", warnings[0])


class CombinationFormatterTests(unittest.TestCase):

    def setUp(self):
        self.formatter = CombinationFormatter()
        self.combination = make_combination(
            make_class("CS1010", day="Wed", start="1000", end="1200"),
            make_class("CS2040", day="Mon", start="0900", end="1000"),
            make_class("CS2040", day="Mon", start="1300", end="1400", type="Tutorial"),
        )

    def test_compute_stats(self):
        stats = self.formatter.compute_stats(self.combination)
        self.assertEqual(stats, {
            "total_days": 2,
            "total_hours": 4.0,
            "average_gap_duration": 180,
            "earliest_start": "0900",
            "latest_end": "1400",
        })

    def test_compute_stats_empty(self):
        stats = self.formatter.compute_stats(make_combination())
        self.assertEqual(stats["earliest_start"], "0000")
        self.assertEqual(stats["latest_end"], "0000")
        self.assertEqual(stats["average_gap_duration"], 0)

    def test_days_are_ordered(self):
        days = self.formatter.format_classes_by_day(self.combination.classes)
        self.assertEqual(list(days), ["MON", "WED"])
        self.assertEqual(len(days["MON"]), 2)

    def test_format_ranked_combinations(self):
        ranked = [(150, self.combination), (120, self.combination)]
        formatted = self.formatter.format_ranked_combinations(ranked, top_n=1)

        self.assertEqual(len(formatted), 1)
        self.assertEqual(formatted[0]["name"], "Timetable 1")
        self.assertEqual(formatted[0]["score"], 150)
        self.assertEqual([m["code"] for m in formatted[0]["modules"]], ["CS1010", "CS2040"])
        self.assertEqual(formatted[0]["classes"][0]["weeks"], list(range(1, 14)))
        self.assertIn("id", formatted[0])


if __name__ == '__main__':
    unittest.main()

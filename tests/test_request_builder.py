"""Tests for optimization request building and manual spending parsing."""
import unittest

from financeflow.llm.request_builder import build_request, parse_manual_spending
from financeflow.utils.exceptions import (
    DataIntegrityError,
    EmptyGoals,
    EmptySpending,
    ValidationError,
)


class TestBuildRequest(unittest.TestCase):

    def test_valid_request(self):
        request = build_request({"Groceries": 300, "Rent": 1200.5}, "  Save for a house  ")

        self.assertEqual(request.spending, {"Groceries": 300, "Rent": 1200.5})
        self.assertEqual(request.goals, "Save for a house")

    def test_empty_spending(self):
        for goals in ["Save more", "", "   "]:
            with self.subTest(goals=goals):
                with self.assertRaises(EmptySpending):
                    build_request({}, goals)

    def test_blank_goals(self):
        for goals in ["", "   ", "\n\t", None]:
            with self.subTest(goals=goals):
                with self.assertRaises(EmptyGoals):
                    build_request({"Groceries": 300}, goals)

    def test_blank_goals_reported_before_bad_entries(self):
        with self.assertRaises(EmptyGoals):
            build_request({"Groceries": -1}, " ")

    def test_error_kind(self):
        with self.assertRaises(EmptyGoals) as ctx:
            build_request({"Groceries": 300}, "")
        self.assertEqual(ctx.exception.kind, "EmptyGoals")

    def test_invalid_entries(self):
        for spending in [{"Groceries": -5}, {"Groceries": "300"}, {"": 10}, {"Rent": float("inf")}, {"Rent": True}]:
            with self.subTest(spending=spending):
                with self.assertRaises(DataIntegrityError):
                    build_request(spending, "Save more")

    def test_amount_too_large_for_float(self):
        with self.assertRaises(DataIntegrityError):
            build_request({"Rent": 10 ** 400}, "Save more")

    def test_request_does_not_alias_input(self):
        spending = {"Groceries": 300}
        request = build_request(spending, "Save more")
        spending["Rent"] = 1000

        self.assertEqual(request.spending, {"Groceries": 300})


class TestParseManualSpending(unittest.TestCase):

    def test_valid_object(self):
        self.assertEqual(
            parse_manual_spending('{"Groceries": 200, "Rent": 1000.5}'),
            {"Groceries": 200, "Rent": 1000.5}
        )

    def test_array_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_manual_spending('["Groceries", 200]')
        self.assertIn("Invalid JSON format", str(ctx.exception))

    def test_non_numeric_value_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            parse_manual_spending('{"Groceries": "200"}')
        self.assertIn("Must be { 'Category': amount }", str(ctx.exception))

    def test_malformed_json_rejected(self):
        with self.assertRaises(ValidationError):
            parse_manual_spending('{"Groceries": 200')


if __name__ == "__main__":
    unittest.main()

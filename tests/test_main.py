"""Tests for the command-line entry point."""
import io
import os
import unittest
import tempfile
import shutil
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from financeflow import main as cli
from financeflow.config import AppSettings, Config, ConfigManager
from financeflow.llm.optimizer import BudgetOptimizer
from financeflow.storage.local_store import LocalStore


class StubInvoker:
    def __init__(self, text):
        self.text = text
        self.prompts = []

    def invoke(self, prompt, output_schema=None):
        self.prompts.append(prompt)
        return self.text


@mock.patch.dict(os.environ, {"GEMINI_API_KEY": ""})
class TestCli(unittest.TestCase):

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.config_manager = ConfigManager()
        self.config_manager.config_dir = self.test_dir
        self.config_manager.config_file = self.test_dir / "config.json"
        self.settings = AppSettings.load()
        self.parser = cli._build_parser()

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _run(self, *argv) -> tuple:
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli._run(self.parser.parse_args(list(argv)), self.config_manager, self.settings)
        return code, out.getvalue()

    def test_add_expense_and_dashboard(self):
        self._run("add-expense", "--amount", "50", "--category", "food", "--date", "2026-10-01")
        self._run("add-income", "--amount", "1000", "--source", "Salary", "--date", "2026-10-01")

        code, output = self._run("dashboard")

        self.assertEqual(code, 0)
        self.assertIn("Total Income:   $1,000.00", output)
        self.assertIn("Net Balance:    $950.00", output)
        self.assertEqual(len(LocalStore(self.test_dir).list_expenses()), 1)

    def test_optimize_with_inline_spending(self):
        self.config_manager.save_config(Config(gemini_api_key="test_key"))
        optimizer = BudgetOptimizer(StubInvoker('{"Groceries": 250, "Savings": 100}'))

        with mock.patch.object(cli, "_build_optimizer", return_value=optimizer):
            code, output = self._run("optimize", "--goals", "Save more", "--spending", '{"Groceries": 300}')

        self.assertEqual(code, 0)
        self.assertIn("Groceries", output)
        self.assertIn("-$50.00", output)
        self.assertIn("Savings", output)

    def test_optimize_from_input_file(self):
        self.config_manager.save_config(Config(gemini_api_key="test_key"))
        request_file = self.test_dir / "request.json"
        request_file.write_text(
            '{"pastSpending": {"Rent": 1200, "Dining Out": 150}, "financialGoals": "Build an emergency fund"}',
            encoding="utf-8"
        )
        invoker = StubInvoker('{"Rent": 1200, "Dining Out": 80, "Savings": 70}')

        with mock.patch.object(cli, "_build_optimizer", return_value=BudgetOptimizer(invoker)):
            code, output = self._run("optimize", "--input", str(request_file))

        self.assertEqual(code, 0)
        self.assertIn("Rent: $1200", invoker.prompts[0])
        self.assertIn("Financial Goals: Build an emergency fund", invoker.prompts[0])
        self.assertIn("-$70.00", output)
        self.assertIn("Savings", output)

    def test_optimize_from_tracked_expenses(self):
        self.config_manager.save_config(Config(gemini_api_key="test_key"))
        self._run("add-expense", "--amount", "25", "--category", "food", "--date", "2026-10-01")
        self._run("add-expense", "--amount", "15", "--category", "food", "--date", "2026-10-02")
        invoker = StubInvoker('{"Food": 30}')

        with mock.patch.object(cli, "_build_optimizer", return_value=BudgetOptimizer(invoker)):
            code, output = self._run("optimize", "--goals", "Eat out less")

        self.assertEqual(code, 0)
        self.assertIn("Food: $40", invoker.prompts[0])
        self.assertIn("Food", output)
        self.assertIn("-$10.00", output)

    def test_optimize_failure_exit_code(self):
        self.config_manager.save_config(Config(gemini_api_key="test_key"))
        optimizer = BudgetOptimizer(StubInvoker("not json"))

        with mock.patch.object(cli, "_build_optimizer", return_value=optimizer):
            code, _ = self._run("optimize", "--goals", "Save more", "--spending", '{"Groceries": 300}')

        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()

"""Command-line entry point."""
import sys
import argparse
from pathlib import Path

from google import genai
from pydantic import ValidationError as PydanticValidationError

from financeflow.config.manager import Config, ConfigManager
from financeflow.config.settings import AppSettings, get_settings
from financeflow.llm.aggregator import SpendingAggregator
from financeflow.llm.invoker import GeminiModelInvoker
from financeflow.llm.models import OptimizationOutcome, OptimizeBudgetInput
from financeflow.llm.optimizer import BudgetOptimizer
from financeflow.llm.request_builder import parse_manual_spending
from financeflow.reports.comparison import compare_allocation
from financeflow.reports.dashboard import (
    budget_progress,
    budget_status,
    expenses_by_category,
    financial_summary,
    format_currency,
    monthly_spending,
)
from financeflow.storage.local_store import LocalStore
from financeflow.utils.logger import configure_logging, get_logger, set_operation_context
from financeflow.utils.exceptions import FinanceFlowError

logger = get_logger()


def configure_command(args, config_manager: ConfigManager) -> None:
    """Save the user configuration."""
    existing = config_manager.load_config()
    config = Config(
        gemini_api_key=args.api_key or (existing.gemini_api_key if existing else ""),
        model_name=args.model or (existing.model_name if existing else get_settings().llm_model_name),
        log_level=args.log_level or (existing.log_level if existing else "INFO"),
        data_dir=args.data_dir or (existing.data_dir if existing else None)
    )

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        raise FinanceFlowError(f"Invalid configuration: {message}")

    config_manager.save_config(config)
    print(f"✓ Configuration saved to {config_manager.config_file}")


def categories_command(store: LocalStore) -> None:
    print(f"{'ID':<16} {'Name':<20} {'Color':<10}")
    print("-" * 46)
    for category in store.list_categories():
        print(f"{category.id:<16} {category.name:<20} {category.color:<10}")


def list_expenses_command(store: LocalStore, symbol: str) -> None:
    names = {category.id: category.name for category in store.list_categories()}
    expenses = sorted(store.list_expenses(), key=lambda e: e.date, reverse=True)
    if not expenses:
        print("No expenses recorded yet.")
        return

    print(f"{'Date':<12} {'Category':<16} {'Amount':>12}  {'Description':<30} ID")
    print("-" * 110)
    for expense in expenses:
        print(
            f"{expense.date:<12} {names.get(expense.categoryId, 'N/A'):<16} "
            f"{format_currency(expense.amount, symbol):>12}  {expense.description[:30]:<30} {expense.id}"
        )


def list_incomes_command(store: LocalStore, symbol: str) -> None:
    incomes = sorted(store.list_incomes(), key=lambda i: i.date, reverse=True)
    if not incomes:
        print("No incomes recorded yet.")
        return

    print(f"{'Date':<12} {'Source':<16} {'Amount':>12}  ID")
    print("-" * 80)
    for income in incomes:
        print(f"{income.date:<12} {income.source[:16]:<16} {format_currency(income.amount, symbol):>12}  {income.id}")


def list_budgets_command(store: LocalStore, symbol: str) -> None:
    names = {category.id: category.name for category in store.list_categories()}
    budgets = store.list_budgets()
    if not budgets:
        print("No budgets set yet.")
        return

    expenses = store.list_expenses()
    print(f"{'Category':<16} {'Period':<8} {'Budget':>12} {'Spent':>12} {'Used':>7}  ID")
    print("-" * 100)
    for budget in budgets:
        progress = budget_progress(budget, expenses)
        flag = "  OVER" if progress.is_over_budget else ""
        print(
            f"{names.get(budget.categoryId, 'N/A'):<16} {budget.period:<8} "
            f"{format_currency(budget.amount, symbol):>12} {format_currency(progress.total_spent, symbol):>12} "
            f"{progress.progress:>6.0f}%  {budget.id}{flag}"
        )


def dashboard_command(store: LocalStore, symbol: str) -> None:
    expenses = store.list_expenses()
    categories = store.list_categories()
    summary = financial_summary(expenses, store.list_incomes())
    budgets = store.list_budgets()

    print(f"Total Income:   {format_currency(summary.total_income, symbol)}")
    print(f"Total Expenses: {format_currency(summary.total_expenses, symbol)}")
    print(f"Net Balance:    {format_currency(summary.net_balance, symbol)}")
    print(f"Budgets Active: {len(budgets)}")

    print("\nSpending by Category")
    for total in expenses_by_category(expenses, categories):
        print(f"  {total.name:<20} {format_currency(total.value, symbol):>12}")

    if budgets:
        print("\nBudget vs. Actual Spending")
        for status in budget_status(budgets, expenses, categories):
            print(
                f"  {status.name:<20} budgeted {format_currency(status.budgeted, symbol):>12}  "
                f"spent {format_currency(status.spent, symbol):>12}  "
                f"remaining {format_currency(status.remaining, symbol):>12}"
            )


def report_command(store: LocalStore, symbol: str) -> None:
    expenses = store.list_expenses()
    by_category = expenses_by_category(expenses, store.list_categories())
    if not by_category:
        print("No data for reports. Add expenses to see distribution.")
        return

    total = sum(item.value for item in by_category)
    print("Spending Distribution")
    for item in by_category:
        share = item.value / total * 100 if total else 0
        print(f"  {item.name:<20} {format_currency(item.value, symbol):>12}  ({share:.0f}%)")

    print("\nMonthly Spending")
    for month in monthly_spending(expenses):
        print(f"  {month.name:<10} {format_currency(month.value, symbol):>12}")


def _build_optimizer(config: Config, settings: AppSettings) -> BudgetOptimizer:
    """Create the Gemini client once and wire it into the optimizer."""
    client = genai.Client(api_key=config.gemini_api_key)
    invoker = GeminiModelInvoker(
        client,
        model_name=config.model_name or settings.llm_model_name,
        temperature=settings.llm_temperature
    )
    return BudgetOptimizer(invoker)


def _load_spending(args, store: LocalStore) -> dict:
    """Spending from inline JSON when given, otherwise from tracked expenses."""
    if args.spending is not None:
        return parse_manual_spending(args.spending)
    return SpendingAggregator().aggregate(store.list_expenses(), store.list_categories())


def optimize_command(args, config: Config, settings: AppSettings, store: LocalStore) -> int:
    """Request an AI budget suggestion. Returns the process exit code."""
    optimizer = _build_optimizer(config, settings)

    if args.input:
        try:
            payload = OptimizeBudgetInput.model_validate_json(Path(args.input).read_text(encoding="utf-8"))
        except PydanticValidationError as e:
            raise FinanceFlowError(f"Invalid optimization input {args.input}: {e}") from e
        spending, goals = payload.past_spending, args.goals or payload.financial_goals
    else:
        spending, goals = _load_spending(args, store), args.goals

    outcome = optimizer.optimize(spending, goals)
    return _print_outcome(outcome, spending, settings)


def _print_outcome(outcome: OptimizationOutcome, spending: dict, settings: AppSettings) -> int:
    if not outcome.succeeded:
        logger.error(f"Budget optimization failed ({outcome.error.kind}): {outcome.error}")
        return 1

    symbol = settings.currency_symbol
    print("\nSuggested Budget Allocation")
    print(f"{'Category':<24} {'Spent':>12} {'Suggested':>12} {'Change':>12}")
    print("-" * 63)
    for row in compare_allocation(spending, outcome.result, settings.fuzzy_match_threshold):
        spent = format_currency(row.spent, symbol) if row.spent is not None else "-"
        suggested = format_currency(row.suggested, symbol) if row.suggested is not None else "-"
        change = format_currency(row.change, symbol) if row.change is not None else "-"
        print(f"{row.category:<24} {spent:>12} {suggested:>12} {change:>12}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FinanceFlow personal finance tracker")
    commands = parser.add_subparsers(dest="command", required=True)

    configure = commands.add_parser("configure", help="Save API key and preferences")
    configure.add_argument("--api-key", help="Gemini API key")
    configure.add_argument("--model", help="Gemini model name")
    configure.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    configure.add_argument("--data-dir", help="Directory for the local store")

    commands.add_parser("categories", help="List categories")

    add_expense = commands.add_parser("add-expense", help="Record an expense")
    add_expense.add_argument("--amount", type=float, required=True)
    add_expense.add_argument("--category", required=True, help="Category ID")
    add_expense.add_argument("--date", help="YYYY-MM-DD (default: today)")
    add_expense.add_argument("--description", default="")

    update_expense = commands.add_parser("update-expense", help="Edit an expense")
    update_expense.add_argument("id")
    update_expense.add_argument("--amount", type=float)
    update_expense.add_argument("--category")
    update_expense.add_argument("--date")
    update_expense.add_argument("--description")

    delete_expense = commands.add_parser("delete-expense", help="Delete an expense")
    delete_expense.add_argument("id")

    commands.add_parser("list-expenses", help="List expenses")

    add_income = commands.add_parser("add-income", help="Record an income")
    add_income.add_argument("--amount", type=float, required=True)
    add_income.add_argument("--source", required=True)
    add_income.add_argument("--date", help="YYYY-MM-DD (default: today)")
    add_income.add_argument("--description", default="")

    delete_income = commands.add_parser("delete-income", help="Delete an income")
    delete_income.add_argument("id")

    commands.add_parser("list-incomes", help="List incomes")

    set_budget = commands.add_parser("set-budget", help="Add a category budget")
    set_budget.add_argument("--amount", type=float, required=True)
    set_budget.add_argument("--category", required=True, help="Category ID")
    set_budget.add_argument("--period", choices=["monthly", "yearly"], default="monthly")
    set_budget.add_argument("--start-date", help="YYYY-MM-DD (default: today)")

    delete_budget = commands.add_parser("delete-budget", help="Delete a budget")
    delete_budget.add_argument("id")

    commands.add_parser("list-budgets", help="List budgets with progress")
    commands.add_parser("dashboard", help="Show financial overview")
    commands.add_parser("report", help="Show spending reports")

    optimize = commands.add_parser("optimize", help="Ask AI for an optimized budget")
    optimize.add_argument("--goals", help="Your financial goals")
    source = optimize.add_mutually_exclusive_group()
    source.add_argument("--spending", help='Past spending as JSON, e.g. \'{"Groceries": 300}\'')
    source.add_argument("--input", help="JSON file with pastSpending and financialGoals")

    return parser


def _run(args, config_manager: ConfigManager, settings: AppSettings) -> int:
    if args.command == "configure":
        configure_command(args, config_manager)
        return 0

    config = config_manager.load_config()
    if config:
        configure_logging(config.log_level)
    store = LocalStore(config_manager.resolve_data_dir(config))
    symbol = settings.currency_symbol

    if args.command == "categories":
        categories_command(store)
    elif args.command == "add-expense":
        expense = store.add_expense(args.amount, args.category, args.date, args.description)
        print(f"✓ Expense added: {expense.id}")
    elif args.command == "update-expense":
        store.update_expense(
            args.id, amount=args.amount, categoryId=args.category,
            date=args.date, description=args.description
        )
        print(f"✓ Expense updated: {args.id}")
    elif args.command == "delete-expense":
        store.delete_expense(args.id)
        print(f"✓ Expense deleted: {args.id}")
    elif args.command == "list-expenses":
        list_expenses_command(store, symbol)
    elif args.command == "add-income":
        income = store.add_income(args.amount, args.source, args.date, args.description)
        print(f"✓ Income added: {income.id}")
    elif args.command == "delete-income":
        store.delete_income(args.id)
        print(f"✓ Income deleted: {args.id}")
    elif args.command == "list-incomes":
        list_incomes_command(store, symbol)
    elif args.command == "set-budget":
        budget = store.add_budget(args.amount, args.category, args.period, args.start_date)
        print(f"✓ Budget added: {budget.id}")
    elif args.command == "delete-budget":
        store.delete_budget(args.id)
        print(f"✓ Budget deleted: {args.id}")
    elif args.command == "list-budgets":
        list_budgets_command(store, symbol)
    elif args.command == "dashboard":
        dashboard_command(store, symbol)
    elif args.command == "report":
        report_command(store, symbol)
    elif args.command == "optimize":
        if not config:
            raise FinanceFlowError("No configuration found. Run 'financeflow configure --api-key ...' first.")
        is_valid, message = config_manager.validate_config(config)
        if not is_valid:
            raise FinanceFlowError(f"Invalid configuration: {message}")
        return optimize_command(args, config, settings, store)

    return 0


def main():
    """Main entry point for the FinanceFlow CLI."""
    args = _build_parser().parse_args()
    set_operation_context(args.command)

    try:
        settings = get_settings()
        configure_logging(settings.log_level, settings.log_max_file_size_mb, settings.log_backup_count)
        exit_code = _run(args, ConfigManager(settings.config_file), settings)
    except FinanceFlowError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
        sys.exit(130)
    except Exception as e:
        logger.critical(f"Fatal error: {e}")
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()

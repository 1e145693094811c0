"""Tests for Excel export."""

from datetime import date
from decimal import Decimal

from openpyxl import load_workbook
from quickentry.export import ExcelExporter
from quickentry.models import ParsedExpense, ParsedTask


class TestExcelExporter:
    """Test suite for ExcelExporter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.expenses = [
            ParsedExpense(Decimal('120'), 'outflow', 'food', date(2024, 3, 14), '午餐'),
            ParsedExpense(Decimal('50000'), 'inflow', 'salary', date(2024, 3, 5), '薪水'),
            ParsedExpense(Decimal('80.5'), 'outflow', 'food', date(2024, 3, 15), ''),
        ]

    def test_expense_sheet(self, tmp_path):
        """Test rows are written sorted by date below the header."""
        path = tmp_path / "out" / "expenses.xlsx"

        ExcelExporter(path).export_expenses(self.expenses)

        ws = load_workbook(path)["Expenses"]
        assert [c.value for c in ws[1]] == ["Date", "Direction", "Category", "Amount", "Note"]
        assert ws.cell(row=2, column=1).value == "2024-03-05"
        assert ws.cell(row=2, column=4).value == 50000
        assert ws.cell(row=4, column=4).value == 80.5
        assert ws.max_row == 4

    def test_expense_summary(self, tmp_path):
        """Test inflow, outflow and net totals."""
        path = tmp_path / "expenses.xlsx"

        ExcelExporter(path).export_expenses(self.expenses, include_summary=True)

        ws = load_workbook(path)["Expenses"]
        assert ws.cell(row=1, column=1).value == "SUMMARY"
        assert ws.cell(row=3, column=1).value == "Total Inflow:"
        assert ws.cell(row=3, column=2).value == 50000
        assert ws.cell(row=4, column=2).value == 200.5
        assert ws.cell(row=5, column=2).value == 49799.5

        breakdown = [row[1:3] for row in ws.iter_rows(min_row=9, max_row=10, values_only=True)]
        assert breakdown == [('salary', '薪水'), ('food', '餐飲')]
        assert ws.cell(row=9, column=5).value == 50000

    def test_empty_summary(self, tmp_path):
        """Test the summary of an empty batch."""
        path = tmp_path / "expenses.xlsx"

        ExcelExporter(path).export_expenses([], include_summary=True)

        ws = load_workbook(path)["Expenses"]
        assert ws.cell(row=3, column=1).value == "No expenses to summarize"

    def test_task_sheet(self, tmp_path):
        """Test task rows and blank due dates."""
        path = tmp_path / "tasks.xlsx"
        tasks = [
            ParsedTask("開會", 'high', date(2024, 3, 16)),
            ParsedTask("buy milk"),
        ]

        ExcelExporter(path).export_tasks(tasks)

        wb = load_workbook(path)
        assert wb.sheetnames == ["Tasks"]
        ws = wb["Tasks"]
        assert ws.cell(row=2, column=3).value == "2024-03-16"
        assert ws.cell(row=3, column=1).value == "buy milk"
        assert ws.cell(row=3, column=2).value == "medium"
        assert ws.cell(row=3, column=3).value in ("", None)

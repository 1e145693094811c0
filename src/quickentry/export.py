"""Excel export for parsed expenses and tasks."""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from .classify import CategoryClassifier
from .models import INFLOW, OUTFLOW, ParsedExpense, ParsedTask

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="E6E6E6", end_color="E6E6E6", fill_type="solid")


class ExcelExporter:
    """Export parsed records to an Excel workbook."""

    def __init__(self, output_path: Path, classifier: Optional[CategoryClassifier] = None):
        """
        Initialize Excel exporter.

        Args:
            output_path: Path for the output Excel file
            classifier: Source of category display labels; the packaged rules by default
        """
        self.output_path = Path(output_path)
        self.classifier = classifier or CategoryClassifier()
        self.workbook = Workbook()

    def export_expenses(self, expenses: List[ParsedExpense], include_summary: bool = False):
        """
        Export expenses to a single sheet, optionally preceded by a summary.

        Args:
            expenses: Parsed expenses
            include_summary: Whether to add inflow/outflow totals and a category breakdown
        """
        try:
            self._remove_default_sheet()
            ws = self.workbook.create_sheet("Expenses")

            current_row = 1
            if include_summary:
                current_row = self._add_summary_section(ws, expenses, current_row) + 2

            headers = ["Date", "Direction", "Category", "Amount", "Note"]
            current_row = self._write_headers(ws, headers, current_row)

            for expense in sorted(expenses, key=lambda e: e.date):
                ws.cell(row=current_row, column=1, value=expense.date.isoformat())
                ws.cell(row=current_row, column=2, value=expense.direction)
                ws.cell(row=current_row, column=3, value=expense.category)
                ws.cell(row=current_row, column=4, value=float(expense.amount))
                ws.cell(row=current_row, column=5, value=expense.note)
                current_row += 1

            self._set_column_widths(ws, [12, 10, 16, 12, 40])
            self._save()
            logger.info(f"Exported {len(expenses)} expenses to: {self.output_path}")

        except Exception as e:
            logger.error(f"Failed to export Excel file: {e}")
            raise

    def export_tasks(self, tasks: List[ParsedTask]):
        """
        Export tasks to a single sheet.

        Args:
            tasks: Parsed tasks
        """
        try:
            self._remove_default_sheet()
            ws = self.workbook.create_sheet("Tasks")

            current_row = self._write_headers(ws, ["Task", "Priority", "Due Date"], 1)
            for task in tasks:
                ws.cell(row=current_row, column=1, value=task.text)
                ws.cell(row=current_row, column=2, value=task.priority)
                ws.cell(row=current_row, column=3,
                        value=task.due_date.isoformat() if task.due_date else "")
                current_row += 1

            self._set_column_widths(ws, [40, 10, 12])
            self._save()
            logger.info(f"Exported {len(tasks)} tasks to: {self.output_path}")

        except Exception as e:
            logger.error(f"Failed to export Excel file: {e}")
            raise

    def _add_summary_section(self, ws, expenses: List[ParsedExpense], start_row: int) -> int:
        """Add totals and a per-category breakdown; returns the next free row."""
        ws.cell(row=start_row, column=1, value="SUMMARY").font = Font(bold=True, size=14)
        current_row = start_row + 2

        if not expenses:
            ws.cell(row=current_row, column=1, value="No expenses to summarize")
            return current_row + 1

        df = pd.DataFrame([e.to_dict() for e in expenses])
        df['amount'] = df['amount'].astype(float)

        totals = df.groupby('direction')['amount'].sum()
        inflow = float(totals.get(INFLOW, 0.0))
        outflow = float(totals.get(OUTFLOW, 0.0))

        for label, value in [("Total Inflow:", inflow),
                             ("Total Outflow:", outflow),
                             ("Net:", inflow - outflow)]:
            ws.cell(row=current_row, column=1, value=label).font = Font(bold=True)
            ws.cell(row=current_row, column=2, value=round(value, 2))
            current_row += 1

        current_row += 1
        ws.cell(row=current_row, column=1, value="Category Breakdown:").font = Font(bold=True)
        current_row += 1
        for col, header in enumerate(["Direction", "Category", "Label", "Count", "Amount"], 1):
            ws.cell(row=current_row, column=col, value=header).font = Font(bold=True)
        current_row += 1

        breakdown = (df.groupby(['direction', 'category'])['amount']
                     .agg(['count', 'sum'])
                     .sort_values('sum', ascending=False))
        for (direction, category), data in breakdown.iterrows():
            ws.cell(row=current_row, column=1, value=direction)
            ws.cell(row=current_row, column=2, value=category)
            ws.cell(row=current_row, column=3, value=self.classifier.label_for(category))
            ws.cell(row=current_row, column=4, value=int(data['count']))
            ws.cell(row=current_row, column=5, value=round(float(data['sum']), 2))
            current_row += 1

        return current_row

    def _write_headers(self, ws, headers: List[str], row: int) -> int:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center")
        return row + 1

    @staticmethod
    def _set_column_widths(ws, widths: List[int]):
        for i, width in enumerate(widths, 1):
            ws.column_dimensions[chr(64 + i)].width = width

    def _remove_default_sheet(self):
        if "Sheet" in self.workbook.sheetnames:
            self.workbook.remove(self.workbook["Sheet"])

    def _save(self):
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.workbook.save(str(self.output_path))

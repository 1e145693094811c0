"""Tests for ExpenseParser."""

from datetime import date
from decimal import Decimal

import pytest
from quickentry.models import INFLOW, OUTFLOW
from quickentry.parsers import DateResolver, ExpenseParser

TODAY = date(2024, 3, 15)


class TestExpenseParser:
    """Test suite for ExpenseParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = ExpenseParser(today=TODAY)

    def test_typical_meal(self):
        """Test a meal with a relative date and a unit-tagged amount."""
        result = self.parser.parse("昨天午餐花了120元")

        assert result is not None
        assert result.amount == Decimal('120')
        assert result.direction == OUTFLOW
        assert result.category == 'food'
        assert result.date == date(2024, 3, 14)
        assert result.note == "午餐"

    def test_salary_inflow(self):
        """Test income detection and the inflow category table."""
        result = self.parser.parse("收到薪水 50000")

        assert result.amount == Decimal('50000')
        assert result.direction == INFLOW
        assert result.category == 'salary'
        assert result.date == TODAY
        assert result.note == "薪水"

    def test_refund_is_gift_money(self):
        """Test an inflow keyword that maps to the gift category."""
        result = self.parser.parse("退款 200元")

        assert result.direction == INFLOW
        assert result.category == 'gift'

    def test_english_wages_inflow(self):
        """Test that wages are income and land in the salary table."""
        result = self.parser.parse("got my wages 3000")

        assert result.amount == Decimal('3000')
        assert result.direction == INFLOW
        assert result.category == 'salary'

    def test_inflow_keyword_needs_whole_word(self):
        """Test that 'interesting' does not read as interest income."""
        result = self.parser.parse("bought an interesting book for 30 dollars")

        assert result.amount == Decimal('30')
        assert result.direction == OUTFLOW
        assert result.category == 'other'

    def test_category_keyword_needs_whole_word(self):
        """Test that 'business' does not match the transport keyword 'bus'."""
        result = self.parser.parse("business cards 30")

        assert result.direction == OUTFLOW
        assert result.category == 'other'

    def test_inflow_without_category(self):
        """Test the catch-all category for inflows."""
        result = self.parser.parse("收到 500元")

        assert result.direction == INFLOW
        assert result.category == 'other'

    def test_outflow_without_category(self):
        """Test the catch-all category for outflows."""
        result = self.parser.parse("雜支 80元")

        assert result.direction == OUTFLOW
        assert result.category == 'other'
        assert result.note == "雜支"

    def test_transport(self):
        """Test transport keywords."""
        result = self.parser.parse("搭計程車 250元")

        assert result.category == 'transport'
        assert result.note == "搭計程車"

    def test_table_order_decides_overlap(self):
        """Test that the earlier category wins when keywords overlap."""
        result = self.parser.parse("午餐後去超市 300元")

        assert result.category == 'food'

    def test_long_filler_removed_whole(self):
        """Test that 花費 is stripped as one word."""
        result = self.parser.parse("花費 200元 看電影")

        assert result.category == 'entertainment'
        assert result.note == "看電影"

    def test_symbol_and_week_phrase(self):
        """Test a symbol amount with a last-week date."""
        result = self.parser.parse("上週三 買衣服 NT$1200")

        assert result.amount == Decimal('1200')
        assert result.category == 'shopping'
        assert result.date == date(2024, 3, 6)
        assert result.note == "衣服"

    def test_english_utterance(self):
        """Test the English vocabulary."""
        result = self.parser.parse("paid 45 dollars for lunch yesterday")

        assert result.amount == Decimal('45')
        assert result.direction == OUTFLOW
        assert result.category == 'food'
        assert result.date == date(2024, 3, 14)
        assert result.note == "for lunch"

    def test_slash_date_and_bare_amount(self):
        """Test that the largest number is the amount and M/D is the date."""
        result = self.parser.parse("午餐 3/14 80")

        assert result.amount == Decimal('80')
        assert result.date == date(2024, 3, 14)
        assert result.note == "午餐"

    def test_grouped_thousands(self):
        """Test that 15,000 is read as one amount and removed whole from the note."""
        result = self.parser.parse("房租 15,000元")

        assert result.amount == Decimal('15000')
        assert result.category == 'housing'
        assert result.note == "房租"

    def test_note_may_be_empty(self):
        """Test that an utterance with nothing but an amount has an empty note."""
        result = self.parser.parse("50元")

        assert result.amount == Decimal('50')
        assert result.note == ""

    @pytest.mark.parametrize("text", ["", "   ", "meeting tomorrow", "午餐 0元"])
    def test_rejects_without_positive_amount(self, text):
        """Test that the amount is mandatory."""
        assert self.parser.parse(text) is None

    def test_per_call_reference_date(self):
        """Test that a per-call reference date overrides the constructor's."""
        result = self.parser.parse("明天 加油 900元", today=date(2024, 12, 31))

        assert result.date == date(2025, 1, 1)
        assert result.category == 'transport'

    def test_category_always_in_vocabulary(self):
        """Test that categories come from the closed vocabulary of their direction."""
        utterances = [
            "昨天午餐花了120元", "收到薪水 50000", "股息入帳 320元", "打工 1500元",
            "買耳機 2990元", "看牙醫 500元", "房租 15000", "補習費 4000元",
            "KTV 600元", "隨便 10元", "收到 紅包 600元",
        ]
        for text in utterances:
            result = self.parser.parse(text)
            assert result is not None, text
            assert result.category in self.parser.classifier.vocabulary(result.direction)

    def test_cleaned_note_has_no_residue(self):
        """Test that reparsing a note finds no amount and no date."""
        resolver = DateResolver(today=TODAY)
        for text in ["昨天午餐花了120元", "上週三 買衣服 NT$1200", "12月1日 房租 15000元"]:
            note = self.parser.parse(text).note

            assert self.parser.parse(note) is None
            assert resolver.resolve(note).matched_span is None

    def test_to_dict(self):
        """Test JSON-ready serialization."""
        assert self.parser.parse("昨天午餐花了120.5元").to_dict() == {
            'amount': '120.5',
            'direction': 'outflow',
            'category': 'food',
            'date': '2024-03-14',
            'note': '午餐',
        }

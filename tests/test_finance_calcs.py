"""
Tests for cost of life calculations (daily total, summaries, tags, search).
"""

import pytest
from datetime import date
from decimal import Decimal

from costoflife.finance_calcs import (
    calculate_cost_of_life, format_money, format_search_results, format_summary,
    format_tag_summary, search_transactions, summarize_tags, summarize_transactions,
    transaction_row
)
from costoflife.parser import parse

DAY = date(2021, 6, 1)


@pytest.fixture
def tagged():
    return [
        parse("Test#1 10€ #tag1", today=DAY),
        parse("Test#2 20€ #tag2", today=DAY),
        parse("Test#3 50€ #tag3", today=DAY),
        parse("Test#4 40€ #tag2", today=DAY),
    ]


class TestCalculateCostOfLife:
    """Test the daily cost of life."""

    def test_single_day_expenses(self):
        """Test that one day expenses add their full amount."""
        transactions = [parse("Test#1 10€", today=DAY), parse("Test#2 10€", today=DAY)]
        assert calculate_cost_of_life(transactions, DAY) == Decimal('20.00')

    def test_only_active_transactions(self):
        """Test that expenses outside their lifetime are ignored."""
        transactions = [
            parse("Netflix 120€ 1m12x 010121"),
            parse("Old 100€ 1m 010120"),
            parse("Future 100€ 1m 010122"),
        ]
        assert calculate_cost_of_life(transactions, DAY) == Decimal('0.33')

    def test_sums_unrounded_per_diems(self):
        """Test that rounding happens once, on the total."""
        # 1/3 per day each: 0.333.. * 3 = 1.00, not 0.99
        transactions = [parse(f"Item{i} 1€ 3d 010621") for i in range(3)]
        assert calculate_cost_of_life(transactions, DAY) == Decimal('1.00')

    def test_empty(self):
        """Test no transactions."""
        assert calculate_cost_of_life([], DAY) == Decimal('0.00')


class TestSummarizeTransactions:
    """Test the per transaction summary."""

    def test_rows_sorted_by_progress(self):
        """Test that the most advanced expense comes first."""
        transactions = [
            parse("Phone 240€ 1m24x 010621"),
            parse("Netflix 120€ 1m12x 010121"),
        ]
        rows = summarize_transactions(transactions, DAY)

        assert [r['title'] for r in rows] == ['Netflix', 'Phone']
        assert rows[0]['per_diem'] == Decimal('0.33')
        assert rows[0]['ends_on'] == date(2021, 12, 31)
        assert rows[0]['progress'] == pytest.approx(151 / 365)
        assert rows[1]['cost_to_date'] == Decimal('0.00')

    def test_inactive_excluded(self):
        """Test that finished expenses are left out."""
        rows = summarize_transactions([parse("Old 10€ 010120")], DAY)
        assert rows == []


class TestSummarizeTags:
    """Test the tag breakdown."""

    def test_aggregates_by_tag(self, tagged):
        """Test counts and per diem per tag, highest first."""
        rows = summarize_tags(tagged, DAY)

        assert len(rows) == 3
        assert (rows[0]['tag'], rows[0]['count'], rows[0]['per_diem']) == ('tag2', 2, Decimal('60.00'))
        assert (rows[1]['tag'], rows[1]['count'], rows[1]['per_diem']) == ('tag3', 1, Decimal('50.00'))
        assert rows[2]['tag'] == 'tag1'

    def test_share_of_total(self, tagged):
        """Test each tag's share of the daily cost."""
        rows = summarize_tags(tagged, DAY)
        assert rows[0]['share'] == pytest.approx(0.5)
        assert rows[2]['share'] == pytest.approx(10 / 120)

    def test_untagged_transactions_count_in_total_only(self):
        """Test shares when part of the cost is untagged."""
        transactions = [parse("Lunch 10€ #food", today=DAY), parse("Bus 10€", today=DAY)]
        rows = summarize_tags(transactions, DAY)
        assert rows == [{'tag': 'food', 'count': 1, 'per_diem': Decimal('10.00'), 'share': 0.5}]

    def test_no_active(self, tagged):
        """Test a day with nothing active."""
        assert summarize_tags(tagged, date(2022, 1, 1)) == []


class TestSearchTransactions:
    """Test searching titles and tags."""

    @pytest.fixture
    def transactions(self):
        return [
            parse("Netflix subscription 120€ 1m12x 010121 #tv"),
            parse("Car 20000€ 5y 150320 .transport"),
            parse("Bus pass 30€ 1m 010221 #transport"),
        ]

    def test_title_substring(self, transactions):
        """Test case-insensitive substring match on title words."""
        assert [t.title for t in search_transactions(transactions, 'net')] == ['Netflix subscription']

    def test_tag(self, transactions):
        """Test matching tags, with or without marker."""
        assert [t.title for t in search_transactions(transactions, '#transport')] == ['Car', 'Bus pass']
        assert len(search_transactions(transactions, 'TV')) == 1

    def test_all_words_must_match(self, transactions):
        """Test that words narrow the result."""
        assert [t.title for t in search_transactions(transactions, 'transport pass')] == ['Bus pass']
        assert search_transactions(transactions, 'transport netflix') == []

    def test_empty_pattern(self, transactions):
        """Test that an empty pattern matches nothing."""
        assert search_transactions(transactions, '  ') == []


class TestFormatting:
    """Test text output."""

    def test_format_money(self):
        """Test thousands separator and two decimals."""
        assert format_money(Decimal('1234.5')) == '1,234.50€'
        assert format_money(Decimal('0.33'), '$') == '0.33$'

    def test_format_summary(self, tagged):
        """Test the summary table."""
        rows = summarize_transactions(tagged, DAY)
        output = format_summary(rows, DAY, calculate_cost_of_life(tagged, DAY))

        assert 'Cost of life on 2021-06-01' in output
        assert 'Test#3' in output
        assert '100.0%' in output
        assert 'Daily cost of life: 120.00€' in output

    def test_format_summary_empty(self):
        """Test the summary without active expenses."""
        assert 'No active expenses.' in format_summary([], DAY)

    def test_format_tag_summary(self, tagged):
        """Test the tag table."""
        output = format_tag_summary(summarize_tags(tagged, DAY), DAY)
        assert 'tag2' in output
        assert '50.0%' in output

    def test_format_search_results(self, tagged):
        """Test the search table and totals."""
        output = format_search_results(tagged[:2], DAY)
        assert 'Test#1' in output
        assert '#tag2' in output
        assert '30.00€' in output

    def test_format_search_no_match(self):
        """Test the empty search message."""
        assert format_search_results([], DAY) == 'No matches found.'

    def test_transaction_row(self):
        """Test the JSON-ready transaction row."""
        row = transaction_row(parse("Netflix 120€ 1m12x 010121 #tv"), DAY)
        assert row == {
            'title': 'Netflix',
            'amount': '120.00',
            'since': '2021-01-01',
            'ends_on': '2021-12-31',
            'lifetime': '1m12x',
            'tags': ['tv'],
            'per_diem': '0.33',
            'progress': pytest.approx(151 / 365),
            'cost_to_date': '49.64',
        }

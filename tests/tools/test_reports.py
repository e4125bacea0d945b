"""Tests for report aggregation tools."""

import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from dateutil.relativedelta import relativedelta

from errors import ValidationError
from tests.helpers import make_category, make_transaction
from tools.reports import (
    aggregate_report,
    filter_by_period,
    compute_totals,
    category_distribution,
    monthly_series,
    balance_series,
    top_categories,
    dashboard_summary,
)

NOW = datetime(2024, 6, 15, 12, 0)
PERIODS = ["current-month", "last-3-months", "current-year", "all-time"]

CATEGORIES = [
    make_category("food", "Food", icon="🍔", color="#ef4444"),
    make_category("bus", "Bus", icon="🚌", color="#3b82f6"),
    make_category("fun", "Fun", icon="🎮", color="#8b5cf6"),
    make_category("salary", "Salary", icon="💰", color="#10b981"),
]


class TestFilterByPeriod:
    """Tests for filter_by_period."""

    def test_current_month(self):
        """Test that only this month of this year is kept."""
        transactions = [
            make_transaction(1, date(2024, 6, 1)),
            make_transaction(2, date(2024, 6, 30)),
            make_transaction(3, date(2024, 5, 31)),
            make_transaction(4, date(2023, 6, 15)),
        ]

        kept = filter_by_period(transactions, "current-month", NOW)

        assert [t.amount for t in kept] == [Decimal("1"), Decimal("2")]

    def test_last_3_months_starts_on_first_day(self):
        """Test that last-3-months starts on the 1st, three months back."""
        transactions = [
            make_transaction(1, date(2024, 2, 29)),
            make_transaction(2, date(2024, 3, 1)),
            make_transaction(3, date(2024, 6, 15)),
            make_transaction(4, date(2024, 7, 1)),
        ]

        kept = filter_by_period(transactions, "last-3-months", NOW)

        assert [t.amount for t in kept] == [Decimal("2"), Decimal("3"), Decimal("4")]

    def test_last_3_months_across_year_boundary(self):
        """Test that January looks back into the previous year."""
        transactions = [
            make_transaction(1, date(2023, 9, 30)),
            make_transaction(2, date(2023, 10, 1)),
        ]

        kept = filter_by_period(transactions, "last-3-months", date(2024, 1, 20))

        assert [t.amount for t in kept] == [Decimal("2")]

    def test_current_year(self):
        """Test that only this calendar year is kept."""
        transactions = [
            make_transaction(1, date(2024, 1, 1)),
            make_transaction(2, date(2024, 12, 31)),
            make_transaction(3, date(2023, 12, 31)),
        ]

        kept = filter_by_period(transactions, "current-year", NOW)

        assert [t.amount for t in kept] == [Decimal("1"), Decimal("2")]

    def test_all_time(self):
        """Test that all-time keeps everything."""
        transactions = [
            make_transaction(1, date(1999, 1, 1)),
            make_transaction(2, date(2030, 1, 1)),
        ]

        assert len(filter_by_period(transactions, "all-time", NOW)) == 2

    def test_unknown_period_raises(self):
        """Test that an unknown period selector is rejected."""
        with pytest.raises(ValidationError, match="Unknown report period"):
            filter_by_period([], "last-decade", NOW)


class TestTotals:
    """Tests for compute_totals."""

    def test_current_month_excludes_last_month_expense(self):
        """Test income this month with an expense last month."""
        transactions = [
            make_transaction(1000, date(2024, 6, 5), type="income", category_id="salary"),
            make_transaction(300, date(2024, 5, 20)),
        ]

        report = aggregate_report(transactions, CATEGORIES, "current-month", NOW)

        assert report.totals.total_income == Decimal("1000")
        assert report.totals.total_expenses == Decimal("0")
        assert report.totals.balance == Decimal("1000")

    @pytest.mark.parametrize("period", PERIODS)
    def test_balance_is_income_minus_expenses(self, period):
        """Test the balance identity for every period."""
        transactions = [
            make_transaction("1200.50", date(2024, 6, 5), type="income"),
            make_transaction("310.25", date(2024, 6, 6)),
            make_transaction("99.99", date(2024, 4, 2)),
            make_transaction(2000, date(2024, 1, 5), type="income"),
            make_transaction(45, date(2023, 11, 30)),
        ]

        totals = aggregate_report(transactions, CATEGORIES, period, NOW).totals

        assert totals.balance == totals.total_income - totals.total_expenses

    def test_empty(self):
        """Test that no transactions give zero totals."""
        totals = compute_totals([])

        assert totals.total_income == 0
        assert totals.total_expenses == 0
        assert totals.balance == 0


class TestCategoryDistribution:
    """Tests for category_distribution."""

    def test_sums_sorts_and_drops_empty(self):
        """Test per-category sums, largest first, without empty categories."""
        transactions = [
            make_transaction(30, date(2024, 6, 1), category_id="food"),
            make_transaction(20, date(2024, 6, 2), category_id="food"),
            make_transaction(150, date(2024, 6, 3), category_id="fun"),
            make_transaction(5000, date(2024, 6, 4), type="income", category_id="salary"),
        ]

        slices = category_distribution(transactions, CATEGORIES)

        assert [s.category_id for s in slices] == ["fun", "food"]
        assert [s.value for s in slices] == [Decimal("150"), Decimal("50")]
        assert slices[0].name == "Fun"
        assert slices[0].color == "#8b5cf6"
        assert slices[0].share == Decimal("75")
        assert slices[1].share == Decimal("25")

    def test_never_contains_non_positive_values(self):
        """Test that categories without expenses are left out."""
        transactions = [
            make_transaction(100, date(2024, 6, 4), type="income", category_id="food"),
        ]

        assert category_distribution(transactions, CATEGORIES) == []

    def test_expense_of_deleted_category_counts_toward_share(self):
        """Test that orphaned expenses get no slice but still dilute shares."""
        transactions = [
            make_transaction(50, date(2024, 6, 1), category_id="food"),
            make_transaction(50, date(2024, 6, 1), category_id="deleted"),
        ]

        slices = category_distribution(transactions, CATEGORIES)

        assert [s.category_id for s in slices] == ["food"]
        assert slices[0].share == Decimal("50")

    def test_top_categories_limits_rows(self):
        """Test that the top table shows at most five categories."""
        categories = [make_category(f"c{i}", f"C{i}") for i in range(7)]
        transactions = [
            make_transaction(10 + i, date(2024, 6, 1), category_id=f"c{i}")
            for i in range(7)
        ]

        report = aggregate_report(transactions, categories, "all-time", NOW)
        top = top_categories(report)

        assert len(report.category_distribution) == 7
        assert [s.category_id for s in top] == ["c6", "c5", "c4", "c3", "c2"]


class TestMonthlySeries:
    """Tests for monthly_series."""

    def test_groups_by_month(self):
        """Test separate income and expense sums per month."""
        transactions = [
            make_transaction(1000, date(2024, 2, 1), type="income"),
            make_transaction(200, date(2024, 2, 15)),
            make_transaction(50, date(2024, 2, 28)),
            make_transaction(80, date(2024, 1, 10)),
        ]

        series = monthly_series(transactions)

        assert [e.month for e in series] == ["2024-01", "2024-02"]
        assert series[0].income == Decimal("0")
        assert series[0].expense == Decimal("80")
        assert series[1].income == Decimal("1000")
        assert series[1].expense == Decimal("250")

    def test_keeps_last_six_months_ascending(self):
        """Test truncation to the most recent six months."""
        start = date(2023, 5, 10)
        transactions = [
            make_transaction(10, start + relativedelta(months=i)) for i in range(9)
        ]

        series = monthly_series(transactions)

        assert len(series) == 6
        assert [e.month for e in series] == [
            "2023-08",
            "2023-09",
            "2023-10",
            "2023-11",
            "2023-12",
            "2024-01",
        ]

    def test_sorted_across_years(self):
        """Test that December sorts before the next January."""
        transactions = [
            make_transaction(1, date(2024, 1, 3)),
            make_transaction(1, date(2023, 12, 30)),
        ]

        assert [e.month for e in monthly_series(transactions)] == ["2023-12", "2024-01"]


class TestBalanceSeries:
    """Tests for balance_series."""

    def test_running_balance(self):
        """Test the running balance replayed in date order."""
        transactions = [
            make_transaction(30, date(2024, 6, 3)),
            make_transaction(100, date(2024, 6, 1), type="income"),
            make_transaction(20, date(2024, 6, 2)),
        ]

        series = balance_series(transactions)

        assert [p.date for p in series] == [
            date(2024, 6, 1),
            date(2024, 6, 2),
            date(2024, 6, 3),
        ]
        assert [p.balance for p in series] == [
            Decimal("100"),
            Decimal("80"),
            Decimal("50"),
        ]

    def test_same_date_collapses_to_last_value(self):
        """Test that several transactions on one date make one point."""
        transactions = [
            make_transaction(100, date(2024, 6, 1), type="income"),
            make_transaction(30, date(2024, 6, 1)),
            make_transaction(10, date(2024, 6, 2)),
        ]

        series = balance_series(transactions)

        assert len(series) == 2
        assert series[0].balance == Decimal("70")
        assert series[1].balance == Decimal("60")

    def test_keeps_last_thirty_dates(self):
        """Test truncation to the 30 most recent dates."""
        start = date(2024, 1, 1)
        transactions = [
            make_transaction(1, start + timedelta(days=i), type="income")
            for i in range(45)
        ]

        series = balance_series(transactions)

        assert len(series) == 30
        assert series[0].date == start + timedelta(days=15)
        assert series[0].balance == Decimal("16")
        assert series[-1].date == start + timedelta(days=44)
        assert series[-1].balance == Decimal("45")
        assert all(a.date < b.date for a, b in zip(series, series[1:]))


class TestAggregateReport:
    """Tests for aggregate_report."""

    def test_empty_period_yields_empty_views(self):
        """Test that an empty period gives zeros and no series."""
        transactions = [make_transaction(100, date(2020, 1, 1))]

        report = aggregate_report(transactions, CATEGORIES, "current-month", NOW)

        assert report.period == "current-month"
        assert report.totals.total_expenses == 0
        assert report.category_distribution == []
        assert report.monthly_series == []
        assert report.balance_series == []
        assert top_categories(report) == []

    def test_only_income_has_no_division_errors(self):
        """Test that shares are safe when there are no expenses."""
        transactions = [make_transaction(100, date(2024, 6, 1), type="income")]

        report = aggregate_report(transactions, CATEGORIES, "all-time", NOW)

        assert report.totals.total_expenses == 0
        assert report.category_distribution == []
        assert report.monthly_series[0].income == Decimal("100")

    def test_views_use_filtered_transactions(self):
        """Test that every view only sees the selected period."""
        transactions = [
            make_transaction(500, date(2024, 6, 2), type="income", category_id="salary"),
            make_transaction(120, date(2024, 6, 3), category_id="food"),
            make_transaction(999, date(2023, 6, 3), category_id="fun"),
        ]

        report = aggregate_report(transactions, CATEGORIES, "current-year", NOW)

        assert [s.category_id for s in report.category_distribution] == ["food"]
        assert [e.month for e in report.monthly_series] == ["2024-06"]
        assert [p.balance for p in report.balance_series] == [
            Decimal("500"),
            Decimal("380"),
        ]


class TestDashboardSummary:
    """Tests for dashboard_summary."""

    def test_summary(self):
        """Test all-time balance, this month's flows and recent transactions."""
        transactions = [
            make_transaction(3000, date(2024, 5, 5), type="income", transaction_id="t1"),
            make_transaction(500, date(2024, 5, 20), transaction_id="t2"),
            make_transaction(1000, date(2024, 6, 5), type="income", transaction_id="t3"),
            make_transaction(200, date(2024, 6, 7), transaction_id="t4"),
            make_transaction(50, date(2024, 6, 1), transaction_id="t5"),
            make_transaction(10, date(2024, 4, 1), transaction_id="t6"),
        ]

        summary = dashboard_summary(transactions, NOW)

        assert summary.balance == Decimal("3240")
        assert summary.month_income == Decimal("1000")
        assert summary.month_expenses == Decimal("250")
        assert [t.id for t in summary.recent_transactions] == [
            "t4",
            "t3",
            "t5",
            "t2",
            "t1",
        ]

    def test_empty(self):
        """Test the dashboard of a user without transactions."""
        summary = dashboard_summary([], NOW)

        assert summary.balance == 0
        assert summary.recent_transactions == []

"""Tests for invoice filtering and report aggregation"""

from datetime import date

import pytest

from invoice_generator import build_invoice
from reports import (
    FilterOptions,
    filter_invoices,
    invoices_frame,
    monthly_summary,
    status_distribution,
    summary,
    unique_companies,
)


@pytest.fixture
def frame():
    invoices = [
        {"invoiceNumber": "SIT-001-24-25", "issueDate": "2024-04-05", "status": "paid", "total": 1000.0,
         "client": {"name": "Acme Traders", "gstin": "27AAACA1234A1Z5"}},
        {"invoiceNumber": "SIT-002-24-25", "issueDate": "2024-05-10", "status": "sent", "total": 2500.0,
         "client": {"name": "Globex Corp", "gstin": "29AABCG5678B1Z2"}},
        {"invoiceNumber": "SIT-003-24-25", "issueDate": "2024-05-20", "status": "draft", "total": 500.0,
         "client": {"name": "Acme Traders", "gstin": "27AAACA1234A1Z5"}},
    ]
    return invoices_frame(invoices)


class TestFilterInvoices:

    def test_no_filters_keeps_everything(self, frame):
        assert len(filter_invoices(frame, FilterOptions())) == 3

    def test_date_range(self, frame):
        result = filter_invoices(frame, FilterOptions(start_date=date(2024, 5, 1), end_date=date(2024, 5, 15)))

        assert list(result["invoice_number"]) == ["SIT-002-24-25"]

    def test_amount_range(self, frame):
        result = filter_invoices(frame, FilterOptions(min_amount=600, max_amount=2000))

        assert list(result["invoice_number"]) == ["SIT-001-24-25"]

    def test_company_name_is_case_insensitive(self, frame):
        result = filter_invoices(frame, FilterOptions(company_name="acme traders"))

        assert len(result) == 2

    def test_gst_number_partial(self, frame):
        result = filter_invoices(frame, FilterOptions(gst_number="29aabcg"))

        assert list(result["client_name"]) == ["Globex Corp"]

    def test_search_by_invoice_number(self, frame):
        result = filter_invoices(frame, FilterOptions(search_query="SIT-002"))

        assert list(result["invoice_number"]) == ["SIT-002-24-25"]

    def test_search_tolerates_typos(self, frame):
        result = filter_invoices(frame, FilterOptions(search_query="Acme Tradrs"))

        assert list(result["invoice_number"]) == ["SIT-001-24-25", "SIT-003-24-25"]

    def test_search_without_match(self, frame):
        assert filter_invoices(frame, FilterOptions(search_query="zzzz")).empty


class TestReports:

    def test_summary(self, frame):
        stats = summary(frame)

        assert stats["total_revenue"] == 4000.0
        assert stats["total_invoices"] == 3
        assert stats["average_invoice_value"] == pytest.approx(1333.333, rel=1e-4)
        assert stats["outstanding_invoices"] == 2

    def test_monthly_summary_is_zero_filled(self, frame):
        months = monthly_summary(frame, months=3, today=date(2024, 6, 15))

        assert months == [
            {"month": "Apr 2024", "revenue": 1000.0, "invoices": 1},
            {"month": "May 2024", "revenue": 3000.0, "invoices": 2},
            {"month": "Jun 2024", "revenue": 0.0, "invoices": 0},
        ]

    def test_status_distribution(self, frame):
        counts = {row["status"]: row["count"] for row in status_distribution(frame)}

        assert counts == {"Paid": 1, "Sent": 1, "Draft": 1}

    def test_unique_companies(self, frame):
        assert unique_companies(frame) == ["Acme Traders", "Globex Corp"]


class TestFrameSources:

    def test_built_invoices_are_accepted(self):
        invoice = build_invoice({
            "invoice_number": "SIT-010-24-25",
            "issue_date": "2024-06-01",
            "client": {"name": "Initech", "state": "Karnataka"},
            "items": [{"quantity": 1, "rate": 100, "gstRate": 18}],
        })

        frame = invoices_frame([invoice])

        assert frame["total"].iloc[0] == 118.0
        assert frame["client_name"].iloc[0] == "Initech"

    def test_empty_history(self):
        frame = invoices_frame([])

        assert summary(frame) == {
            "total_revenue": 0.0,
            "total_invoices": 0,
            "average_invoice_value": 0.0,
            "outstanding_invoices": 0,
        }
        assert monthly_summary(frame, months=2, today=date(2024, 6, 1)) == [
            {"month": "May 2024", "revenue": 0.0, "invoices": 0},
            {"month": "Jun 2024", "revenue": 0.0, "invoices": 0},
        ]

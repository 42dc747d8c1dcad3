"""Invoice list filtering and revenue analytics over stored invoice dicts."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd
from rapidfuzz import fuzz, process

from config import ApplicationConfig

logger = logging.getLogger(__name__)

COLUMNS = ["invoice_number", "client_name", "client_gstin", "issue_date", "status", "total", "created_at"]


@dataclass
class FilterOptions:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    company_name: str = ""
    gst_number: str = ""
    search_query: str = ""


def _pick(data, *keys, default=None):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def invoices_frame(invoices) -> pd.DataFrame:
    """
    One row per invoice. Accepts the stored camelCase shape as well as the
    dicts returned by invoice_generator.build_invoice.
    """
    records = []
    for inv in invoices:
        client = inv.get("client") or {}
        totals = inv.get("totals") or {}
        records.append({
            "invoice_number": _pick(inv, "invoiceNumber", "invoice_number", default=""),
            "client_name": client.get("name") or "",
            "client_gstin": client.get("gstin") or "",
            "issue_date": _pick(inv, "issueDate", "issue_date"),
            "status": inv.get("status") or "draft",
            "total": _pick(inv, "total", default=totals.get("total", 0)),
            "created_at": _pick(inv, "createdAt", "created_at"),
        })

    frame = pd.DataFrame(records, columns=COLUMNS)
    issue_dates = frame["issue_date"].map(lambda d: d.isoformat() if hasattr(d, "isoformat") else d)
    frame["issue_date"] = pd.to_datetime(issue_dates, errors="coerce", utc=True, format="ISO8601").dt.tz_localize(None)
    frame["total"] = pd.to_numeric(frame["total"], errors="coerce").fillna(0.0)
    return frame


def search_mask(frame: pd.DataFrame, query: str, score_cutoff=None) -> pd.Series:
    """Substring match on number or client, or a close fuzzy match on the client name."""
    query = (query or "").strip().lower()
    if not query:
        return pd.Series(True, index=frame.index)
    if score_cutoff is None:
        score_cutoff = ApplicationConfig.SEARCH_SCORE_CUTOFF

    names = frame["client_name"].astype(str).str.lower()
    numbers = frame["invoice_number"].astype(str).str.lower()
    mask = names.str.contains(query, regex=False) | numbers.str.contains(query, regex=False)

    matches = process.extract(query, names.tolist(), scorer=fuzz.WRatio, limit=None, score_cutoff=score_cutoff)
    fuzzy = pd.Series(False, index=frame.index)
    fuzzy.iloc[[idx for _, _, idx in matches]] = True
    return mask | fuzzy


def filter_invoices(frame: pd.DataFrame, options: FilterOptions) -> pd.DataFrame:
    mask = pd.Series(True, index=frame.index)

    if options.start_date is not None:
        mask &= frame["issue_date"] >= pd.Timestamp(options.start_date)
    if options.end_date is not None:
        mask &= frame["issue_date"] <= pd.Timestamp(options.end_date)
    if options.min_amount is not None:
        mask &= frame["total"] >= options.min_amount
    if options.max_amount is not None:
        mask &= frame["total"] <= options.max_amount
    if options.company_name:
        mask &= frame["client_name"].str.lower() == options.company_name.strip().lower()
    if options.gst_number:
        gstin = options.gst_number.strip().upper()
        mask &= frame["client_gstin"].str.upper().str.contains(gstin, regex=False)
    if options.search_query:
        mask &= search_mask(frame, options.search_query)

    filtered = frame[mask]
    logger.debug("Filtered %d of %d invoices with %s", len(filtered), len(frame), options)
    return filtered


def unique_companies(frame: pd.DataFrame):
    return sorted({name for name in frame["client_name"] if name})


def monthly_summary(frame: pd.DataFrame, months=None, today=None):
    """Revenue and invoice count for each of the last N months, oldest first."""
    months = months or ApplicationConfig.REPORT_MONTHS
    today = today or date.today()
    periods = pd.period_range(end=pd.Timestamp(today).to_period("M"), periods=months, freq="M")

    dated = frame.dropna(subset=["issue_date"])
    grouped = dated.groupby(dated["issue_date"].dt.to_period("M"))["total"].agg(["sum", "count"])
    grouped = grouped.reindex(periods, fill_value=0)

    return [
        {"month": period.strftime("%b %Y"), "revenue": float(row["sum"]), "invoices": int(row["count"])}
        for period, row in grouped.iterrows()
    ]


def status_distribution(frame: pd.DataFrame):
    counts = frame["status"].value_counts(sort=False)
    return [{"status": str(status).capitalize(), "count": int(count)} for status, count in counts.items()]


def summary(frame: pd.DataFrame):
    total_revenue = float(frame["total"].sum())
    total_invoices = len(frame)
    return {
        "total_revenue": total_revenue,
        "total_invoices": total_invoices,
        "average_invoice_value": total_revenue / total_invoices if total_invoices else 0.0,
        "outstanding_invoices": int((frame["status"] != "paid").sum()),
    }

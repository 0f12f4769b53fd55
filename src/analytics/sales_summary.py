from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from src.analytics.attribution import normalize_campaign_code, normalize_code
from src.analytics.status import classify_status
from src.models.sales import (
    UNASSIGNED_ATTENDANT_CODE,
    UNASSIGNED_ATTENDANT_NAME,
    UNDEFINED_CAMPAIGN_CODE,
    UNDEFINED_CAMPAIGN_NAME,
    AttendantRecord,
    CampaignRecord,
    SaleRecord,
    StatusClass,
)
from src.schemas.reports import AttendantRankingRow, CampaignReportRow
from src.schemas.summary import SalesSummary
from src.shared.money import amount_to_cents, cents_to_amount, currency_float


def _roi(profit_cents: int, cost_cents: int) -> float:
    if cost_cents <= 0:
        return 0.0
    return currency_float(Decimal(profit_cents) / Decimal(cost_cents) * 100)


def _cents_to_float(cents: int) -> float:
    return currency_float(cents_to_amount(cents))


def sum_by_status(sales: Iterable[SaleRecord]) -> Dict[StatusClass, int]:
    totals: Dict[StatusClass, int] = defaultdict(int)
    for sale in sales:
        status_class = classify_status(sale.status_text, sale.status_code)
        totals[status_class] += sale.total_value_cents or 0
    return totals


def compute_summary(sales: Iterable[SaleRecord], cost_baseline: object) -> SalesSummary:
    totals = sum_by_status(sales)
    scheduled_cents = totals[StatusClass.SCHEDULED]
    paid_cents = totals[StatusClass.PAID]
    failed_cents = totals[StatusClass.FAILED]
    # Not clamped: paid can exceed scheduled inside one window.
    receivable_cents = scheduled_cents - paid_cents
    direct_sales_cents = 0

    baseline_cents = amount_to_cents(cost_baseline)
    profit_cents = paid_cents + direct_sales_cents - baseline_cents

    scheduled_total = _cents_to_float(scheduled_cents)
    paid_total = _cents_to_float(paid_cents)
    receivable_total = _cents_to_float(receivable_cents)
    failed_total = _cents_to_float(failed_cents)
    return SalesSummary(
        scheduled_total=scheduled_total,
        paid_total=paid_total,
        receivable_total=receivable_total,
        failed_total=failed_total,
        direct_sales_total=_cents_to_float(direct_sales_cents),
        investment_total=_cents_to_float(baseline_cents),
        profit=_cents_to_float(profit_cents),
        roi=_roi(profit_cents, baseline_cents),
        funnel_chart=[scheduled_total, paid_total, receivable_total, failed_total],
        composition_chart=[paid_total, receivable_total, failed_total],
    )


def rank_attendants(
    sales: Iterable[SaleRecord],
    attendants: Mapping[str, AttendantRecord],
) -> List[AttendantRankingRow]:
    stats: Dict[str, Dict[str, Any]] = {}
    for sale in sales:
        code = normalize_code(sale.attendant_code) or UNASSIGNED_ATTENDANT_CODE
        registered = attendants.get(code)
        registered_name = registered.name.strip() if registered else ""
        stored_name = (sale.attendant_name or "").strip()
        entry = stats.setdefault(
            code,
            {"paid_total_cents": 0, "scheduled_count": 0, "failed_count": 0},
        )
        entry["attendant_name"] = registered_name or stored_name or UNASSIGNED_ATTENDANT_NAME

        status_class = classify_status(sale.status_text, sale.status_code)
        if status_class == StatusClass.PAID:
            entry["paid_total_cents"] += sale.total_value_cents or 0
        elif status_class == StatusClass.SCHEDULED:
            entry["scheduled_count"] += 1
        elif status_class == StatusClass.FAILED:
            entry["failed_count"] += 1

    # sorted() is stable, so equal totals keep first-seen order.
    ranked = sorted(
        ((code, entry) for code, entry in stats.items() if entry["paid_total_cents"] > 0),
        key=lambda item: -item[1]["paid_total_cents"],
    )
    return [
        AttendantRankingRow(
            rank=index,
            attendant_code=code,
            attendant_name=entry["attendant_name"],
            paid_total_cents=entry["paid_total_cents"],
            paid_total=_cents_to_float(entry["paid_total_cents"]),
            scheduled_count=entry["scheduled_count"],
            failed_count=entry["failed_count"],
        )
        for index, (code, entry) in enumerate(ranked, start=1)
    ]


def rank_campaigns(
    sales: Iterable[SaleRecord],
    campaigns: Iterable[CampaignRecord],
) -> List[CampaignReportRow]:
    entries: Dict[str, Dict[str, Any]] = {}
    for campaign in campaigns:
        code = normalize_code(campaign.code)
        if not code:
            continue
        entries[code] = {
            "campaign_name": campaign.name.strip() or code,
            "cost_cents": amount_to_cents(campaign.cost),
            "revenue_cents": 0,
            "paid_count": 0,
        }

    for sale in sales:
        code = normalize_campaign_code(sale.campaign_code) or UNDEFINED_CAMPAIGN_CODE
        if code not in entries:
            fallback_name = UNDEFINED_CAMPAIGN_NAME if code == UNDEFINED_CAMPAIGN_CODE else code
            entries[code] = {
                "campaign_name": (sale.campaign_name or "").strip() or fallback_name,
                "cost_cents": 0,
                "revenue_cents": 0,
                "paid_count": 0,
            }
        if classify_status(sale.status_text, sale.status_code) == StatusClass.PAID:
            entries[code]["revenue_cents"] += sale.total_value_cents or 0
            entries[code]["paid_count"] += 1

    ranked = sorted(
        (
            (code, entry)
            for code, entry in entries.items()
            if entry["revenue_cents"] != 0 or entry["cost_cents"] != 0
        ),
        key=lambda item: -item[1]["revenue_cents"],
    )
    rows: List[CampaignReportRow] = []
    for index, (code, entry) in enumerate(ranked, start=1):
        profit_cents = entry["revenue_cents"] - entry["cost_cents"]
        rows.append(
            CampaignReportRow(
                rank=index,
                campaign_code=code,
                campaign_name=entry["campaign_name"],
                paid_count=entry["paid_count"],
                revenue=_cents_to_float(entry["revenue_cents"]),
                cost=_cents_to_float(entry["cost_cents"]),
                profit=_cents_to_float(profit_cents),
                roi=_roi(profit_cents, entry["cost_cents"]),
            )
        )
    return rows

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

from src.core.logging import configure_logging
from src.models.sales import UNASSIGNED_ATTENDANT_CODE, UNASSIGNED_ATTENDANT_NAME, SaleRecord
from src.repositories.sales_repository import SalesRepository
from src.shared.time import local_now

logger = logging.getLogger(__name__)

STATUS_DEFINITIONS: Dict[str, Tuple[int, str]] = {
    "agendado": (2, "Agendado"),
    "pago": (3, "Pago"),
    "frustrado": (5, "Frustrado"),
    "cobranca": (4, "Em Cobrança"),
}

ATTENDANT_NAMES = {
    "joao": "João",
    "mari": "Maria",
    "luci": "Luciana",
    UNASSIGNED_ATTENDANT_CODE: UNASSIGNED_ATTENDANT_NAME,
}

# (id, status, value in cents, attendant code, product)
SEED_ROWS: Dict[str, List[Tuple[str, str, int, Optional[str], str]]] = {
    "today": [
        ("today-01", "agendado", 15000, UNASSIGNED_ATTENDANT_CODE, "Consulta Rápida"),
        ("today-02", "pago", 60000, "joao", "Plano Premium"),
        ("today-03", "frustrado", 32000, "mari", "Mentoria Express"),
        ("today-04", "pago", 27500, None, "Workshop Digital"),
        ("today-05", "cobranca", 18000, UNASSIGNED_ATTENDANT_CODE, "Revisão Mensal"),
    ],
    "this_week": [
        ("week-01", "agendado", 20000, "mari", "Plano Básico"),
        ("week-02", "pago", 48000, "joao", "Plano Pro"),
        ("week-03", "frustrado", 23000, "luci", "Programa Intensivo"),
        ("week-04", "agendado", 26000, UNASSIGNED_ATTENDANT_CODE, "Sessão Estratégica"),
        ("week-05", "pago", 41000, None, "Campanha Especial"),
    ],
    "last_week": [
        ("lastweek-01", "pago", 52000, "joao", "Consultoria Completa"),
        ("lastweek-02", "agendado", 18000, "mari", "Plano Revisão"),
        ("lastweek-03", "frustrado", 22000, UNASSIGNED_ATTENDANT_CODE, "Treinamento Online"),
        ("lastweek-04", "cobranca", 19500, "luci", "Workshop Presencial"),
        ("lastweek-05", "pago", 36000, None, "Mentoria Avançada"),
    ],
    "last_month": [
        ("lastmonth-01", "pago", 75000, "mari", "Imersão Completa"),
        ("lastmonth-02", "agendado", 30000, "joao", "Plano Anual"),
        ("lastmonth-03", "frustrado", 28000, "luci", "Curso Online"),
        ("lastmonth-04", "pago", 45000, UNASSIGNED_ATTENDANT_CODE, "Consultoria Express"),
        ("lastmonth-05", "cobranca", 21000, None, "Assinatura Mensal"),
    ],
}


def bucket_days(bucket: str, today: date) -> List[date]:
    monday = today - timedelta(days=today.weekday())
    if bucket == "today":
        return [today] * 5
    if bucket == "this_week":
        days = [monday + timedelta(days=offset) for offset in range(7)]
        return [day for day in days if day != today][:5]
    if bucket == "last_week":
        return [monday - timedelta(days=7 - offset) for offset in range(5)]
    if bucket == "last_month":
        last_month_end = today.replace(day=1) - timedelta(days=1)
        return [last_month_end.replace(day=min(day, last_month_end.day)) for day in (2, 7, 12, 18, 24)]
    raise ValueError(f"Unknown seed bucket: {bucket}")


def build_sale(
    transaction_id: str,
    status: str,
    value_cents: int,
    attendant_code: Optional[str],
    product_name: str,
    stamp: datetime,
) -> SaleRecord:
    status_code, status_text = STATUS_DEFINITIONS[status]
    client_slug = "".join(char for char in transaction_id.lower() if char.isalnum())
    return SaleRecord(
        transaction_id=transaction_id,
        status_code=status_code,
        status_text=status_text,
        client_email=f"{client_slug}@cliente.com",
        client_name=f"Cliente {transaction_id}",
        product_name=product_name,
        total_value_cents=value_cents,
        created_at=stamp,
        updated_at=stamp,
        attendant_code=attendant_code,
        attendant_name=ATTENDANT_NAMES.get(attendant_code or ""),
        raw_payload={},
    )


def build_seed_sales(now: datetime) -> Iterable[SaleRecord]:
    today = now.date()
    for bucket, rows in SEED_ROWS.items():
        for index, (row, day) in enumerate(zip(rows, bucket_days(bucket, today))):
            stamp = datetime.combine(day, time(9 + index * 2, 30 if index % 2 else 0))
            if bucket == "today":
                stamp = min(stamp, now)
            yield build_sale(*row, stamp=stamp)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo sales across reporting periods.")
    parser.add_argument("--dry-run", action="store_true", help="Print sales without storing them")
    args = parser.parse_args()

    configure_logging()
    sales = list(build_seed_sales(local_now()))
    if args.dry_run:
        for sale in sales:
            print(f"{sale.transaction_id} {sale.status_text} {sale.total_value_cents} {sale.updated_at}")
        return

    repository = SalesRepository()
    for sale in sales:
        repository.upsert(sale)
    logger.info("seeded sales", extra={"count": len(sales)})
    print(f"Seeded {len(sales)} sales")


if __name__ == "__main__":
    main()

"""Domain services aggregating invoices for dashboards and reports.

Every function recomputes its result from the invoice list it receives; no
aggregate is cached between calls. Invoices are bucketed by their invoice
date (creation timestamp as fallback, today when neither parses).
"""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from commission_desk.domain.constants import REST_LABEL, UNKNOWN_CLIENT_LABEL
from commission_desk.domain.models import (
    Client,
    ClientPerformance,
    DayBucket,
    Invoice,
    MonthBucket,
    MonthlyProductBreakdown,
    PeriodChange,
    ProductBreakdown,
    ProductBreakdownEntry,
    RevenueSource,
)
from commission_desk.domain.services.dates import invoice_bucket_date
from commission_desk.utils.decimal_utils import HUNDRED
from commission_desk.utils.formatting import (
    format_number,
    month_name,
    round_whole,
)

ZERO = Decimal("0")


def filter_invoices_in_range(
    invoices: Iterable[Invoice],
    start: date,
    end: date,
    logger=None,
) -> list[Invoice]:
    """Return invoices whose bucket date lies within ``[start, end]``."""
    return [
        invoice
        for invoice in invoices
        if start <= invoice_bucket_date(invoice, logger=logger) <= end
    ]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return the (year, month) preceding the given month."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def filter_invoices_in_month(
    invoices: Iterable[Invoice],
    year: int,
    month: int,
    logger=None,
) -> list[Invoice]:
    """Return invoices dated within a calendar month."""
    start, end = month_bounds(year, month)
    return filter_invoices_in_range(invoices, start, end, logger=logger)


def filter_invoices_in_year(
    invoices: Iterable[Invoice],
    year: int,
    logger=None,
) -> list[Invoice]:
    """Return invoices dated within a calendar year."""
    return filter_invoices_in_range(
        invoices,
        date(year, 1, 1),
        date(year, 12, 31),
        logger=logger,
    )


def total_sales(invoices: Iterable[Invoice]) -> Decimal:
    return sum((invoice.total_amount for invoice in invoices), start=ZERO)


def total_commission(invoices: Iterable[Invoice]) -> Decimal:
    return sum((invoice.total_commission for invoice in invoices), start=ZERO)


def average_commission(invoices: Sequence[Invoice]) -> Decimal:
    """Return the mean commission per invoice, 0 for an empty list."""
    if not invoices:
        return ZERO
    return total_commission(invoices) / Decimal(len(invoices))


def build_daily_buckets(
    invoices: Iterable[Invoice],
    year: int,
    month: int,
    logger=None,
) -> list[DayBucket]:
    """Return one bucket per calendar day of the month.

    Invoices outside the month are ignored.
    """
    start, end = month_bounds(year, month)
    sales = [ZERO] * end.day
    commission = [ZERO] * end.day
    counts = [0] * end.day
    for invoice in invoices:
        bucket_date = invoice_bucket_date(invoice, logger=logger)
        if not start <= bucket_date <= end:
            continue
        index = bucket_date.day - 1
        sales[index] += invoice.total_amount
        commission[index] += invoice.total_commission
        counts[index] += 1
    return [
        DayBucket(
            day=index + 1,
            date=date(year, month, index + 1),
            sales=sales[index],
            commission=commission[index],
            count=counts[index],
        )
        for index in range(end.day)
    ]


def month_over_month_growth(
    values: Sequence[Decimal],
) -> list[Decimal | None]:
    """Return the growth in percent of each value versus the previous one.

    The first entry has no prior value and is reported as ``None``; a zero
    previous value yields 0.
    """
    growth: list[Decimal | None] = []
    for index, current in enumerate(values):
        if index == 0:
            growth.append(None)
            continue
        previous = values[index - 1]
        if previous == 0:
            growth.append(ZERO)
        else:
            growth.append((current - previous) / previous * HUNDRED)
    return growth


def _rank_sources(
    product_totals: dict[str, tuple[Decimal, Decimal]],
    rest: tuple[Decimal, Decimal] | None,
) -> list[RevenueSource]:
    sources = []
    if rest is not None:
        sources.append(
            RevenueSource(
                name=REST_LABEL,
                kind="rest",
                sales=rest[0],
                commission=rest[1],
            )
        )
    sources.extend(
        RevenueSource(
            name=name,
            kind="product",
            sales=sales,
            commission=commission,
        )
        for name, (sales, commission) in product_totals.items()
    )
    return sorted(sources, key=lambda source: source.commission, reverse=True)


def build_monthly_buckets(
    invoices: Iterable[Invoice],
    year: int,
    logger=None,
) -> list[MonthBucket]:
    """Return twelve month buckets for a year with growth and rankings.

    The per-month product ranking includes the rest category only for
    months where some invoice had a positive rest amount.
    """
    sales = [ZERO] * 12
    commission = [ZERO] * 12
    counts = [0] * 12
    products: list[dict[str, tuple[Decimal, Decimal]]] = [
        {} for _ in range(12)
    ]
    rests: list[tuple[Decimal, Decimal] | None] = [None] * 12
    for invoice in invoices:
        bucket_date = invoice_bucket_date(invoice, logger=logger)
        if bucket_date.year != year:
            continue
        index = bucket_date.month - 1
        sales[index] += invoice.total_amount
        commission[index] += invoice.total_commission
        counts[index] += 1
        for line in invoice.products:
            line_sales, line_commission = products[index].get(
                line.name,
                (ZERO, ZERO),
            )
            products[index][line.name] = (
                line_sales + line.amount,
                line_commission + line.commission,
            )
        if invoice.rest_amount > 0:
            rest_sales, rest_commission = rests[index] or (ZERO, ZERO)
            rests[index] = (
                rest_sales + invoice.rest_amount,
                rest_commission + invoice.rest_commission,
            )

    growth = month_over_month_growth(commission)
    return [
        MonthBucket(
            month=index + 1,
            sales=sales[index],
            commission=commission[index],
            count=counts[index],
            growth=growth[index],
            product_ranking=_rank_sources(products[index], rests[index]),
        )
        for index in range(12)
    ]


def select_best_bucket(buckets: Sequence):
    """Return the bucket with the highest commission.

    Ties keep the first bucket encountered; an empty sequence returns None.
    """
    best = None
    for bucket in buckets:
        if best is None or bucket.commission > best.commission:
            best = bucket
    return best


def rank_revenue_sources(invoices: Iterable[Invoice]) -> list[RevenueSource]:
    """Rank every product plus the rest category by commission."""
    product_totals: dict[str, tuple[Decimal, Decimal]] = {}
    rest_sales = ZERO
    rest_commission = ZERO
    for invoice in invoices:
        rest_sales += invoice.rest_amount
        rest_commission += invoice.rest_commission
        for line in invoice.products:
            sales, commission = product_totals.get(line.name, (ZERO, ZERO))
            product_totals[line.name] = (
                sales + line.amount,
                commission + line.commission,
            )
    return _rank_sources(product_totals, (rest_sales, rest_commission))


def rank_top_clients(
    invoices: Iterable[Invoice],
    clients: Iterable[Client],
) -> list[ClientPerformance]:
    """Rank clients by total purchase amount, highest first."""
    names = {client.id: client.name for client in clients}
    totals: dict[str, tuple[Decimal, int]] = {}
    for invoice in invoices:
        if not invoice.client_id:
            continue
        amount, count = totals.get(invoice.client_id, (ZERO, 0))
        totals[invoice.client_id] = (amount + invoice.total_amount, count + 1)
    ranking = [
        ClientPerformance(
            client_id=client_id,
            name=names.get(client_id, UNKNOWN_CLIENT_LABEL),
            amount=amount,
            count=count,
        )
        for client_id, (amount, count) in totals.items()
    ]
    return sorted(ranking, key=lambda item: item.amount, reverse=True)


def percent_change(current, previous) -> PeriodChange:
    """Return the absolute percentage change between two period values.

    A zero previous value reports 0 rather than an infinite change.
    """
    current_value = Decimal(current)
    previous_value = Decimal(previous)
    if previous_value == 0:
        percent = ZERO
    else:
        percent = abs(
            (current_value - previous_value) / previous_value * HUNDRED
        )
    return PeriodChange(
        percent=percent,
        is_positive=current_value >= previous_value,
    )


def find_record_invoice(invoices: Iterable[Invoice]) -> Invoice | None:
    """Return the invoice with the largest positive total amount."""
    record = None
    max_amount = ZERO
    for invoice in invoices:
        if invoice.total_amount > max_amount:
            max_amount = invoice.total_amount
            record = invoice
    return record


def build_narrative(
    month: int,
    invoice_count: int,
    sales: Decimal,
    ranking: Sequence[RevenueSource],
    top_client: ClientPerformance | None,
    average: Decimal,
    seller_first_name: str,
) -> str:
    """Assemble the executive summary paragraph of a month."""
    if invoice_count == 0:
        return (
            "No hay suficiente actividad registrada este mes para generar "
            "un análisis estratégico."
        )
    parts = [
        f"En el mes de {month_name(month)}, se logró un total de ventas de "
        f"${format_number(sales)}."
    ]
    if ranking:
        winner = ranking[0]
        parts.append(
            f'El mayor rendimiento provino de "{winner.name}", que generó '
            f"${format_number(winner.commission)} en comisiones."
        )
        if winner.kind == "rest":
            parts.append(
                f'Es notable que la categoría "{winner.name}" lidera, ya que '
                "acumula los productos sin comisión especial."
            )
    if top_client is not None:
        parts.append(
            f"El cliente más activo fue {top_client.name}, aportando "
            f"${format_number(top_client.amount)} al volumen de ventas."
        )
    parts.append(
        "En promedio, cada factura generó una ganancia de "
        f"${format_number(round_whole(average))} para {seller_first_name}."
    )
    return " ".join(parts)


def build_product_breakdown(
    invoices: Iterable[Invoice],
    clients: Iterable[Client],
    year: int,
    month: int,
    logger=None,
) -> MonthlyProductBreakdown:
    """Group the month's invoice lines per product, plus the rest bucket.

    Lines with a non-positive amount are skipped. Products are sorted by
    total amount, highest first.
    """
    names = {client.id: client.name for client in clients}
    month_invoices = filter_invoices_in_month(
        invoices,
        year,
        month,
        logger=logger,
    )

    grouped: dict[str, dict] = {}
    rest_entries: list[ProductBreakdownEntry] = []
    rest_amount = ZERO
    rest_commission = ZERO
    for invoice in month_invoices:
        bucket_date = invoice_bucket_date(invoice, logger=logger)
        client_name = names.get(invoice.client_id) if invoice.client_id else None
        for line in invoice.products:
            if line.amount <= 0:
                continue
            group = grouped.setdefault(
                line.name,
                {
                    "percentage": line.percentage,
                    "entries": [],
                    "amount": ZERO,
                    "commission": ZERO,
                },
            )
            group["entries"].append(
                ProductBreakdownEntry(
                    ncf=invoice.ncf,
                    date=bucket_date,
                    amount=line.amount,
                    client_id=invoice.client_id,
                    client_name=client_name,
                )
            )
            group["amount"] += line.amount
            group["commission"] += line.commission
        if invoice.rest_amount > 0:
            rest_entries.append(
                ProductBreakdownEntry(
                    ncf=invoice.ncf,
                    date=bucket_date,
                    amount=invoice.rest_amount,
                    client_id=invoice.client_id,
                    client_name=client_name,
                )
            )
            rest_amount += invoice.rest_amount
            rest_commission += invoice.rest_commission

    products = sorted(
        (
            ProductBreakdown(
                name=name,
                percentage=group["percentage"],
                entries=group["entries"],
                total_amount=group["amount"],
                total_commission=group["commission"],
            )
            for name, group in grouped.items()
        ),
        key=lambda item: item.total_amount,
        reverse=True,
    )
    rest = ProductBreakdown(
        name=REST_LABEL,
        percentage=None,
        entries=rest_entries,
        total_amount=rest_amount,
        total_commission=rest_commission,
    )
    grand_total = sum(
        (item.total_commission for item in products),
        start=ZERO,
    ) + rest_commission
    return MonthlyProductBreakdown(
        year=year,
        month=month,
        products=products,
        rest=rest,
        grand_total_commission=grand_total,
    )


def available_months(
    invoices: Iterable[Invoice],
    today: date,
    recent: int = 4,
    logger=None,
) -> list[tuple[int, int]]:
    """Return selectable (year, month) pairs, newest first.

    The last ``recent`` months are always offered, plus every month that has
    at least one invoice.
    """
    months = set()
    year, month = today.year, today.month
    for _ in range(recent):
        months.add((year, month))
        year, month = previous_month(year, month)
    for invoice in invoices:
        bucket_date = invoice_bucket_date(invoice, logger=logger, today=today)
        months.add((bucket_date.year, bucket_date.month))
    return sorted(months, reverse=True)


def available_years(
    invoices: Iterable[Invoice],
    today: date,
    logger=None,
) -> list[int]:
    """Return selectable years, newest first.

    The window from five years back to next year is always offered, plus
    every year that has at least one invoice.
    """
    years = {today.year + offset for offset in range(-5, 2)}
    for invoice in invoices:
        years.add(invoice_bucket_date(invoice, logger=logger, today=today).year)
    return sorted(years, reverse=True)


__all__ = [
    "filter_invoices_in_range",
    "filter_invoices_in_month",
    "filter_invoices_in_year",
    "month_bounds",
    "previous_month",
    "total_sales",
    "total_commission",
    "average_commission",
    "build_daily_buckets",
    "build_monthly_buckets",
    "month_over_month_growth",
    "select_best_bucket",
    "rank_revenue_sources",
    "rank_top_clients",
    "percent_change",
    "find_record_invoice",
    "build_narrative",
    "build_product_breakdown",
    "available_months",
    "available_years",
]

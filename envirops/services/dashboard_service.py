"""
Dashboard service.
Aggregates documents and master data into the figures shown on the dashboard.
Amounts are expressed in PEN: USD documents are converted at the configured
fixed rate.
"""
import calendar
import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from envirops.models import (
    Client, Equipment, Quotation, ServiceOrder,
    EquipmentStatus, QuotationStatus, ServiceOrderStatus,
)
from envirops.models.enums import enum_values
from envirops.services.cache_service import get_cache, dashboard_stats_key, DASHBOARD_MODULE
from envirops.services.totals import convert_to_pen, round2, to_decimal

logger = logging.getLogger(__name__)

TOP_SERVICES_LIMIT = 5


def months_ago(today: date, months: int) -> date:
    """Same day ``months`` months earlier, clamped to the end of shorter months."""
    month_index = today.year * 12 + (today.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    return date(year, month, min(today.day, calendar.monthrange(year, month)[1]))


def _in_period(value: Optional[date], start: Optional[date], end: Optional[date]) -> bool:
    if value is None:
        return False
    if start and value < start:
        return False
    if end and value > end:
        return False
    return True


def _percentage(part, whole) -> float:
    if not whole:
        return 0.0
    return float(round(Decimal(part) * 100 / Decimal(whole), 1))


def get_dashboard_stats(session: Session, start: Optional[date] = None, end: Optional[date] = None,
                        usd_rate='3.7', active_months: int = 3, today: Optional[date] = None) -> dict:
    """
    Compute every dashboard figure for a period.

    Args:
        session: SQLAlchemy session
        start: first day of the period (inclusive), None for unbounded
        end: last day of the period (inclusive), None for unbounded
        usd_rate: USD -> PEN conversion rate
        active_months: window used to decide whether a client is active
        today: reference date for the active-client window

    Returns:
        JSON-ready dict (floats for money)
    """
    today = today or date.today()
    rate = to_decimal(usd_rate)
    logger.debug(f"[DASHBOARD] Computing stats {start} .. {end}")

    orders = [
        order for order in
        session.query(ServiceOrder)
        .options(selectinload(ServiceOrder.items))
        .filter(ServiceOrder.deleted_at.is_(None))
        .all()
        if _in_period(order.date, start, end)
    ]
    quotations = [
        quotation for quotation in
        session.query(Quotation).filter(Quotation.deleted_at.is_(None)).all()
        if _in_period(quotation.date, start, end)
    ]

    # 1. Revenue
    completed = [o for o in orders if o.status == ServiceOrderStatus.COMPLETED.value]
    pending_statuses = (ServiceOrderStatus.PENDING.value, ServiceOrderStatus.IN_PROGRESS.value)
    pending = [o for o in orders if o.status in pending_statuses]

    total_revenue = sum((convert_to_pen(o.total, o.currency, rate) for o in completed), Decimal('0'))
    pending_revenue = sum((convert_to_pen(o.total, o.currency, rate) for o in pending), Decimal('0'))
    average_order_value = total_revenue / len(completed) if completed else Decimal('0')

    # 2. Active clients (any order or quotation in the last N months)
    window_start = months_ago(today, active_months)
    all_clients = session.query(Client.id).filter(Client.deleted_at.is_(None)).all()
    client_ids = {row.id for row in all_clients}
    active_ids = {
        row.client_id for row in
        session.query(ServiceOrder.client_id).filter(
            ServiceOrder.deleted_at.is_(None), ServiceOrder.date >= window_start
        ).all()
    }
    active_ids |= {
        row.client_id for row in
        session.query(Quotation.client_id).filter(
            Quotation.deleted_at.is_(None), Quotation.date >= window_start
        ).all()
    }
    active_ids &= client_ids

    # 3. Equipment by status
    equipment_by_status = OrderedDict((status, 0) for status in enum_values(EquipmentStatus))
    for (status,) in session.query(Equipment.status).filter(Equipment.deleted_at.is_(None)).all():
        equipment_by_status[status] = equipment_by_status.get(status, 0) + 1

    # 4. Documents by status
    orders_by_status = OrderedDict((status, 0) for status in enum_values(ServiceOrderStatus))
    for order in orders:
        orders_by_status[order.status] = orders_by_status.get(order.status, 0) + 1

    quotations_by_status = OrderedDict(
        (status, {'count': 0, 'amount': Decimal('0')}) for status in enum_values(QuotationStatus)
    )
    for quotation in quotations:
        bucket = quotations_by_status.setdefault(quotation.status, {'count': 0, 'amount': Decimal('0')})
        bucket['count'] += 1
        bucket['amount'] += convert_to_pen(quotation.total, quotation.currency, rate)
    accepted = quotations_by_status[QuotationStatus.ACCEPTED.value]['count']

    # 5. Revenue by month and by service (completed orders only)
    by_month = {}
    by_service = {}
    for order in completed:
        month_key = order.date.strftime('%Y-%m')
        month = by_month.setdefault(month_key, {'month': month_key, 'revenue': Decimal('0'), 'count': 0})
        month['revenue'] += convert_to_pen(order.total, order.currency, rate)
        month['count'] += 1

        for item in order.items:
            service = by_service.setdefault(item.name, {'name': item.name, 'revenue': Decimal('0'), 'count': 0})
            service['revenue'] += convert_to_pen(item.line_total, order.currency, rate)
            service['count'] += 1

    revenue_by_month = [
        {'month': m['month'], 'revenue': float(round2(m['revenue'])), 'count': m['count']}
        for m in sorted(by_month.values(), key=lambda m: m['month'])
    ]
    top_services = [
        {'name': s['name'], 'revenue': float(round2(s['revenue'])), 'count': s['count']}
        for s in sorted(by_service.values(), key=lambda s: s['revenue'], reverse=True)[:TOP_SERVICES_LIMIT]
    ]

    return {
        'period': {
            'start': start.isoformat() if start else None,
            'end': end.isoformat() if end else None,
        },
        'currency': 'PEN',
        'total_revenue': float(round2(total_revenue)),
        'pending_revenue': float(round2(pending_revenue)),
        'average_order_value': float(round2(average_order_value)),
        'open_orders': len(pending),
        'completed_orders': len(completed),
        'total_clients': len(client_ids),
        'active_clients': len(active_ids),
        'active_client_percentage': _percentage(len(active_ids), len(client_ids)),
        'total_equipment': sum(equipment_by_status.values()),
        'equipment_by_status': dict(equipment_by_status),
        'service_orders_by_status': dict(orders_by_status),
        'quotations_by_status': {
            status: {'count': bucket['count'], 'amount': float(round2(bucket['amount']))}
            for status, bucket in quotations_by_status.items()
        },
        'quotation_acceptance_rate': _percentage(accepted, len(quotations)),
        'revenue_by_month': revenue_by_month,
        'top_services': top_services,
    }


def get_cached_dashboard_stats(session: Session, start: Optional[date] = None, end: Optional[date] = None,
                               usd_rate='3.7', active_months: int = 3, ttl: Optional[int] = None) -> dict:
    """Dashboard stats through the Redis cache (computed directly when the cache is off)."""
    today = date.today()
    return get_cache().memoize(
        DASHBOARD_MODULE,
        dashboard_stats_key(start, end, today),
        lambda: get_dashboard_stats(session, start, end, usd_rate, active_months, today),
        ttl=ttl,
    )

"""Dashboard statistics for the signed-in user."""

import calendar
import logging
from datetime import date, datetime
from typing import Any

from erpdash.auth.session import UserSession
from erpdash.schemas.dashboard import DashboardStats, MonthlyRevenue, StatusCount
from erpdash.store.base import Row, StoreError, TableStore

logger = logging.getLogger(__name__)

_PROJECT_STATUSES = [("Active", "active"), ("Completed", "completed"), ("On Hold", "on_hold")]


def _as_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _revenue(payments: list[Row], year: int, month: int) -> float:
    total = 0.0
    for payment in payments:
        paid_on = _as_date(payment.get("payment_date"))
        if paid_on and paid_on.year == year and paid_on.month == month:
            total += float(payment.get("amount") or 0)
    return total


async def compute_dashboard_stats(
    session: UserSession,
    tables: TableStore,
    today: date | None = None,
) -> DashboardStats:
    """Aggregate counts and revenue across the user's tables.

    Unauthenticated sessions and store failures both yield zeroed stats.
    """
    owner = session.current_user()
    if not owner:
        return DashboardStats()

    today = today or date.today()
    mine = {"user_id": owner}
    try:
        clients = await tables.select("clients", mine)
        projects = await tables.select("projects", mine)
        tasks = await tables.select("tasks", mine)
        invoices = await tables.select("invoices", mine)
        payments = await tables.select("payments", mine)
    except StoreError as e:
        logger.error(f"Error fetching dashboard stats for user {owner}: {e}")
        return DashboardStats()

    def projects_with(status: str) -> int:
        return sum(1 for p in projects if p.get("status") == status)

    this_month_projects = 0
    for project in projects:
        created = _as_date(project.get("created_at"))
        if created and created.year == today.year and created.month == today.month:
            this_month_projects += 1

    return DashboardStats(
        total_customers=len(clients),
        active_customers=len(clients),
        monthly_revenue=_revenue(payments, today.year, today.month),
        this_month_projects=this_month_projects,
        active_projects=projects_with("active"),
        completed_projects=projects_with("completed"),
        pending_tasks=sum(1 for t in tasks if t.get("status") != "completed"),
        paid_invoices=sum(1 for i in invoices if i.get("status") == "paid"),
        monthly_revenue_data=[
            MonthlyRevenue(month=calendar.month_abbr[m], revenue=_revenue(payments, today.year, m))
            for m in range(1, 13)
        ],
        project_status=[
            StatusCount(status=label, count=projects_with(status))
            for label, status in _PROJECT_STATUSES
        ],
    )

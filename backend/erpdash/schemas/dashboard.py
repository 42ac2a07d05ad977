"""Pydantic schemas for the dashboard statistics endpoint."""

from pydantic import BaseModel


class MonthlyRevenue(BaseModel):
    month: str
    revenue: float


class StatusCount(BaseModel):
    status: str
    count: int


class DashboardStats(BaseModel):
    total_customers: int = 0
    active_customers: int = 0
    monthly_revenue: float = 0
    this_month_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    pending_tasks: int = 0
    paid_invoices: int = 0
    monthly_revenue_data: list[MonthlyRevenue] = []
    project_status: list[StatusCount] = []

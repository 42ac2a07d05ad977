"""Aggregate model imports so every backing table is registered on Base."""

from erpdash.models.client import Client  # noqa: F401
from erpdash.models.invoice import Invoice  # noqa: F401
from erpdash.models.lead import Lead  # noqa: F401
from erpdash.models.meeting import Meeting  # noqa: F401
from erpdash.models.payment import Payment  # noqa: F401
from erpdash.models.project import Project  # noqa: F401
from erpdash.models.task import Task  # noqa: F401
from erpdash.models.team_member import TeamMember  # noqa: F401
from erpdash.models.user_settings import UserSettings  # noqa: F401

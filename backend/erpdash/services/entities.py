"""One repository per entity kind.

Each class only declares what differs between kinds: backing table,
schemas, list ordering, the label used in messages, and the name captured
when a row goes to trash.
"""

import logging
from datetime import datetime, time

from erpdash.schemas.client import ClientCreate, ClientOut, ClientUpdate
from erpdash.schemas.common import ErrorCode, Outcome
from erpdash.schemas.invoice import InvoiceCreate, InvoiceOut, InvoiceUpdate
from erpdash.schemas.lead import LeadCreate, LeadOut, LeadUpdate
from erpdash.schemas.meeting import MeetingCreate, MeetingOut, MeetingUpdate
from erpdash.schemas.payment import PaymentCreate, PaymentOut, PaymentUpdate
from erpdash.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate
from erpdash.schemas.task import TaskCreate, TaskOut, TaskUpdate
from erpdash.schemas.team import TeamMemberCreate, TeamMemberOut, TeamMemberUpdate
from erpdash.schemas.trash import KIND_TABLES, ItemKind
from erpdash.services.repository import EntityRepository
from erpdash.store.base import Row

logger = logging.getLogger(__name__)


def _format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"


class CustomerRepository(EntityRepository[ClientOut]):
    kind = ItemKind.CUSTOMER
    table = KIND_TABLES[ItemKind.CUSTOMER]
    label = "client"
    label_plural = "clients"
    create_schema = ClientCreate
    update_schema = ClientUpdate
    out_schema = ClientOut

    def trash_label(self, entity: ClientOut) -> str:
        return entity.company_name


class TaskRepository(EntityRepository[TaskOut]):
    kind = ItemKind.TASK
    table = KIND_TABLES[ItemKind.TASK]
    label = "task"
    label_plural = "tasks"
    create_schema = TaskCreate
    update_schema = TaskUpdate
    out_schema = TaskOut


class MeetingRepository(EntityRepository[MeetingOut]):
    kind = ItemKind.MEETING
    table = KIND_TABLES[ItemKind.MEETING]
    label = "meeting"
    label_plural = "meetings"
    order_by = "meeting_date"
    create_schema = MeetingCreate
    update_schema = MeetingUpdate
    out_schema = MeetingOut

    @staticmethod
    def _starts_at(values: Row) -> datetime:
        return datetime.combine(values["meeting_date"], time.fromisoformat(values["start_time"]))

    def prepare_insert(self, values: Row) -> Row:
        values["starts_at"] = self._starts_at(values)
        return values

    def prepare_update(self, patch: Row) -> Row:
        # Only recomputable when both halves arrive together.
        if patch.get("meeting_date") and patch.get("start_time"):
            patch["starts_at"] = self._starts_at(patch)
        return patch

    def trash_label(self, entity: MeetingOut) -> str:
        return entity.subject


class InvoiceRepository(EntityRepository[InvoiceOut]):
    kind = ItemKind.INVOICE
    table = KIND_TABLES[ItemKind.INVOICE]
    label = "invoice"
    label_plural = "invoices"
    order_by = "issue_date"
    create_schema = InvoiceCreate
    update_schema = InvoiceUpdate
    out_schema = InvoiceOut

    def trash_label(self, entity: InvoiceOut) -> str:
        return f"Invoice {entity.number}"


class ProjectRepository(EntityRepository[ProjectOut]):
    kind = ItemKind.PROJECT
    table = KIND_TABLES[ItemKind.PROJECT]
    label = "project"
    label_plural = "projects"
    create_schema = ProjectCreate
    update_schema = ProjectUpdate
    out_schema = ProjectOut


class TeamRepository(EntityRepository[TeamMemberOut]):
    kind = ItemKind.TEAM
    table = KIND_TABLES[ItemKind.TEAM]
    label = "team member"
    label_plural = "team members"
    create_schema = TeamMemberCreate
    update_schema = TeamMemberUpdate
    out_schema = TeamMemberOut


class PaymentRepository(EntityRepository[PaymentOut]):
    kind = ItemKind.PAYMENT
    table = KIND_TABLES[ItemKind.PAYMENT]
    label = "payment"
    label_plural = "payments"
    order_by = "payment_date"
    create_schema = PaymentCreate
    update_schema = PaymentUpdate
    out_schema = PaymentOut

    def trash_label(self, entity: PaymentOut) -> str:
        return f"Payment for {_format_amount(entity.amount)}"


class LeadRepository(EntityRepository[LeadOut]):
    kind = ItemKind.LEAD
    table = KIND_TABLES[ItemKind.LEAD]
    label = "lead"
    label_plural = "leads"
    create_schema = LeadCreate
    update_schema = LeadUpdate
    out_schema = LeadOut

    async def convert_to_client(
        self, lead_id: str, customers: CustomerRepository
    ) -> Outcome[ClientOut]:
        """Create a client from the lead, then remove the lead.

        The client is inserted first; if that fails the lead is untouched.
        If the lead cannot be removed afterwards the client still exists
        and the outcome reports STORE_FAILURE.
        """
        owner = self.owner_id
        if not owner:
            return self._not_authenticated("convert")

        found = await self.get(lead_id)
        if not found.ok:
            return self._fail(found.error, found.message)
        lead = found.value

        created = await customers.create({
            "company_name": lead.name,
            "manager": lead.name,
            "notes": lead.notes,
            "classification": "Customer",
        })
        if not created.ok:
            return self._fail(created.error, "Failed to convert lead to client")

        removed = await self._delete_row(lead.id, owner)
        if not removed.ok:
            return self._fail(
                ErrorCode.STORE_FAILURE,
                "Failed to remove lead after conversion",
                value=created.value,
            )

        logger.info(f"Converted lead {lead.id} to client {created.value.id}")
        await self.list()
        self.notifier.notify("success", "Lead converted to client successfully")
        return created


REPOSITORIES: dict[ItemKind, type[EntityRepository]] = {
    ItemKind.CUSTOMER: CustomerRepository,
    ItemKind.TASK: TaskRepository,
    ItemKind.MEETING: MeetingRepository,
    ItemKind.INVOICE: InvoiceRepository,
    ItemKind.PROJECT: ProjectRepository,
    ItemKind.TEAM: TeamRepository,
    ItemKind.LEAD: LeadRepository,
    ItemKind.PAYMENT: PaymentRepository,
}

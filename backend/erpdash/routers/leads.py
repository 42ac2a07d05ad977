"""Lead-only routes.

Endpoints:
    POST /api/leads/{lead_id}/convert   Turn a lead into a client
"""

from fastapi import APIRouter, Depends, status

from erpdash.dependencies import get_customer_repository, get_lead_repository
from erpdash.middleware.exceptions import ERPException
from erpdash.schemas.client import ClientOut
from erpdash.services.entities import CustomerRepository, LeadRepository

router = APIRouter()


@router.post("/{lead_id}/convert", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
async def convert_lead(
    lead_id: str,
    leads: LeadRepository = Depends(get_lead_repository),
    customers: CustomerRepository = Depends(get_customer_repository),
):
    outcome = await leads.convert_to_client(lead_id, customers)
    if not outcome.ok:
        raise ERPException.from_outcome(outcome)
    return outcome.value

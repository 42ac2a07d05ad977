"""Trash routes for the signed-in user's ledger.

Endpoints:
    GET    /api/trash                      List trash entries
    POST   /api/trash/{item_id}/restore    Re-insert the record and drop the entry
    DELETE /api/trash/{item_id}            Permanently delete one entry
    DELETE /api/trash                      Empty the trash
"""

from fastapi import APIRouter, Depends

from erpdash.dependencies import get_ledger
from erpdash.middleware.exceptions import ERPException
from erpdash.schemas.trash import (
    ClearResult,
    PurgeResult,
    RestoreResult,
    TrashListResponse,
)
from erpdash.services.ledger import TrashLedger, table_for_kind

router = APIRouter()


@router.get("", response_model=TrashListResponse)
async def list_trash(ledger: TrashLedger = Depends(get_ledger)):
    items = ledger.list_entries()
    return TrashListResponse(items=items, total_count=len(items))


@router.post("/{item_id}/restore", response_model=RestoreResult)
async def restore_item(item_id: str, ledger: TrashLedger = Depends(get_ledger)):
    outcome = await ledger.restore_item(item_id)
    if not outcome.ok:
        raise ERPException.from_outcome(outcome)

    entry = outcome.value
    return RestoreResult(
        id=entry.id,
        kind=entry.kind,
        name=entry.name,
        table=table_for_kind(entry.kind),
        original_created_at=entry.original_created_at,
        original_updated_at=entry.original_updated_at,
    )


@router.delete("/{item_id}", response_model=PurgeResult)
async def purge_item(item_id: str, ledger: TrashLedger = Depends(get_ledger)):
    outcome = await ledger.purge_entry(item_id)
    if not outcome.ok:
        raise ERPException.from_outcome(outcome)
    return PurgeResult(id=item_id)


@router.delete("", response_model=ClearResult)
async def clear_trash(ledger: TrashLedger = Depends(get_ledger)):
    outcome = await ledger.clear_all()
    if not outcome.ok:
        raise ERPException.from_outcome(outcome)
    return ClearResult(purged_count=outcome.value)

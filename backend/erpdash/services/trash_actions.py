"""Move a live record into the trash.

Ordering matters: the ledger only ever hears about a record after the
live delete is confirmed, so a failed delete can never leave a ghost
entry behind.
"""

import logging

from erpdash.schemas.common import Outcome
from erpdash.schemas.trash import DeletedItem, DeletedItemCreate
from erpdash.services.ledger import TrashLedger
from erpdash.services.repository import EntityRepository

logger = logging.getLogger(__name__)


async def delete_to_trash(
    repository: EntityRepository,
    ledger: TrashLedger,
    entity_id: str,
) -> Outcome[DeletedItem | None]:
    """Delete the row, then capture its snapshot in the ledger.

    On success the outcome value is the new ledger entry. If the delete
    worked but the capture did not, the outcome is still ok (the row is
    gone) with value None and a message saying the trash copy was lost.
    """
    found = await repository.get(entity_id)
    if not found.ok:
        repository.notifier.notify("error", found.message)
        return Outcome.failure(found.error, found.message)
    entity = found.value

    deleted = await repository.delete(entity_id)
    if not deleted.ok:
        return Outcome.failure(deleted.error, deleted.message)

    captured = await ledger.add_entry(
        DeletedItemCreate(
            id=entity.id,
            name=repository.trash_label(entity),
            kind=repository.kind,
            payload=entity.model_dump(mode="json"),
        )
    )
    if not captured.ok:
        logger.error(
            f"{repository.label} {entity_id} was deleted but not captured in trash: {captured.message}"
        )
        return Outcome.success(None, message=f"{repository.label.capitalize()} deleted, but it could not be moved to trash")

    return Outcome.success(captured.value)

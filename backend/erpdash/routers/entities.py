"""CRUD routes shared by every entity kind.

Endpoints (per kind, mounted under /api/{kind-plural}):
    GET    /            List the caller's rows (empty without a token)
    POST   /            Create
    GET    /{id}        Fetch one
    PATCH  /{id}        Partial update
    DELETE /{id}        Delete and move to trash
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from erpdash.dependencies import get_ledger, repository_provider
from erpdash.middleware.exceptions import ERPException
from erpdash.schemas.trash import TrashedResult
from erpdash.services.entities import REPOSITORIES
from erpdash.services.ledger import TrashLedger
from erpdash.services.repository import EntityRepository
from erpdash.services.trash_actions import delete_to_trash


def build_entity_router(repo_cls: type[EntityRepository]) -> APIRouter:
    router = APIRouter()
    get_repository = repository_provider(repo_cls)
    create_schema: type[BaseModel] = repo_cls.create_schema
    update_schema: type[BaseModel] = repo_cls.update_schema
    out_schema: type[BaseModel] = repo_cls.out_schema

    @router.get("", response_model=list[out_schema])
    async def list_items(repo: EntityRepository = Depends(get_repository)):
        return await repo.list()

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    async def create_item(
        body: create_schema,
        repo: EntityRepository = Depends(get_repository),
    ):
        outcome = await repo.create(body)
        if not outcome.ok:
            raise ERPException.from_outcome(outcome)
        return outcome.value

    @router.get("/{item_id}", response_model=out_schema)
    async def get_item(item_id: str, repo: EntityRepository = Depends(get_repository)):
        outcome = await repo.get(item_id)
        if not outcome.ok:
            raise ERPException.from_outcome(outcome)
        return outcome.value

    @router.patch("/{item_id}", response_model=out_schema)
    async def update_item(
        item_id: str,
        body: update_schema,
        repo: EntityRepository = Depends(get_repository),
    ):
        outcome = await repo.update(item_id, body)
        if not outcome.ok:
            raise ERPException.from_outcome(outcome)
        return outcome.value

    @router.delete("/{item_id}", response_model=TrashedResult)
    async def delete_item(
        item_id: str,
        repo: EntityRepository = Depends(get_repository),
        ledger: TrashLedger = Depends(get_ledger),
    ):
        outcome = await delete_to_trash(repo, ledger, item_id)
        if not outcome.ok:
            raise ERPException.from_outcome(outcome)
        return TrashedResult(id=item_id, entry=outcome.value, message=outcome.message)

    return router


# URL segment per repository, e.g. "customers" -> CustomerRepository.
ENTITY_ROUTES: dict[str, type[EntityRepository]] = {
    f"{kind.value}s": repo_cls for kind, repo_cls in REPOSITORIES.items()
}

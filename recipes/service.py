"""
Recipe CRUD with ownership enforcement.

Reads are public.  Writes take the authenticated user id resolved by the
access guard; update and delete additionally require that user to be the
recipe's owner.  A missing recipe is reported before ownership is checked,
so an unknown id is a 404 for every caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from core.errors import ForbiddenError, NotFoundError
from database.store import DocumentCollection
from recipes.schemas import RecipeCreate, RecipeUpdate, to_wire

logger = logging.getLogger(__name__)


class RecipeService:
    def __init__(self, *, recipes: DocumentCollection) -> None:
        self.recipes = recipes

    async def list(self) -> List[Dict[str, Any]]:
        return [to_wire(r) for r in await self.recipes.find()]

    async def get_by_id(self, recipe_id: str) -> Dict[str, Any]:
        record = await self.recipes.find_by_id(recipe_id)
        if record is None:
            raise NotFoundError()
        return to_wire(record)

    async def create(self, payload: RecipeCreate, user_id: str) -> Dict[str, Any]:
        document = payload.to_store()
        document["owner_id"] = user_id
        record = await self.recipes.create(document)
        logger.info("Recipe %s created by %s", record["id"], user_id)
        return to_wire(record)

    async def _owned(self, recipe_id: str, user_id: str) -> Dict[str, Any]:
        record = await self.recipes.find_by_id(recipe_id)
        if record is None:
            raise NotFoundError()
        if record["owner_id"] != user_id:
            logger.info("User %s denied write on recipe %s", user_id, recipe_id)
            raise ForbiddenError()
        return record

    async def update(
        self,
        recipe_id: str,
        payload: RecipeUpdate,
        user_id: str,
    ) -> Dict[str, Any]:
        current = await self._owned(recipe_id, user_id)
        changes = payload.to_store()
        if not changes:
            return to_wire(current)
        record = await self.recipes.find_by_id_and_update(recipe_id, changes)
        if record is None:
            # deleted between the ownership check and the write
            raise NotFoundError()
        return to_wire(record)

    async def delete(self, recipe_id: str, user_id: str) -> Dict[str, Any]:
        await self._owned(recipe_id, user_id)
        record = await self.recipes.find_by_id_and_delete(recipe_id)
        if record is None:
            raise NotFoundError()
        logger.info("Recipe %s deleted by %s", recipe_id, user_id)
        return to_wire(record)

"""
Recipe request/response schemas and the record ↔ wire mapping.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# wire name -> store attribute
_WIRE_TO_STORE = {
    "name": "name",
    "ingredients": "ingredients",
    "instructions": "instructions",
    "imageUrl": "image_url",
    "cookingTime": "cooking_time",
}


class RecipeCreate(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Test Recipe"})
    ingredients: List[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["flour", "milk", "egg"]},
    )
    instructions: str = ""
    imageUrl: str = ""
    cookingTime: float = Field(default=0, ge=0, allow_inf_nan=False)

    def to_store(self) -> Dict[str, Any]:
        return {_WIRE_TO_STORE[k]: v for k, v in self.model_dump().items()}


class RecipeUpdate(BaseModel):
    """Partial update; fields left out keep their stored value.

    An explicit ``null`` is rejected rather than treated as "leave unchanged".
    """

    name: Optional[str] = Field(default=None, min_length=1)
    ingredients: Optional[List[str]] = None
    instructions: Optional[str] = None
    imageUrl: Optional[str] = None
    cookingTime: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def _no_explicit_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = sorted(k for k, v in data.items() if k in _WIRE_TO_STORE and v is None)
            if nulls:
                raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return data

    def to_store(self) -> Dict[str, Any]:
        changes = self.model_dump(exclude_unset=True)
        return {_WIRE_TO_STORE[k]: v for k, v in changes.items()}


class RecipeOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    ingredients: List[str]
    instructions: str
    imageUrl: str
    cookingTime: float
    ownerId: str


def to_wire(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "_id": record["id"],
        "name": record["name"],
        "ingredients": list(record.get("ingredients") or []),
        "instructions": record.get("instructions") or "",
        "imageUrl": record.get("image_url") or "",
        "cookingTime": record.get("cooking_time") or 0,
        "ownerId": record["owner_id"],
    }


class RecipeCreated(BaseModel):
    createdRecipe: RecipeOut


class RecipeUpdated(BaseModel):
    updatedRecipe: RecipeOut


class RecipeDeleted(BaseModel):
    message: str
    deletedRecipe: RecipeOut

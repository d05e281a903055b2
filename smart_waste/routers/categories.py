from typing import List

from fastapi import APIRouter, Depends

from ..api.deps import get_store
from ..core.errors import NotFoundError, ValidationError
from ..db.store import WasteStore
from ..models.schemas import CategoryIn, CategoryOut, ErrorResponse, MessageResponse

router = APIRouter(prefix="/api/categories", tags=["Categories"])

_NOT_FOUND = "Category not found"
_NAME_REQUIRED = "Category name is required"


# PUBLIC_INTERFACE
@router.get("", response_model=List[CategoryOut], summary="List categories")
def list_categories(store: WasteStore = Depends(get_store)) -> List[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in store.list_categories()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=CategoryOut,
    status_code=201,
    summary="Create category",
    description="Names are unique; a duplicate is reported as a database failure.",
    responses={
        400: {"model": ErrorResponse, "description": _NAME_REQUIRED},
        500: {"model": ErrorResponse, "description": "Database error, including duplicate names."},
    },
)
def create_category(payload: CategoryIn, store: WasteStore = Depends(get_store)) -> CategoryOut:
    if not payload.name:
        raise ValidationError(_NAME_REQUIRED)
    category = store.create_category(payload.name, payload.description, payload.recycling_guidelines)
    return CategoryOut.model_validate(category)


# PUBLIC_INTERFACE
@router.put(
    "/{category_id}",
    response_model=MessageResponse,
    summary="Replace category",
    responses={
        400: {"model": ErrorResponse, "description": _NAME_REQUIRED},
        404: {"model": ErrorResponse, "description": _NOT_FOUND},
    },
)
def update_category(
    category_id: int, payload: CategoryIn, store: WasteStore = Depends(get_store)
) -> MessageResponse:
    if not payload.name:
        raise ValidationError(_NAME_REQUIRED)
    changed = store.update_category(category_id, payload.name, payload.description, payload.recycling_guidelines)
    if changed == 0:
        raise NotFoundError(_NOT_FOUND)
    return MessageResponse(message="Category updated successfully")


# PUBLIC_INTERFACE
@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    summary="Delete category",
    description="Waste items that still name this category are left untouched.",
    responses={404: {"model": ErrorResponse, "description": _NOT_FOUND}},
)
def delete_category(category_id: int, store: WasteStore = Depends(get_store)) -> MessageResponse:
    if store.delete_category(category_id) == 0:
        raise NotFoundError(_NOT_FOUND)
    return MessageResponse(message="Category deleted successfully")

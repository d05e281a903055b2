from typing import List

from fastapi import APIRouter, Depends

from ..api.deps import get_blob_store, get_store
from ..core.errors import NotFoundError, ValidationError
from ..core.logger import get_logger
from ..db.store import WasteStore
from ..models.schemas import ErrorResponse, MessageResponse, WasteItemOut, WasteItemUpdate
from ..services.blob_store import BlobStore

logger = get_logger(__name__)
router = APIRouter(prefix="/api/waste-items", tags=["Waste Items"])

_NOT_FOUND = "Waste item not found"


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[WasteItemOut],
    summary="List waste items",
    description="Returns every waste item, newest first. No pagination.",
    responses={500: {"model": ErrorResponse, "description": "Database error."}},
)
def list_waste_items(store: WasteStore = Depends(get_store)) -> List[WasteItemOut]:
    return [WasteItemOut.model_validate(it) for it in store.list_waste_items()]


# PUBLIC_INTERFACE
@router.get(
    "/{item_id}",
    response_model=WasteItemOut,
    summary="Get waste item by id",
    responses={404: {"model": ErrorResponse, "description": _NOT_FOUND}},
)
def get_waste_item(item_id: int, store: WasteStore = Depends(get_store)) -> WasteItemOut:
    item = store.get_waste_item(item_id)
    if item is None:
        raise NotFoundError(_NOT_FOUND)
    return WasteItemOut.model_validate(item)


# PUBLIC_INTERFACE
@router.put(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Correct a waste item",
    description="Replaces category and classification_result. The timestamp is never changed.",
    responses={
        400: {"model": ErrorResponse, "description": "A required field is missing."},
        404: {"model": ErrorResponse, "description": _NOT_FOUND},
    },
)
def update_waste_item(
    item_id: int, payload: WasteItemUpdate, store: WasteStore = Depends(get_store)
) -> MessageResponse:
    if not payload.category or not payload.classification_result:
        raise ValidationError("Category and classification_result are required")
    if store.update_waste_item(item_id, payload.category, payload.classification_result) == 0:
        raise NotFoundError(_NOT_FOUND)
    return MessageResponse(message="Waste item updated successfully")


# PUBLIC_INTERFACE
@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    summary="Delete a waste item",
    description=(
        "Removes the stored image (best effort) and then the row. The two steps are not "
        "transactional: a failure between them can leave a row whose file is gone."
    ),
    responses={404: {"model": ErrorResponse, "description": _NOT_FOUND}},
)
def delete_waste_item(
    item_id: int,
    store: WasteStore = Depends(get_store),
    blobs: BlobStore = Depends(get_blob_store),
) -> MessageResponse:
    item = store.get_waste_item(item_id)
    if item is None:
        raise NotFoundError(_NOT_FOUND)
    removed = blobs.remove(item.image_path)
    store.delete_waste_item(item_id)
    logger.info("Deleted waste item", extra={"id": item_id, "file_removed": removed})
    return MessageResponse(message="Waste item deleted successfully")

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from ..api.deps import get_app_settings, get_blob_store, get_classifier, get_store
from ..core.config import Settings
from ..core.errors import AppError, UploadError, ValidationError
from ..core.logger import get_logger
from ..db.store import WasteStore
from ..models.schemas import ClassifyResponse, ErrorResponse
from ..services.blob_store import BlobStore
from ..services.classifier import Classifier

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["Classification"])


def _require_image(image: Optional[UploadFile]) -> UploadFile:
    if image is None:
        logger.info("No file received")
        raise ValidationError("No image uploaded")
    if not (image.content_type or "").startswith("image/"):
        logger.info("Rejected non-image upload", extra={"content_type": image.content_type})
        raise UploadError("Only images are allowed")
    return image


# PUBLIC_INTERFACE
@router.post(
    "/classify",
    response_model=ClassifyResponse,
    summary="Upload and classify an image",
    description=(
        "Stores the multipart `image` part, classifies it and records the result.\n\n"
        "If saving the record fails the stored file is left in place."
    ),
    responses={
        200: {"description": "Image classified and recorded."},
        400: {"model": ErrorResponse, "description": "No image, or not an image."},
        500: {"model": ErrorResponse, "description": "Classification could not be saved."},
    },
)
def classify_image(
    image: Optional[UploadFile] = File(default=None, description="Image file to classify"),
    store: WasteStore = Depends(get_store),
    blobs: BlobStore = Depends(get_blob_store),
    classifier: Classifier = Depends(get_classifier),
    settings: Settings = Depends(get_app_settings),
) -> ClassifyResponse:
    upload = _require_image(image)
    blob = blobs.save(upload.file, upload.filename)
    logger.info(
        "Received file",
        extra={"original_name": upload.filename, "content_type": upload.content_type, "path": blob.path},
    )

    if not blobs.exists(blob.path):
        logger.info("File does not exist at path", extra={"path": blob.path})
        raise ValidationError("Uploaded file not found")

    try:
        classification = classifier.classify(blob.path)
    except Exception as exc:
        logger.error("Image processing error", exc_info=exc)
        raise AppError("Failed to process image") from exc

    item = store.create_waste_item(blob.path, classification)
    logger.info(
        "Classified upload",
        extra={"id": item.id, "category": classification.category, "confidence": classification.confidence},
    )
    return ClassifyResponse(
        id=item.id,
        imageUrl=f"{settings.public_base_url()}{settings.upload_url_prefix()}/{blob.name}",
        classification=classification,
        timestamp=item.timestamp,
    )

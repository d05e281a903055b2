"""
Capture session: the client-side view state around one classify request.

State is idle -> loading -> result, or idle -> loading -> idle with an alert
when the submission fails. A second submit while one is loading is refused;
nothing is retried.
"""

import enum
import threading
from typing import Optional

from ..core.logger import get_logger
from ..models.schemas import ClassifyResponse
from .api_client import ApiError, WasteApiClient
from .config import ClientSettings, get_client_settings
from .images import SOURCES, ImagePreparationError, prepare_image

logger = get_logger(__name__)

FAILURE_ALERT = "Failed to classify image. Please try again."


class SessionState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"


class SessionBusyError(Exception):
    """A classify request is already in flight."""


class CameraUnavailableError(Exception):
    """Camera capture was requested but permission was not granted."""


# PUBLIC_INTERFACE
class CaptureSession:
    """Prepares an image, submits it and keeps what the user should see."""

    def __init__(
        self,
        api: WasteApiClient,
        camera_available: bool = True,
        settings: Optional[ClientSettings] = None,
    ):
        self.api = api
        self.camera_available = camera_available
        self.settings = settings or get_client_settings()
        self.state = SessionState.IDLE
        self.result: Optional[ClassifyResponse] = None
        self.image_path: Optional[str] = None
        self.alert: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def is_loading(self) -> bool:
        return self.state is SessionState.LOADING

    def _begin(self, source: str) -> None:
        if source not in SOURCES:
            raise ValueError(f"Unknown image source: {source!r}")
        with self._lock:
            if self.is_loading:
                raise SessionBusyError("A classification is already in progress")
            if source == "camera" and not self.camera_available:
                raise CameraUnavailableError("Camera permission was not granted")
            self.state = SessionState.LOADING
            self.alert = None

    def submit(self, path: str, source: str = "gallery") -> Optional[ClassifyResponse]:
        """Classify the image at path.

        Returns the result, or None after a failure (``alert`` then holds the
        message to show and the session is idle again).
        """
        self._begin(source)
        try:
            payload = prepare_image(
                path,
                source=source,
                quality=self.settings.JPEG_QUALITY,
                max_dimension=self.settings.MAX_DIMENSION,
            )
            result = self.api.classify(payload)
        except (ApiError, ImagePreparationError) as exc:
            logger.error("Classification failed", extra={"path": path, "error": str(exc)})
            self.alert = FAILURE_ALERT
            self.state = SessionState.IDLE
            return None
        except Exception:
            self.state = SessionState.IDLE
            raise
        self.image_path = path
        self.result = result
        self.state = SessionState.RESULT
        return result


# PUBLIC_INTERFACE
def render_result(result: ClassifyResponse) -> str:
    """Format a classification the way the result panel shows it."""
    c = result.classification
    return "\n".join(
        [
            f"Category: {c.category}",
            f"Confidence: {c.confidence * 100:.0f}%",
            c.description,
        ]
    )

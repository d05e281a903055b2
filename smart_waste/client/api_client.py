"""
HTTP client for the Smart Waste API, built on httpx.

Every non-2xx response raises ApiError with the message taken from the
server's {"error": ...} body. Transport failures raise ApiError with no status.
"""

from typing import Any, Dict, List, Optional

import httpx

from ..core.logger import get_logger
from ..models.schemas import CategoryOut, ClassifyResponse, WasteItemOut
from .config import ClientSettings, get_client_settings

logger = get_logger(__name__)


# PUBLIC_INTERFACE
class ApiError(Exception):
    """A request to the API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


# PUBLIC_INTERFACE
class WasteApiClient:
    """Thin wrapper over the REST endpoints.

    Pass ``http`` to reuse an existing httpx.Client (its base_url is used as is).
    """

    def __init__(self, settings: Optional[ClientSettings] = None, http: Optional[httpx.Client] = None):
        self.settings = settings or get_client_settings()
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=self.settings.API_BASE_URL,
            timeout=self.settings.TIMEOUT,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "WasteApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("API request failed", extra={"method": method, "path": path, "error": str(exc)})
            raise ApiError(f"Could not reach the server: {exc}") from exc
        if response.is_error:
            message = _error_message(response)
            logger.info(
                "API returned an error",
                extra={"method": method, "path": path, "status": response.status_code, "error": message},
            )
            raise ApiError(message, status_code=response.status_code)
        return response.json()

    # Health
    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/api/health")

    # Classification
    def classify(
        self, image: bytes, filename: str = "photo.jpg", content_type: str = "image/jpeg"
    ) -> ClassifyResponse:
        data = self._request("POST", "/api/classify", files={"image": (filename, image, content_type)})
        return ClassifyResponse.model_validate(data)

    # Waste items
    def list_waste_items(self) -> List[WasteItemOut]:
        return [WasteItemOut.model_validate(row) for row in self._request("GET", "/api/waste-items")]

    def get_waste_item(self, item_id: int) -> WasteItemOut:
        return WasteItemOut.model_validate(self._request("GET", f"/api/waste-items/{item_id}"))

    def update_waste_item(self, item_id: int, category: str, classification_result: str) -> str:
        body = {"category": category, "classification_result": classification_result}
        return self._request("PUT", f"/api/waste-items/{item_id}", json=body)["message"]

    def delete_waste_item(self, item_id: int) -> str:
        return self._request("DELETE", f"/api/waste-items/{item_id}")["message"]

    # Categories
    def list_categories(self) -> List[CategoryOut]:
        return [CategoryOut.model_validate(row) for row in self._request("GET", "/api/categories")]

    def create_category(
        self, name: str, description: Optional[str] = None, recycling_guidelines: Optional[str] = None
    ) -> CategoryOut:
        body = {"name": name, "description": description, "recycling_guidelines": recycling_guidelines}
        return CategoryOut.model_validate(self._request("POST", "/api/categories", json=body))

    def update_category(
        self,
        category_id: int,
        name: str,
        description: Optional[str] = None,
        recycling_guidelines: Optional[str] = None,
    ) -> str:
        body = {"name": name, "description": description, "recycling_guidelines": recycling_guidelines}
        return self._request("PUT", f"/api/categories/{category_id}", json=body)["message"]

    def delete_category(self, category_id: int) -> str:
        return self._request("DELETE", f"/api/categories/{category_id}")["message"]

"""
FastAPI dependencies exposing the objects built in create_app().

The store, blob store, classifier and settings live on ``app.state``; routers
ask for them through these accessors so tests can swap any of them.
"""

from fastapi import Request

from ..core.config import Settings
from ..db.store import WasteStore
from ..services.blob_store import BlobStore
from ..services.classifier import Classifier


# PUBLIC_INTERFACE
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# PUBLIC_INTERFACE
def get_store(request: Request) -> WasteStore:
    return request.app.state.store


# PUBLIC_INTERFACE
def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


# PUBLIC_INTERFACE
def get_classifier(request: Request) -> Classifier:
    return request.app.state.classifier

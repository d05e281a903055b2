import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from smart_waste.api.main import create_app
from smart_waste.core.config import Settings


def make_jpeg(size=(64, 48), color="green") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=color).save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'waste.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        PUBLIC_BASE_URL="http://testserver",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(app, client):
    # Opened by the app lifespan once the client is running.
    return app.state.store


@pytest.fixture
def upload_dir(settings):
    return settings.UPLOAD_DIR


@pytest.fixture
def jpeg_bytes():
    return make_jpeg()


@pytest.fixture
def upload(client, jpeg_bytes):
    def _upload(name="photo.jpg", content=None, content_type="image/jpeg"):
        return client.post("/api/classify", files={"image": (name, content or jpeg_bytes, content_type)})

    return _upload

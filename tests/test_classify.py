import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from smart_waste.api.main import create_app
from smart_waste.models.schemas import Classification
from smart_waste.services.classifier import WASTE_CATEGORIES


class FixedClassifier:
    def __init__(self):
        self.seen = []

    def classify(self, image_ref):
        self.seen.append(image_ref)
        return Classification(category="glass", confidence=0.9, description="A glass jar.")


def test_classify_stores_file_and_record(client, upload, upload_dir, jpeg_bytes):
    response = upload()
    assert response.status_code == 200
    body = response.json()

    assert set(body) == {"id", "imageUrl", "classification", "timestamp"}
    assert body["classification"]["category"] in WASTE_CATEGORIES
    assert 0.5 <= body["classification"]["confidence"] <= 1.0
    assert body["classification"]["description"] == (
        f"This appears to be {body['classification']['category']} waste based on visual analysis."
    )
    assert body["imageUrl"].startswith("http://testserver/uploads/")
    assert body["imageUrl"].endswith("-photo.jpg")

    stored = os.listdir(upload_dir)
    assert len(stored) == 1

    item = client.get(f"/api/waste-items/{body['id']}").json()
    assert item["category"] == body["classification"]["category"]
    assert item["confidence"] == body["classification"]["confidence"]
    assert item["classification_result"] == body["classification"]["description"]
    assert os.path.basename(item["image_path"]) == stored[0]


def test_confidence_and_category_stay_in_range(upload):
    for _ in range(25):
        classification = upload().json()["classification"]
        assert classification["category"] in WASTE_CATEGORIES
        assert 0.5 <= classification["confidence"] <= 1.0


def test_stored_image_is_served(client, upload, jpeg_bytes):
    image_url = upload().json()["imageUrl"]
    response = client.get(image_url.replace("http://testserver", ""))
    assert response.status_code == 200
    assert response.content == jpeg_bytes


def test_missing_image_part_is_rejected(client):
    response = client.post("/api/classify")
    assert response.status_code == 400
    assert response.json() == {"error": "No image uploaded"}


def test_other_form_fields_without_image_are_rejected(client):
    response = client.post("/api/classify", data={"note": "bottle"})
    assert response.status_code == 400
    assert response.json() == {"error": "No image uploaded"}


def test_non_image_upload_is_rejected(client, upload, upload_dir):
    response = upload(name="notes.txt", content=b"not an image", content_type="text/plain")
    assert response.status_code == 400
    assert response.json() == {"error": "Only images are allowed"}
    assert client.get("/api/waste-items").json() == []
    assert not os.path.exists(upload_dir) or os.listdir(upload_dir) == []


def test_injected_classifier_is_used(settings, jpeg_bytes):
    classifier = FixedClassifier()
    app = create_app(settings, classifier=classifier)
    with TestClient(app) as client:
        response = client.post("/api/classify", files={"image": ("jar.png", jpeg_bytes, "image/png")})
        assert response.status_code == 200
        assert response.json()["classification"] == {
            "category": "glass",
            "confidence": 0.9,
            "description": "A glass jar.",
        }
        assert len(classifier.seen) == 1
        assert classifier.seen[0].endswith("-jar.png")


def test_insert_failure_returns_500_and_keeps_file(client, store, upload, upload_dir):
    with store.engine.begin() as conn:
        conn.execute(text("DROP TABLE waste_items"))

    response = upload()
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save classification"}
    assert len(os.listdir(upload_dir)) == 1


@pytest.mark.parametrize("name", ["../../etc/passwd.jpg", "my photo (1).jpg"])
def test_uploaded_names_are_sanitised(upload, upload_dir, name):
    assert upload(name=name).status_code == 200
    (stored,) = os.listdir(upload_dir)
    assert "/" not in stored and " " not in stored and ".." not in stored


def _has_utc_offset(value):
    return value.endswith("Z") or value.endswith("+00:00")


def test_classify_timestamp_is_utc(client, upload):
    body = upload().json()
    assert _has_utc_offset(body["timestamp"])
    assert datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00")).tzinfo is not None

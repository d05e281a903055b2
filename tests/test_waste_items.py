import os
import random
from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from smart_waste.models.sql_models import WasteItem


def _insert_items(store, timestamps):
    with Session(store.engine) as db:
        items = [
            WasteItem(
                image_path=f"uploads/{n}.jpg",
                classification_result=f"item {n}",
                confidence=0.75,
                category="paper",
                timestamp=ts,
            )
            for n, ts in enumerate(timestamps)
        ]
        db.add_all(items)
        db.commit()
        return [(it.id, it.timestamp) for it in items]


def test_list_is_empty_initially(client):
    response = client.get("/api/waste-items")
    assert response.status_code == 200
    assert response.json() == []


def test_list_is_newest_first_for_any_insertion_order(client, store):
    base = datetime(2024, 5, 1, 12, 0, 0)
    timestamps = [base + timedelta(minutes=m) for m in range(8)]
    random.Random(7).shuffle(timestamps)
    inserted = _insert_items(store, timestamps)

    rows = client.get("/api/waste-items").json()
    expected = [item_id for item_id, _ in sorted(inserted, key=lambda pair: pair[1], reverse=True)]
    assert [row["id"] for row in rows] == expected


def test_list_includes_uploads_newest_first(client, upload):
    first = upload().json()["id"]
    second = upload().json()["id"]
    rows = client.get("/api/waste-items").json()
    assert [row["id"] for row in rows] == [second, first]


def test_get_missing_item_is_404(client):
    response = client.get("/api/waste-items/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Waste item not found"}


def test_get_with_non_numeric_id_is_400(client):
    response = client.get("/api/waste-items/abc")
    assert response.status_code == 400
    assert "error" in response.json()


def test_update_changes_only_category_and_result(client, upload):
    created = upload().json()
    before = client.get(f"/api/waste-items/{created['id']}").json()

    response = client.put(
        f"/api/waste-items/{created['id']}",
        json={"category": "metal", "classification_result": "Aluminium can"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Waste item updated successfully"}

    after = client.get(f"/api/waste-items/{created['id']}").json()
    assert after["category"] == "metal"
    assert after["classification_result"] == "Aluminium can"
    assert after["timestamp"] == before["timestamp"]
    assert after["confidence"] == before["confidence"]
    assert after["image_path"] == before["image_path"]


def test_update_missing_item_is_404_and_changes_nothing(client, upload):
    upload()
    before = client.get("/api/waste-items").json()

    response = client.put("/api/waste-items/999", json={"category": "metal", "classification_result": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Waste item not found"}
    assert client.get("/api/waste-items").json() == before


@pytest.mark.parametrize(
    "body",
    [
        {"classification_result": "Aluminium can"},
        {"category": "metal"},
        {"category": "", "classification_result": "Aluminium can"},
        {},
    ],
)
def test_update_requires_both_fields(client, upload, body):
    item_id = upload().json()["id"]
    before = client.get(f"/api/waste-items/{item_id}").json()

    response = client.put(f"/api/waste-items/{item_id}", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Category and classification_result are required"}
    assert client.get(f"/api/waste-items/{item_id}").json() == before


def test_update_with_invalid_json_is_400(client, upload):
    item_id = upload().json()["id"]
    response = client.put(
        f"/api/waste-items/{item_id}", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_delete_twice(client, upload, upload_dir):
    item_id = upload().json()["id"]
    image_path = client.get(f"/api/waste-items/{item_id}").json()["image_path"]
    assert os.path.exists(image_path)

    first = client.delete(f"/api/waste-items/{item_id}")
    assert first.status_code == 200
    assert first.json() == {"message": "Waste item deleted successfully"}
    assert not os.path.exists(image_path)
    assert client.get(f"/api/waste-items/{item_id}").status_code == 404

    second = client.delete(f"/api/waste-items/{item_id}")
    assert second.status_code == 404
    assert second.json() == {"error": "Waste item not found"}


def test_delete_tolerates_missing_file(client, upload):
    item_id = upload().json()["id"]
    os.remove(client.get(f"/api/waste-items/{item_id}").json()["image_path"])

    response = client.delete(f"/api/waste-items/{item_id}")
    assert response.status_code == 200
    assert client.get("/api/waste-items").json() == []


def test_item_timestamps_carry_utc_offset(client, upload):
    item_id = upload().json()["id"]
    listed = client.get("/api/waste-items").json()[0]["timestamp"]
    fetched = client.get(f"/api/waste-items/{item_id}").json()["timestamp"]
    for value in (listed, fetched):
        assert value.endswith("Z") or value.endswith("+00:00")

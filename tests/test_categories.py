from fastapi.testclient import TestClient

from smart_waste.api.main import create_app

SEEDED = ["plastic", "paper", "metal", "glass", "organic"]


def _names(client):
    return [c["name"] for c in client.get("/api/categories").json()]


def test_categories_are_seeded_at_startup(client):
    categories = client.get("/api/categories").json()
    assert [c["name"] for c in categories] == SEEDED
    plastic = categories[0]
    assert plastic["description"] == "Plastic waste materials"
    assert plastic["recycling_guidelines"].startswith("Rinse containers before recycling.")


def test_seeding_is_idempotent_across_restarts(settings):
    for _ in range(3):
        app = create_app(settings)
        with TestClient(app) as restarted:
            assert _names(restarted) == SEEDED
            assert app.state.store.seed_categories() == 0


def test_create_category(client):
    response = client.post(
        "/api/categories",
        json={"name": "e-waste", "description": "Electronics", "recycling_guidelines": "Use a drop-off point."},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["name"] == "e-waste"
    assert body["description"] == "Electronics"
    assert body["recycling_guidelines"] == "Use a drop-off point."
    assert _names(client)[-1] == "e-waste"


def test_create_category_optional_fields_default_to_null(client):
    body = client.post("/api/categories", json={"name": "textiles"}).json()
    assert body["description"] is None
    assert body["recycling_guidelines"] is None


def test_create_category_requires_name(client):
    response = client.post("/api/categories", json={"description": "nameless"})
    assert response.status_code == 400
    assert response.json() == {"error": "Category name is required"}


def test_duplicate_category_name_is_rejected(client):
    response = client.post("/api/categories", json={"name": "plastic"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create category"}
    assert len(_names(client)) == len(SEEDED)


def test_update_category(client):
    response = client.put(
        "/api/categories/1", json={"name": "plastics", "recycling_guidelines": "Check the resin code."}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Category updated successfully"}

    updated = client.get("/api/categories").json()[0]
    assert updated["name"] == "plastics"
    assert updated["description"] is None
    assert updated["recycling_guidelines"] == "Check the resin code."


def test_update_category_requires_name(client):
    response = client.put("/api/categories/1", json={"description": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Category name is required"}


def test_update_missing_category_is_404(client):
    response = client.put("/api/categories/999", json={"name": "anything"})
    assert response.status_code == 404
    assert response.json() == {"error": "Category not found"}


def test_update_to_existing_name_fails(client):
    response = client.put("/api/categories/1", json={"name": "paper"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to update category"}


def test_delete_category_leaves_waste_items(client, upload):
    item_id = upload().json()["id"]
    category = client.get(f"/api/waste-items/{item_id}").json()["category"]
    category_id = SEEDED.index(category) + 1

    response = client.delete(f"/api/categories/{category_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Category deleted successfully"}
    assert category not in _names(client)
    assert client.get(f"/api/waste-items/{item_id}").json()["category"] == category


def test_delete_missing_category_is_404(client):
    response = client.delete("/api/categories/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Category not found"}

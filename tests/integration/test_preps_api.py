"""
Integration tests for Preps API.

Tests the full prep recording flow including:
- Ingredient classification against the base recipe
- Stored change summaries
- Update restrictions and 404 handling
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.models import Unit
from tests.factories import create_ingredient, create_prep, create_recipe


@pytest.fixture
def pancakes(db: Session):
    flour = create_ingredient(db, name="flour")
    sugar = create_ingredient(db, name="sugar")
    milk = create_ingredient(db, name="milk")
    recipe = create_recipe(
        db,
        ingredients=[(flour, "100", Unit.GRAM), (sugar, "50", Unit.GRAM)],
        name="Pancakes",
        prep_time_minutes=10,
        cook_time_minutes=20,
    )
    return {"recipe": recipe, "flour": flour, "sugar": sugar, "milk": milk}


def _prep_payload(pancakes, ingredients, **extra):
    payload = {
        "recipe_id": pancakes["recipe"].id,
        "user_id": "cook-1",
        "steps": [{"order": 1, "description": "Whisk and fry"}],
        "ingredients": ingredients,
    }
    payload.update(extra)
    return payload


class TestCreatePrep:
    """Tests for POST /api/preps."""

    def test_create_prep_with_changes(self, client: TestClient, pancakes):
        response = client.post(
            "/api/preps",
            json=_prep_payload(
                pancakes,
                [
                    {"ingredient_id": pancakes["flour"].id, "quantity": 150, "unit": "gram"},
                    {"ingredient_id": pancakes["milk"].id, "quantity": 100, "unit": "milliliter"},
                ],
            ),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["recipe_name"] == "Pancakes"
        assert [i["status"] for i in data["ingredients"]] == ["modified", "added"]
        assert data["change_summary"] == (
            "Changes made:\n"
            "- Modified: flour (100 g → 150 g)\n"
            "- Addition: added milk\n"
            "- Omission: removed sugar"
        )

    def test_create_prep_without_changes(self, client: TestClient, pancakes):
        response = client.post(
            "/api/preps",
            json=_prep_payload(
                pancakes,
                [
                    {"ingredient_id": pancakes["flour"].id, "quantity": "100.00", "unit": "gram"},
                    {"ingredient_id": pancakes["sugar"].id, "quantity": 50, "unit": "gram"},
                ],
            ),
        )

        assert response.status_code == 201
        data = response.json()
        assert {i["status"] for i in data["ingredients"]} == {"kept"}
        assert data["change_summary"] == "No changes made from original recipe."

    def test_create_prep_records_timing(self, client: TestClient, pancakes):
        response = client.post(
            "/api/preps",
            json=_prep_payload(
                pancakes,
                [
                    {"ingredient_id": pancakes["flour"].id, "quantity": 100, "unit": "gram"},
                    {"ingredient_id": pancakes["sugar"].id, "quantity": 50, "unit": "gram"},
                ],
                prep_time_minutes=5,
            ),
        )

        assert response.status_code == 201
        assert response.json()["change_summary"] == (
            "Changes made:\n- Timing: prep time decreased by 5 min"
        )

    def test_create_prep_unknown_recipe(self, client: TestClient):
        response = client.post(
            "/api/preps",
            json={"recipe_id": 999999, "user_id": "cook-1", "ingredients": []},
        )

        assert response.status_code == 404
        assert "999999" in response.json()["detail"]

    def test_create_prep_unknown_ingredient(self, client: TestClient, pancakes):
        response = client.post(
            "/api/preps",
            json=_prep_payload(
                pancakes, [{"ingredient_id": 999999, "quantity": 1, "unit": "whole"}]
            ),
        )

        assert response.status_code == 400
        assert "Unknown ingredient ids" in response.json()["detail"]

    @pytest.mark.parametrize(
        "ingredient",
        [
            {"ingredient_id": 1, "quantity": 0, "unit": "gram"},
            {"ingredient_id": 1, "quantity": 1, "unit": "cup"},
        ],
    )
    def test_create_prep_invalid_ingredient_payload(
        self, client: TestClient, pancakes, ingredient
    ):
        response = client.post("/api/preps", json=_prep_payload(pancakes, [ingredient]))

        assert response.status_code == 422

    def test_quantity_with_extra_decimals_rejected(self, client: TestClient, pancakes):
        response = client.post(
            "/api/preps",
            json=_prep_payload(
                pancakes,
                [{"ingredient_id": pancakes["flour"].id, "quantity": "1.005", "unit": "gram"}],
            ),
        )

        assert response.status_code == 422

    def test_create_prep_negative_time_rejected(self, client: TestClient, pancakes):
        response = client.post(
            "/api/preps", json=_prep_payload(pancakes, [], cook_time_minutes=-1)
        )

        assert response.status_code == 422


class TestUpdatePrep:
    """Tests for PUT /api/preps/{id}."""

    def test_update_prep_recomputes(self, client: TestClient, pancakes):
        created = client.post(
            "/api/preps",
            json=_prep_payload(
                pancakes,
                [{"ingredient_id": pancakes["milk"].id, "quantity": 1, "unit": "whole"}],
            ),
        ).json()

        response = client.put(
            f"/api/preps/{created['id']}",
            json=_prep_payload(
                pancakes,
                [
                    {"ingredient_id": pancakes["flour"].id, "quantity": 100, "unit": "gram"},
                    {"ingredient_id": pancakes["sugar"].id, "quantity": 50, "unit": "gram"},
                ],
                summary_notes="Back to basics",
            ),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["summary_notes"] == "Back to basics"
        assert data["change_summary"] == "No changes made from original recipe."

    def test_update_prep_cannot_change_recipe(self, client: TestClient, db: Session, pancakes):
        prep = create_prep(db, pancakes["recipe"])
        other = create_recipe(db)

        response = client.put(
            f"/api/preps/{prep.id}",
            json={"recipe_id": other.id, "user_id": "cook-1", "ingredients": []},
        )

        assert response.status_code == 400

    def test_update_missing_prep(self, client: TestClient, pancakes):
        response = client.put("/api/preps/999999", json=_prep_payload(pancakes, []))

        assert response.status_code == 404


class TestPrepQueries:
    """Tests for prep retrieval and deletion."""

    def test_get_prep(self, client: TestClient, db: Session, pancakes):
        prep = create_prep(db, pancakes["recipe"], summary_notes="Fluffy")

        response = client.get(f"/api/preps/{prep.id}")

        assert response.status_code == 200
        assert response.json()["summary_notes"] == "Fluffy"

    def test_get_missing_prep(self, client: TestClient):
        assert client.get("/api/preps/999999").status_code == 404

    def test_list_recipe_preps(self, client: TestClient, db: Session, pancakes):
        create_prep(db, pancakes["recipe"])
        create_prep(db, pancakes["recipe"])

        response = client.get(f"/api/preps/recipe/{pancakes['recipe'].id}")

        assert response.status_code == 200
        preps = response.json()["preps"]
        assert len(preps) == 2
        assert all(p["recipe_name"] == "Pancakes" for p in preps)

    def test_list_preps_of_missing_recipe(self, client: TestClient):
        assert client.get("/api/preps/recipe/999999").status_code == 404

    def test_delete_prep(self, client: TestClient, db: Session, pancakes):
        prep = create_prep(db, pancakes["recipe"])

        response = client.delete(f"/api/preps/{prep.id}")

        assert response.status_code == 200
        assert client.get(f"/api/preps/{prep.id}").status_code == 404

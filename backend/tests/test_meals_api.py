"""
Tests for the public /api/meals and /api/foods passthrough routes.
"""
from unittest.mock import AsyncMock, patch

from chefai.api import routes_foods, routes_meals
from chefai.services.errors import UpstreamError


class TestMealsRoutes:

    def test_search(self, client):
        found = {"meals": [{"id": "1", "name": "Arrabiata"}]}
        with patch.object(routes_meals.mealdb, "search_meals", AsyncMock(return_value=found)) as mock:
            response = client.get("/api/meals/search", params={"q": "arrabiata"})

        assert response.status_code == 200
        assert response.json() == found
        mock.assert_awaited_once_with("arrabiata")

    def test_search_requires_query(self, client):
        assert client.get("/api/meals/search").status_code == 422

    def test_meal_not_found(self, client):
        with patch.object(routes_meals.mealdb, "get_meal_by_id", AsyncMock(return_value=None)):
            assert client.get("/api/meals/99999").status_code == 404

    def test_random_is_not_treated_as_id(self, client):
        with patch.object(routes_meals.mealdb, "get_random_meal", AsyncMock(return_value={"id": "7"})):
            response = client.get("/api/meals/random")

        assert response.json() == {"id": "7"}

    def test_categories(self, client):
        with patch.object(routes_meals.mealdb, "get_categories", AsyncMock(return_value=[{"strCategory": "Beef"}])):
            response = client.get("/api/meals/categories")

        assert response.json() == {"categories": [{"strCategory": "Beef"}]}

    def test_by_category(self, client):
        with patch.object(routes_meals.mealdb, "get_meals_by_category", AsyncMock(return_value={"meals": []})) as mock:
            client.get("/api/meals/category/Seafood")

        mock.assert_awaited_once_with("Seafood")

    def test_upstream_failure(self, client):
        with patch.object(routes_meals.mealdb, "search_meals", AsyncMock(side_effect=UpstreamError("mealdb", "x"))):
            response = client.get("/api/meals/search", params={"q": "x"})

        assert response.status_code == 500


class TestFoodsRoutes:

    def test_search(self, client):
        with patch.object(routes_foods.usda, "search_foods", AsyncMock(return_value={"totalHits": 0, "foods": []})) as mock:
            response = client.get("/api/foods/search", params={"q": "apple"})

        assert response.status_code == 200
        mock.assert_awaited_once_with("apple", data_type="Foundation", page_size=10)

    def test_details(self, client):
        with patch.object(routes_foods.usda, "get_food_details", AsyncMock(return_value={"fdcId": 5})) as mock:
            response = client.get("/api/foods/5")

        assert response.json() == {"fdcId": 5}
        mock.assert_awaited_once_with(5)

    def test_details_upstream_failure(self, client):
        with patch.object(routes_foods.usda, "get_food_details", AsyncMock(side_effect=UpstreamError("usda", "x"))):
            assert client.get("/api/foods/5").status_code == 500


def test_root(client):
    assert client.get("/").json() == {"status": "ok"}

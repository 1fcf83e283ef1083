from fastapi.testclient import TestClient
from pydantic import BaseModel

from app.core.exceptions import ConfigurationError, ResourceNotFoundError


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "HTTP_ERROR"
    assert "message" in data


def test_validation_error_structure(app):
    class Item(BaseModel):
        name: str
        price: int

    @app.post("/test-validation")
    def create_item(item: Item):
        return item

    response = TestClient(app).post("/test-validation", json={"name": "foo", "price": "invalid"})
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["details"][0]["loc"] == ["body", "price"]
    assert data["message"] == data["details"][0]["msg"]


def test_custom_exception(app):
    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Item not found")

    response = TestClient(app).get("/test-custom-error")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Item not found",
        "code": "NOT_FOUND",
        "details": None,
    }


def test_configuration_error_maps_to_500(app):
    @app.get("/test-config-error")
    def trigger_config_error():
        raise ConfigurationError("JWT_SECRET is not configured")

    response = TestClient(app).get("/test-config-error")
    assert response.status_code == 500
    assert response.json()["code"] == "CONFIGURATION_ERROR"


def test_unexpected_exception_is_generic(app):
    @app.get("/test-crash")
    def crash():
        raise RuntimeError("boom")

    response = TestClient(app, raise_server_exceptions=False).get("/test-crash")
    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "INTERNAL_ERROR"


def test_server_side_errors_hide_their_detail(app):
    @app.get("/test-config-detail")
    def trigger_config_error():
        raise ConfigurationError("TWILIO_AUTH_TOKEN is required")

    data = TestClient(app).get("/test-config-detail").json()
    assert "TWILIO" not in data["message"]
    assert data["details"] is None

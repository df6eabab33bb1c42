"""Tests for the API documentation endpoints."""

from image_checker import Config, create_app


def test_api_doc_describes_endpoints(client):
    response = client.get("/api-doc.json")

    assert response.status_code == 200
    doc = response.get_json()
    assert doc["openapi"].startswith("3.")
    assert set(doc["paths"]) == {"/health", "/exists"}
    (param,) = doc["paths"]["/exists"]["get"]["parameters"]
    assert param["name"] == "image"
    assert param["in"] == "query"
    assert param["required"] is True
    assert set(doc["paths"]["/exists"]["get"]["responses"]) >= {"200", "404", "500"}


def test_swagger_ui_redirects_to_trailing_slash(client):
    response = client.get("/swagger-ui")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/swagger-ui/")


def test_swagger_ui_page_points_at_api_doc(client):
    response = client.get("/swagger-ui/")

    assert response.status_code == 200
    assert response.mimetype == "text/html"
    assert "/api-doc.json" in response.get_data(as_text=True)


def test_docs_can_be_disabled(fake_crane):
    app = create_app(Config(environ={}, CRANE_CMD=fake_crane, ENABLE_API_DOCS=False))
    client = app.test_client()

    assert client.get("/api-doc.json").status_code == 404
    assert client.get("/swagger-ui/").status_code == 404
    assert client.get("/health").status_code == 200

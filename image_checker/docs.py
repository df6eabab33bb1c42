"""
API documentation endpoints.

Serves an OpenAPI 3 description of the service at /api-doc.json and a
Swagger UI page at /swagger-ui/ that renders it.
"""

from flask import Blueprint, jsonify, redirect, render_template_string, url_for

from . import __version__

SWAGGER_UI_VERSION = "5.17.14"

docs = Blueprint("docs", __name__)

SWAGGER_UI_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }} - Swagger UI</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@{{ version }}/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@{{ version }}/swagger-ui-bundle.js"></script>
  <script>
    window.onload = function () {
      window.ui = SwaggerUIBundle({url: "{{ spec_url }}", dom_id: "#swagger-ui"});
    };
  </script>
</body>
</html>
"""


def _text_response(description: str) -> dict:
    return {
        "description": description,
        "content": {"text/plain": {"schema": {"type": "string"}}},
    }


def openapi_document() -> dict:
    """Build the OpenAPI document for the /health and /exists routes."""
    return {
        "openapi": "3.0.3",
        "info": {
            "title": "image-checker",
            "version": __version__,
            "description": (
                "Check whether a container image is present in a public registry. "
                "Lookups are delegated to crane; no registry authentication is done."
            ),
        },
        "paths": {
            "/health": {
                "get": {
                    "operationId": "health",
                    "responses": {
                        "200": _text_response("Service is up and running"),
                    },
                }
            },
            "/exists": {
                "get": {
                    "operationId": "check_image",
                    "parameters": [
                        {
                            "name": "image",
                            "in": "query",
                            "required": True,
                            "description": "URI of an image in a public remote container repository",
                            "schema": {"type": "string"},
                            "example": "docker.io/nginx",
                        }
                    ],
                    "responses": {
                        "200": _text_response("Image exists"),
                        "400": _text_response("Missing image parameter"),
                        "404": _text_response("Image lookup failed"),
                        "500": _text_response("Internal server error"),
                    },
                }
            },
        },
    }


@docs.route("/api-doc.json")
def api_doc():
    """Return the OpenAPI document as JSON."""
    return jsonify(openapi_document())


@docs.route("/swagger-ui")
def swagger_ui_redirect():
    return redirect(url_for("docs.swagger_ui"), code=302)


@docs.route("/swagger-ui/")
def swagger_ui():
    """Render the Swagger UI page pointing at /api-doc.json."""
    return render_template_string(
        SWAGGER_UI_PAGE,
        title="image-checker",
        version=SWAGGER_UI_VERSION,
        spec_url=url_for("docs.api_doc"),
    )

"""
Flask application and image checker endpoints.

Exposes /health for liveness and /exists for image lookups.
"""

import logging
import time

from flask import Blueprint, Flask, Response, abort, current_app, g, request

from .checker import ImageChecker, Outcome
from .config import Config
from .docs import docs

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__)


def create_app(config: Config = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Configuration to use. Built from the environment if omitted.

    Returns:
        Flask app with the image checker stored in app.extensions["image_checker"]
    """
    if config is None:
        config = Config()

    app = Flask(__name__)
    app.extensions["image_checker_config"] = config
    app.extensions["image_checker"] = ImageChecker(config.CRANE_CMD, timeout=config.CRANE_TIMEOUT)

    app.register_blueprint(api)
    if config.ENABLE_API_DOCS:
        app.register_blueprint(docs)

    app.before_request(_start_timer)
    app.after_request(_log_request)

    logger.debug(f"Application created with {config}")
    return app


def get_checker() -> ImageChecker:
    """Return the checker of the current application."""
    return current_app.extensions["image_checker"]


# -------------------------------
# Request logging
# -------------------------------


def _start_timer():
    g.request_started = time.perf_counter()


def _log_request(response):
    """
    Log method, path, duration and status of every request.

    Server errors (status >= 500) are logged at ERROR, everything else at INFO.
    """
    started = g.get("request_started")
    elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
    level = logging.ERROR if response.status_code >= 500 else logging.INFO
    logger.log(level, f"{request.method} {request.path} ({elapsed_ms:.2f}ms) {response.status_code}")
    return response


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


# -------------------------------
# Endpoints
# -------------------------------


@api.route("/health")
def health():
    """
    Liveness endpoint.

    Always returns HTTP 200 with body "Ok". Does not check whether the
    lookup tool is available.
    """
    return _text("Ok", 200)


@api.route("/exists")
def check_image():
    """
    Check whether a container image exists.

    Query Parameters:
        image: Image reference, e.g. "docker.io/nginx" (required)

    Returns:
        200 "ok" if the image exists
        404 "Image <image> does not exist" if the lookup tool reports failure
        500 with empty body if the lookup tool could not be run

    Raises:
        400: Missing image parameter
    """
    image = request.args.get("image")
    if image is None:
        logger.warning("Image lookup requested without 'image' parameter")
        abort(400, "Missing required query parameter: image")

    result = get_checker().check(image)

    if result.outcome is Outcome.EXISTS:
        return _text("ok", 200)
    if result.outcome is Outcome.NOT_FOUND:
        return _text(f"Image {image} does not exist", 404)

    logger.error(f"Lookup of image '{image}' failed: {result.error}")
    return _text("", 500)

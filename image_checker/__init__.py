"""
HTTP service that checks whether container images exist in public registries.

Lookups are delegated to crane (https://github.com/google/go-containerregistry):
the service runs ``crane manifest <image>`` and reports the result.

Endpoints:
    - GET /health - Liveness check, always "Ok"
    - GET /exists?image=<image> - 200 if the image exists, 404 if not,
      500 if crane could not be run
    - GET /api-doc.json, /swagger-ui/ - API documentation (optional)

Only public registries are supported (no authentication) and only plain
HTTP is served.

Example:
    $ image-checker --port 8080
    $ curl "http://localhost:8080/exists?image=docker.io/nginx"
"""

__version__ = "0.1.0"

from .config import Config
from .checker import ImageChecker, LookupResult, Outcome
from .routes import create_app

__all__ = [
    "Config",
    "ImageChecker",
    "LookupResult",
    "Outcome",
    "create_app",
]

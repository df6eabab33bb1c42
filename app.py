"""
HTTP service that checks whether container images exist in public registries.

Runs ``crane manifest <image>`` for each lookup and maps its exit status to
an HTTP response.

Endpoints:
    - GET /health - Liveness check
    - GET /exists?image=<image> - Image lookup
    - GET /api-doc.json, /swagger-ui/ - API documentation

Environment Variables:
    LOG_LEVEL, FLASK_HOST, FLASK_PORT, CRANE_CMD, CRANE_TIMEOUT, ENABLE_API_DOCS
    (also read from a .env file)

Example:
    $ LOG_LEVEL=DEBUG python app.py --port 8080
    $ curl "http://localhost:8080/exists?image=docker.io/nginx"
"""

from image_checker.cli import main


if __name__ == "__main__":
    main()

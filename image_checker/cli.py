"""
Command line entry point for the image checker service.

Loads ``.env``, parses flags, configures logging and runs the Flask server.
"""

import argparse
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from . import __version__
from .config import Config, parse_host, parse_port, parse_timeout
from .routes import create_app

logger = logging.getLogger(__name__)

DESCRIPTION = """\
This webserver serves an API to check whether a container image is present
in a registry or not. Currently, it only allows to query public registries
(no authentication implemented) and serves only http (no encryption).

To query for the image `docker.io/nginx`, run

    curl "http://localhost:8080/exists?image=docker.io/nginx"
"""


def _arg_type(parser):
    """Wrap a config parser so argparse reports its ValueError as a usage error."""

    def convert(value):
        try:
            return parser(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from None

    convert.__name__ = parser.__name__
    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-checker",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-i", "--ip", type=_arg_type(parse_host), help="IP address to bind to [env: FLASK_HOST, default: 127.0.0.1]")
    parser.add_argument("-p", "--port", type=_arg_type(parse_port), help="Port to listen on [env: FLASK_PORT, default: 8080]")
    parser.add_argument("-c", "--crane-cmd", help="Path and name of the crane executable [env: CRANE_CMD, default: crane]")
    parser.add_argument(
        "-t",
        "--timeout",
        type=_arg_type(parse_timeout),
        help="Seconds to wait for crane before failing the lookup [env: CRANE_TIMEOUT, default: no timeout]",
    )
    parser.add_argument("-l", "--log-level", help="Logging level [env: LOG_LEVEL, default: INFO]")
    parser.add_argument(
        "--no-api-docs",
        dest="api_docs",
        action="store_false",
        default=None,
        help="Do not serve /api-doc.json and /swagger-ui [env: ENABLE_API_DOCS]",
    )
    return parser


def load_config(argv=None, environ=None) -> Config:
    """
    Build the configuration from flags and environment.

    Flags take precedence over environment variables, which take precedence
    over defaults. Invalid environment values exit with a usage error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return Config(
            environ,
            LOG_LEVEL=args.log_level,
            FLASK_HOST=args.ip,
            FLASK_PORT=args.port,
            CRANE_CMD=args.crane_cmd,
            CRANE_TIMEOUT=args.timeout,
            ENABLE_API_DOCS=args.api_docs,
        )
    except ValueError as e:
        parser.error(str(e))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv=None):
    """Main entry point for the image checker service."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)

    config = load_config(argv)
    configure_logging(config.LOG_LEVEL)

    if dotenv_path:
        logger.info(f"Loaded environment from {dotenv_path}")
    else:
        logger.info("Cannot read environment from .env: file not found")

    app = create_app(config)

    logger.info(f"Starting image checker service on {config.FLASK_HOST}:{config.FLASK_PORT}")
    logger.info(f"Configuration: {config}")
    logger.info(f"Log level: {logging.getLevelName(logging.getLogger().getEffectiveLevel())}")
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT, threaded=True)


if __name__ == "__main__":
    sys.exit(main())

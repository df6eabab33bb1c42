"""
Configuration module for the image checker.

Loads configuration from environment variables with sensible defaults.
Command line flags are applied on top as keyword overrides.
"""

import ipaddress
import logging
import os

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def parse_bool(value: str) -> bool:
    """Parse a boolean environment value such as "true" or "0"."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def parse_log_level(value: str) -> str:
    """Validate a logging level name such as "INFO"."""
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid log level: {value!r}")
    return level


def parse_host(value: str) -> str:
    """Validate an IP address to bind to and return it normalized."""
    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError:
        raise ValueError(f"Invalid IP address: {value!r}") from None


def parse_port(value) -> int:
    """Validate a TCP port number."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid port: {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"Invalid port: {port} is not in range 1-65535")
    return port


def parse_timeout(value):
    """
    Validate a lookup timeout in seconds.

    Empty values mean no timeout and return None.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timeout: {value!r}") from None
    if timeout <= 0:
        raise ValueError(f"Invalid timeout: {timeout} must be greater than zero")
    return timeout


class Config:
    """
    Image checker configuration.

    Values are read from environment variables once, at construction time.
    Keyword arguments take precedence over the environment, which is how
    command line flags are applied. The object is built at startup and passed
    to the application factory; it is never modified afterwards.
    """

    FIELDS = (
        "LOG_LEVEL",
        "FLASK_HOST",
        "FLASK_PORT",
        "CRANE_CMD",
        "CRANE_TIMEOUT",
        "ENABLE_API_DOCS",
    )

    def __init__(self, environ=None, **overrides):
        """
        Initialize configuration from environment variables.

        Environment Variables:
            LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO
            FLASK_HOST: Server bind address. Default: 127.0.0.1
            FLASK_PORT: Server bind port. Default: 8080
            CRANE_CMD: Path and name of the crane executable. Default: crane
            CRANE_TIMEOUT: Lookup timeout in seconds. Default: unset (no timeout)
            ENABLE_API_DOCS: Serve OpenAPI document and Swagger UI. Default: true

        Args:
            environ: Mapping to read from instead of os.environ
            **overrides: Explicit values for any of the fields above

        Raises:
            ValueError: If a value cannot be parsed
            TypeError: If an unknown override is given
        """
        env = os.environ if environ is None else environ

        unknown = set(overrides) - set(self.FIELDS)
        if unknown:
            raise TypeError(f"Unknown configuration field(s): {', '.join(sorted(unknown))}")

        def value(name, default):
            if overrides.get(name) is not None:
                return overrides[name]
            return env.get(name, default)

        # Logging
        self.LOG_LEVEL = parse_log_level(value("LOG_LEVEL", "INFO"))

        # Server
        self.FLASK_HOST = parse_host(value("FLASK_HOST", "127.0.0.1"))
        self.FLASK_PORT = parse_port(value("FLASK_PORT", "8080"))

        # Lookup tool
        self.CRANE_CMD = value("CRANE_CMD", "crane")
        self.CRANE_TIMEOUT = parse_timeout(value("CRANE_TIMEOUT", None))

        # API documentation
        docs = value("ENABLE_API_DOCS", "true")
        self.ENABLE_API_DOCS = docs if isinstance(docs, bool) else parse_bool(docs)

    def __repr__(self):
        """String representation for logging."""
        return (
            f"Config(LOG_LEVEL={self.LOG_LEVEL}, "
            f"FLASK_HOST={self.FLASK_HOST}, "
            f"FLASK_PORT={self.FLASK_PORT}, "
            f"CRANE_CMD={self.CRANE_CMD}, "
            f"CRANE_TIMEOUT={self.CRANE_TIMEOUT}, "
            f"ENABLE_API_DOCS={self.ENABLE_API_DOCS})"
        )

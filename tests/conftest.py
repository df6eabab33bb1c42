"""Shared fixtures: fake crane executables and Flask test clients."""

import os
import stat
import textwrap

import pytest

from image_checker import Config, create_app


def write_executable(path, body):
    """Write a shell script to ``path`` and make it executable."""
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def calls_log(tmp_path):
    """File the fake crane appends its arguments to, one invocation per line."""
    return tmp_path / "calls.log"


@pytest.fixture
def fake_crane(tmp_path, calls_log):
    """
    Fake crane: records its arguments, reports images containing "missing"
    as absent (exit 1) and everything else as present.
    """
    return write_executable(
        tmp_path / "crane",
        f"""\
        echo "$@" >> "{calls_log}"
        case "$2" in
            *missing*) exit 1 ;;
        esac
        exit 0
        """,
    )


@pytest.fixture
def config(fake_crane):
    return Config(environ={}, CRANE_CMD=fake_crane)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def read_calls(calls_log):
    if not os.path.exists(calls_log):
        return []
    return calls_log.read_text().splitlines()

"""
Image existence checker.

Looks up container images in remote registries by running
``crane manifest <image>`` and inspecting its exit status.
"""

import enum
import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """Result of a single image lookup."""

    EXISTS = "exists"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class LookupResult:
    """
    Outcome of a lookup together with what produced it.

    Attributes:
        image: Image reference exactly as it was passed to the tool
        outcome: One of the Outcome members
        returncode: Exit code of the tool, None if it never ran to completion
        error: Exception that prevented the lookup (LOOKUP_FAILED only)
    """

    image: str
    outcome: Outcome
    returncode: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def exists(self) -> bool:
        return self.outcome is Outcome.EXISTS


class ImageChecker:
    """
    Spawns the lookup tool for each image reference.

    Any nonzero exit status is reported as NOT_FOUND, which includes network
    and authentication failures of the tool. Only a failure to start the tool
    (or an expired timeout, when one is configured) is a LOOKUP_FAILED.
    """

    def __init__(self, cmd: str = "crane", timeout: Optional[float] = None):
        """
        Args:
            cmd: Path and name of the crane executable
            timeout: Seconds to wait for the tool before killing it.
                None waits indefinitely.
        """
        self._cmd = cmd
        self._timeout = timeout

    @property
    def cmd(self) -> str:
        return self._cmd

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    def __repr__(self):
        return f"ImageChecker(cmd={self._cmd!r}, timeout={self._timeout!r})"

    def command_for(self, image: str) -> List[str]:
        """Return the argv used to look up ``image``."""
        return [self._cmd, "manifest", image]

    def check(self, image: str) -> LookupResult:
        """
        Check whether an image exists in its remote registry.

        The image reference is passed verbatim as a single argument, without
        a shell. Output of the tool is discarded.

        Args:
            image: Image reference, e.g. "docker.io/nginx"

        Returns:
            LookupResult with outcome:
            - EXISTS if the tool exited with status 0
            - NOT_FOUND if it exited with any other status
            - LOOKUP_FAILED if it could not be started (including arguments
              the OS rejects, such as NUL bytes) or timed out
        """
        cmd = self.command_for(image)
        logger.debug(f"Running command: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.error(f"\"{self._cmd}\" timed out after {self._timeout}s looking up '{image}'")
            return LookupResult(image, Outcome.LOOKUP_FAILED, error=e)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to spawn subprocess \"{self._cmd}\": {e}")
            return LookupResult(image, Outcome.LOOKUP_FAILED, error=e)

        if proc.returncode != 0:
            logger.info(f"\"{self._cmd}\" failed with status code {proc.returncode} for image '{image}'")
            return LookupResult(image, Outcome.NOT_FOUND, returncode=proc.returncode)

        logger.debug(f"Image found: '{image}'")
        return LookupResult(image, Outcome.EXISTS, returncode=0)

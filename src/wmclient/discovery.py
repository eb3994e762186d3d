"""Locate the daemon's socket."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Sequence

from wmclient.errors import DiscoveryError
from wmclient.models.config import Config

logger = logging.getLogger("wmclient.discovery")

SOCK_ENV_VAR = "WATCHMAN_SOCK"


def get_sockname(command: Sequence[str] = ("watchman", "get-sockname")) -> Path:
    """Ask the watchman binary where its socket lives.

    The command prints an object of the form {"sockname": "/path/to/sock"}.
    """
    try:
        proc = subprocess.run(list(command), capture_output=True, check=False)
    except OSError as e:
        raise DiscoveryError(f"Could not run {' '.join(command)}: {e}") from e

    if proc.returncode != 0:
        stderr = proc.stderr.decode(errors="replace").strip()
        raise DiscoveryError(
            f"{' '.join(command)} failed with exit code {proc.returncode}: {stderr}"
        )

    try:
        data = json.loads(proc.stdout.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DiscoveryError(f"Got bad JSON from watchman get-sockname: {e}") from e

    if not isinstance(data, dict):
        raise DiscoveryError("Got bad JSON from watchman get-sockname: object expected")
    if "sockname" not in data:
        raise DiscoveryError("Got bad JSON from watchman get-sockname: socket expected")
    if not isinstance(data["sockname"], str):
        raise DiscoveryError(
            "Got bad JSON from watchman get-sockname: socket is not string"
        )
    return Path(data["sockname"])


def resolve_socket_path(config: Config) -> Path:
    """Socket path from config, then the environment, then the watchman binary."""
    if config.connection.socket_path is not None:
        return config.connection.socket_path.expanduser()

    env_path = os.environ.get(SOCK_ENV_VAR)
    if env_path:
        logger.debug(f"Using socket from {SOCK_ENV_VAR}: {env_path}")
        return Path(env_path)

    sockname = get_sockname(config.connection.sockname_command)
    logger.debug(f"Discovered socket {sockname}")
    return sockname

"""
Script: build_tools_ci/common.py
What: Shared helper functions used by all `build_tools_ci` modules.
Doing: Wraps env reads, command execution, docker registry calls, and GitHub output/env writes.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all job modules.
"""

from __future__ import annotations

import os
import subprocess
from typing import Mapping, Sequence


class CiToolError(RuntimeError):
    """Raised when a workflow helper hits a known error condition."""


def require_env(name: str) -> str:
    """Return a required environment variable or raise a clear error."""
    value = os.environ.get(name)
    if value is None or value == "":
        raise CiToolError(f"Missing required environment variable: {name}")
    return value


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    return os.environ.get(name, default)


def run_cmd(
    args: Sequence[str],
    *,
    capture_output: bool = True,
    cwd: str | None = None,
    input_text: str | None = None,
) -> str:
    """Run a command and return stdout, raising a readable error on failure."""
    try:
        result = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=capture_output,
            cwd=cwd,
            input=input_text,
        )
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        stdout = (exc.stdout or "").strip()
        details = stderr or stdout or str(exc)
        raise CiToolError(f"Command failed: {' '.join(args)}\n{details}") from exc
    except FileNotFoundError as exc:
        raise CiToolError(f"Command not found: {args[0]}") from exc

    if not capture_output:
        return ""
    return result.stdout


def _append_key_values(file_env: str, values: Mapping[str, str]) -> None:
    target = require_env(file_env)
    with open(target, "a", encoding="utf-8") as handle:
        for key, value in values.items():
            handle.write(f"{key}={value}\n")


def write_github_outputs(values: Mapping[str, str]) -> None:
    """
    Write step outputs for GitHub Actions.

    GitHub provides a file path in `GITHUB_OUTPUT`; writing `name=value` lines
    there makes that value available to later steps and, through job
    `outputs:`, to dependent jobs.
    """
    _append_key_values("GITHUB_OUTPUT", values)


def write_github_env(values: Mapping[str, str]) -> None:
    """Export environment variables to every later step in the same job."""
    _append_key_values("GITHUB_ENV", values)


def docker_login(username: str, password: str, *, registry: str | None = None) -> None:
    """
    Log in to a registry (Docker Hub when `registry` is None).

    The password goes through stdin so it never shows up in the process list
    or in the error text `run_cmd` builds from argv.
    """
    command = ["docker", "login", "--username", username, "--password-stdin"]
    if registry:
        command.append(registry)
    run_cmd(command, input_text=password)
    print(f"Logged in to {registry or 'Docker Hub'} as {username}")


def image_exists(image_ref: str) -> bool:
    """True when the given image tag exists in the registry."""
    try:
        run_cmd(["docker", "manifest", "inspect", image_ref])
        return True
    except CiToolError:
        return False


def create_buildx_builder(name: str) -> str:
    """
    Create and select a `docker-container` buildx builder named `name`.

    The built-in `default` builder uses the `docker` driver, which cannot
    export registry cache, so a fresh builder is always created.
    Return the builder name for `remove_buildx_builder`.
    """
    run_cmd(
        ["docker", "buildx", "create", "--name", name, "--driver", "docker-container", "--use"],
        capture_output=False,
    )
    print(f"Using buildx builder {name}")
    return name


def remove_buildx_builder(name: str) -> None:
    """Remove a builder and its BuildKit container; failures only print a warning."""
    try:
        run_cmd(["docker", "buildx", "rm", name], capture_output=False)
    except CiToolError as exc:
        # Must not hide the build result when called from a `finally`.
        print(f"Warning: failed to remove buildx builder {name}: {exc}")

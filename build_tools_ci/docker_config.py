from __future__ import annotations

from pathlib import Path

from build_tools_ci.common import optional_env, require_env, write_github_env


def docker_config_dir(base_dir: Path, run_id: str, run_attempt: str) -> Path:
    """Per-run docker config directory, so self-hosted runners never share logins."""
    return base_dir / f".docker-custom-{run_id}-{run_attempt}"


def main() -> None:
    base_dir = Path(optional_env("RUNNER_TEMP") or Path.cwd())
    config_dir = docker_config_dir(
        base_dir,
        require_env("GITHUB_RUN_ID"),
        optional_env("GITHUB_RUN_ATTEMPT", "1"),
    )
    config_dir.mkdir(parents=True, exist_ok=True)

    # Later steps in this job (login, buildx) pick this up automatically.
    write_github_env({"DOCKER_CONFIG": str(config_dir)})
    print(f"DOCKER_CONFIG={config_dir}")


if __name__ == "__main__":
    main()

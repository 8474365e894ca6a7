from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Mapping

from build_tools_ci.common import CiToolError


def command_map() -> dict[str, Callable[[], None]]:
    """
    Map CLI command names to Python entry functions.

    Each value is a `main()` function from one job module.
    """
    from build_tools_ci.build_image import main as build_image
    from build_tools_ci.check_image import main as check_image
    from build_tools_ci.docker_config import main as set_docker_config_dir
    from build_tools_ci.matrix import main as emit_matrix
    from build_tools_ci.merge_images import main as merge_images
    from build_tools_ci.verify_tag import main as verify_image_tag

    return {
        "check-image": check_image,
        "emit-matrix": emit_matrix,
        "verify-image-tag": verify_image_tag,
        "set-docker-config-dir": set_docker_config_dir,
        "build-image": build_image,
        "merge-images": merge_images,
    }


def build_parser(commands: Mapping[str, Callable[[], None]]) -> argparse.ArgumentParser:
    """Build argument parser with one positional command choice."""
    parser = argparse.ArgumentParser(
        prog="python3 -m build_tools_ci.cli",
        description=(
            "Run one step of the neondatabase/build-tools image workflow "
            "(check, build one Debian/arch leg, or merge multi-arch manifests)."
        ),
    )
    parser.add_argument("command", choices=sorted(commands.keys()))
    return parser


def run_command(command: str, commands: Mapping[str, Callable[[], None]]) -> None:
    """
    Run one registered command.

    `commands` is passed in to keep this function easy to test.
    """
    commands[command]()


def main(argv: list[str] | None = None) -> None:
    commands = command_map()
    parser = build_parser(commands)
    args = parser.parse_args(argv)

    try:
        run_command(args.command, commands)
    except CiToolError as exc:
        # Prefix with the step name so matrix logs show which command failed.
        print(f"build-tools-ci {args.command}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()

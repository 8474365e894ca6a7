"""
Script: build_tools_ci/merge_images.py
What: Merges per-arch build-tools images into multi-arch manifests.
Doing: For each Debian version, runs `docker buildx imagetools create` over the x64 and arm64 images.
Why: Consumers pull one tag and get the right architecture.
Goal: Publish `<tag>-<debian>` for every Debian version, plus bare `<tag>` for the default one.
"""

from __future__ import annotations

from build_tools_ci.common import docker_login, optional_env, require_env, run_cmd
from build_tools_ci.images import (
    ARCHES,
    DEBIAN_VERSIONS,
    DEFAULT_DEBIAN_VERSION,
    arch_image_ref,
    debian_image_ref,
    image_ref,
    validate_image_tag,
)


def merge_plan(
    image_tag: str,
    default_debian_version: str = DEFAULT_DEBIAN_VERSION,
) -> list[tuple[list[str], list[str]]]:
    """
    Return one `(tags, sources)` pair per Debian version.

    `tags` always holds `<tag>-<debian>`; the bare `<tag>` is added only for
    the default Debian version. `sources` lists the per-arch images.
    """
    plan = []
    for debian_version in DEBIAN_VERSIONS:
        tags = [debian_image_ref(image_tag, debian_version)]
        if debian_version == default_debian_version:
            tags.append(image_ref(image_tag))
        sources = [arch_image_ref(image_tag, debian_version, arch) for arch in ARCHES]
        plan.append((tags, sources))
    return plan


def imagetools_create_command(tags: list[str], sources: list[str]) -> list[str]:
    command = ["docker", "buildx", "imagetools", "create"]
    for tag in tags:
        command.extend(["-t", tag])
    command.extend(sources)
    return command


def main() -> None:
    image_tag = validate_image_tag(require_env("IMAGE_TAG"))
    default_debian_version = optional_env("DEFAULT_DEBIAN_VERSION", DEFAULT_DEBIAN_VERSION)

    docker_login(require_env("NEON_DOCKERHUB_USERNAME"), require_env("NEON_DOCKERHUB_PASSWORD"))

    for tags, sources in merge_plan(image_tag, default_debian_version):
        run_cmd(imagetools_create_command(tags, sources), capture_output=False)
        print(f"Created {', '.join(tags)} from {', '.join(sources)}")


if __name__ == "__main__":
    main()

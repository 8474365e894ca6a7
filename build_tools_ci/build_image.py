"""
Script: build_tools_ci/build_image.py
What: Builds and pushes one Debian/arch leg of the build-tools image.
Doing: Guards the tag, logs in to Docker Hub and the cache registry, then runs `docker buildx build --push`.
Why: Keeps cache and tag rules next to the code that tests them instead of in YAML expressions.
Goal: Publish `neondatabase/build-tools:<tag>-<debian>-<arch>` for the merge job.
"""

from __future__ import annotations

from build_tools_ci.common import (
    create_buildx_builder,
    docker_login,
    optional_env,
    remove_buildx_builder,
    require_env,
    run_cmd,
)
from build_tools_ci.images import (
    CACHE_REGISTRY,
    DOCKERFILE,
    arch_image_ref,
    cache_ref,
    validate_image_tag,
    validate_leg,
)
from build_tools_ci.verify_tag import check_tags_match


# Only runs on this branch may write the shared layer cache.
CACHE_WRITER_REF = "main"


def builder_name(*, run_id: str, run_attempt: str, debian_version: str, arch: str) -> str:
    """Builder name unique to one leg of one run attempt."""
    return f"build-tools-{run_id}-{run_attempt}-{debian_version}-{arch}"


def build_command(
    *,
    image_tag: str,
    debian_version: str,
    arch: str,
    ref_name: str,
    context: str = ".",
    dockerfile: str = DOCKERFILE,
) -> list[str]:
    """Return the `docker buildx build` argv for one matrix leg."""
    cache = cache_ref(debian_version, arch)
    command = [
        "docker",
        "buildx",
        "build",
        "--file",
        dockerfile,
        "--provenance=false",
        "--pull",
        "--push",
        "--build-arg",
        f"DEBIAN_VERSION={debian_version}",
        "--cache-from",
        f"type=registry,ref={cache}",
    ]
    if ref_name == CACHE_WRITER_REF:
        command.extend(["--cache-to", f"type=registry,ref={cache},mode=max"])
    command.extend(["--tag", arch_image_ref(image_tag, debian_version, arch), context])
    return command


def main() -> None:
    # The tag guard must fail before any login or build step runs.
    image_tag = require_env("INPUTS_IMAGE_TAG")
    check_tags_match(image_tag, require_env("CHECK_IMAGE_TAG"))
    validate_image_tag(image_tag)

    if optional_env("FOUND") == "true":
        print(f"Image tag {image_tag} already exists; skipping build.")
        return

    debian_version = require_env("DEBIAN_VERSION")
    arch = require_env("ARCH")
    validate_leg(debian_version, arch)

    docker_login(require_env("NEON_DOCKERHUB_USERNAME"), require_env("NEON_DOCKERHUB_PASSWORD"))
    docker_login(
        require_env("NEON_CI_DOCKERCACHE_USERNAME"),
        require_env("NEON_CI_DOCKERCACHE_PASSWORD"),
        registry=CACHE_REGISTRY,
    )
    builder = create_buildx_builder(
        builder_name(
            run_id=optional_env("GITHUB_RUN_ID", "local"),
            run_attempt=optional_env("GITHUB_RUN_ATTEMPT", "1"),
            debian_version=debian_version,
            arch=arch,
        )
    )
    try:
        command = build_command(
            image_tag=image_tag,
            debian_version=debian_version,
            arch=arch,
            ref_name=optional_env("GITHUB_REF_NAME"),
            context=optional_env("BUILD_CONTEXT", "."),
            dockerfile=optional_env("BUILD_DOCKERFILE", DOCKERFILE),
        )
        print(f"Running: {' '.join(command)}")
        run_cmd(command, capture_output=False)
    finally:
        remove_buildx_builder(builder)

    print(f"Pushed {arch_image_ref(image_tag, debian_version, arch)}")


if __name__ == "__main__":
    main()

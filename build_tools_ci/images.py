"""
Script: build_tools_ci/images.py
What: Naming rules for build-tools images, cache refs, runners, and the build matrix.
Doing: Turns an image tag plus Debian version/arch into registry references.
Why: Every job derives refs the same way, so per-arch, merged, and cache tags always line up.
Goal: One source of truth for `neondatabase/build-tools` naming.
"""

from __future__ import annotations

import re

from build_tools_ci.common import CiToolError


IMAGE_REPOSITORY = "neondatabase/build-tools"
CACHE_REGISTRY = "cache.neon.build"
CACHE_REPOSITORY = f"{CACHE_REGISTRY}/build-tools"
DOCKERFILE = "Dockerfile.build-tools"

DEBIAN_VERSIONS = ("bullseye", "bookworm")
ARCHES = ("x64", "arm64")
# The bare `<tag>` always points at this Debian version.
DEFAULT_DEBIAN_VERSION = "bullseye"

# Docker tag grammar: first char word-ish, max 128 chars.
IMAGE_TAG_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}$")


def validate_image_tag(tag: str) -> str:
    """Return `tag` unchanged, or raise if it cannot be used as a docker tag."""
    if not IMAGE_TAG_RE.match(tag):
        raise CiToolError(f"Invalid image tag: {tag!r}")
    return tag


def validate_leg(debian_version: str, arch: str) -> None:
    if debian_version not in DEBIAN_VERSIONS:
        raise CiToolError(
            f"Unsupported Debian version {debian_version!r}; expected one of {', '.join(DEBIAN_VERSIONS)}"
        )
    if arch not in ARCHES:
        raise CiToolError(f"Unsupported arch {arch!r}; expected one of {', '.join(ARCHES)}")


def image_ref(tag: str) -> str:
    return f"{IMAGE_REPOSITORY}:{tag}"


def debian_image_ref(tag: str, debian_version: str) -> str:
    return f"{IMAGE_REPOSITORY}:{tag}-{debian_version}"


def arch_image_ref(tag: str, debian_version: str, arch: str) -> str:
    return f"{IMAGE_REPOSITORY}:{tag}-{debian_version}-{arch}"


def cache_ref(debian_version: str, arch: str) -> str:
    """Layer cache location, shared by all tags of one Debian/arch pair."""
    return f"{CACHE_REPOSITORY}:cache-{debian_version}-{arch}"


def runner_labels(arch: str) -> list[str]:
    """Self-hosted runner labels that match the CPU architecture of a leg."""
    return ["self-hosted", "large-arm64" if arch == "arm64" else "large"]


def build_matrix() -> list[dict[str, str]]:
    """
    Return every build leg, Debian-major order.

    The result always has `len(DEBIAN_VERSIONS) * len(ARCHES)` entries.
    """
    return [
        {"debian-version": debian_version, "arch": arch}
        for debian_version in DEBIAN_VERSIONS
        for arch in ARCHES
    ]


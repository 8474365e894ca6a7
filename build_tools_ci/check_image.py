"""
Script: build_tools_ci/check_image.py
What: Decides which build-tools tag this run needs and whether it is already published.
Doing: Hashes the files that define the image, probes the registry for that tag, then writes `image-tag` and `found`.
Why: Skips the expensive matrix build when an identical image already exists.
Goal: Feed `needs.check-image.outputs.*` for the build and merge jobs.
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable

from build_tools_ci.common import (
    CiToolError,
    image_exists,
    optional_env,
    write_github_outputs,
)
from build_tools_ci.images import DOCKERFILE, image_ref, validate_image_tag


DEFAULT_TAG_FILES = (
    DOCKERFILE,
    ".github/workflows/check-build-tools-image.yml",
    ".github/workflows/build-build-tools-image.yml",
)


def compute_image_tag(paths: Iterable[Path]) -> str:
    """
    Hash file contents into one tag, in the style of `hashFiles()`.

    Each file gets its own SHA-256; those digests are fed, in the order the
    paths are given, into one outer SHA-256. Renaming a file alone does not
    change the tag.
    """
    outer = hashlib.sha256()
    for path in paths:
        if not path.is_file():
            raise CiToolError(f"Cannot hash missing file: {path}")
        outer.update(hashlib.sha256(path.read_bytes()).digest())
    return outer.hexdigest()


def tag_files_from_env() -> list[Path]:
    raw = optional_env("BUILD_TOOLS_FILES").split()
    return [Path(name) for name in (raw or DEFAULT_TAG_FILES)]


def main() -> None:
    # An explicit tag wins; otherwise derive it from the image definition.
    image_tag = optional_env("IMAGE_TAG").strip()
    if not image_tag:
        image_tag = compute_image_tag(tag_files_from_env())
    validate_image_tag(image_tag)

    image = image_ref(image_tag)
    found = image_exists(image)

    # Downstream `if:` rules compare against the literal strings.
    write_github_outputs({"image-tag": image_tag, "found": "true" if found else "false"})
    if found:
        print(f"Found {image}; build can be skipped.")
    else:
        print(f"No existing {image}; build is required.")


if __name__ == "__main__":
    main()

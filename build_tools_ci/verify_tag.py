from __future__ import annotations

from build_tools_ci.common import CiToolError, require_env


def check_tags_match(requested: str, reported: str) -> None:
    """Fail when the caller asked for a different tag than `check-image` resolved."""
    if requested != reported:
        raise CiToolError(
            f"'inputs.image-tag' ({requested}) does not match the tag of the latest "
            f"build-tools image 'inputs.image-tag' ({reported})"
        )


def main() -> None:
    # `CHECK_IMAGE_TAG` comes from needs.check-image.outputs.image-tag.
    check_tags_match(require_env("INPUTS_IMAGE_TAG"), require_env("CHECK_IMAGE_TAG"))
    print("Requested image tag matches the checked tag.")


if __name__ == "__main__":
    main()

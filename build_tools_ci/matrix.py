from __future__ import annotations

import json

from build_tools_ci.common import write_github_outputs
from build_tools_ci.images import build_matrix, runner_labels


def matrix_document() -> dict[str, list[dict[str, object]]]:
    """
    Build the `strategy.matrix` object for the build job.

    Each leg also carries its `runs-on` labels so the YAML only needs
    `runs-on: ${{ matrix.runs-on }}`.
    """
    include = []
    for leg in build_matrix():
        include.append({**leg, "runs-on": runner_labels(leg["arch"])})
    return {"include": include}


def main() -> None:
    document = matrix_document()
    # Compact JSON on one line; `name=value` outputs cannot span lines.
    write_github_outputs({"matrix": json.dumps(document, separators=(",", ":"))})
    print(f"Build matrix has {len(document['include'])} legs")


if __name__ == "__main__":
    main()

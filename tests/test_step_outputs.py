from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from build_tools_ci import docker_config, matrix
from build_tools_ci.common import CiToolError, docker_login, image_exists, require_env


class StepOutputTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.output_file = self.root / "output"
        self.env_file = self.root / "env"
        self.output_file.touch()
        self.env_file.touch()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_emit_matrix_writes_four_legs_with_runners(self) -> None:
        with mock.patch.dict(os.environ, {"GITHUB_OUTPUT": str(self.output_file)}):
            matrix.main()

        key, _, value = self.output_file.read_text(encoding="utf-8").strip().partition("=")
        self.assertEqual(key, "matrix")
        include = json.loads(value)["include"]
        self.assertEqual(len(include), 4)
        arm_leg = next(leg for leg in include if leg["arch"] == "arm64")
        self.assertEqual(arm_leg["runs-on"], ["self-hosted", "large-arm64"])

    def test_set_docker_config_dir(self) -> None:
        env = {
            "GITHUB_ENV": str(self.env_file),
            "RUNNER_TEMP": str(self.root),
            "GITHUB_RUN_ID": "42",
            "GITHUB_RUN_ATTEMPT": "2",
        }
        with mock.patch.dict(os.environ, env):
            docker_config.main()

        expected = self.root / ".docker-custom-42-2"
        self.assertTrue(expected.is_dir())
        self.assertEqual(self.env_file.read_text(encoding="utf-8"), f"DOCKER_CONFIG={expected}\n")


class CommonHelperTests(unittest.TestCase):
    def test_require_env_rejects_empty(self) -> None:
        with mock.patch.dict(os.environ, {"SOME_VALUE": ""}), self.assertRaises(CiToolError):
            require_env("SOME_VALUE")

    def test_docker_login_sends_password_on_stdin(self) -> None:
        with mock.patch("build_tools_ci.common.run_cmd") as run:
            docker_login("user", "secret", registry="cache.neon.build")
        command = run.call_args.args[0]
        self.assertNotIn("secret", command)
        self.assertEqual(command[-1], "cache.neon.build")
        self.assertEqual(run.call_args.kwargs["input_text"], "secret")

    def test_image_exists_maps_failure_to_false(self) -> None:
        with mock.patch("build_tools_ci.common.run_cmd", side_effect=CiToolError("nope")):
            self.assertFalse(image_exists("neondatabase/build-tools:missing"))
        with mock.patch("build_tools_ci.common.run_cmd", return_value="{}"):
            self.assertTrue(image_exists("neondatabase/build-tools:present"))


if __name__ == "__main__":
    unittest.main()

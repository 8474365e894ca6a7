from __future__ import annotations

import os
import unittest
from unittest import mock

from build_tools_ci.common import CiToolError
from build_tools_ci.verify_tag import check_tags_match, main


class VerifyTagTests(unittest.TestCase):
    def test_matching_tags_pass(self) -> None:
        check_tags_match("abc", "abc")

    def test_mismatch_names_both_tags(self) -> None:
        with self.assertRaises(CiToolError) as ctx:
            check_tags_match("requested", "reported")
        self.assertIn("(requested)", str(ctx.exception))
        self.assertIn("(reported)", str(ctx.exception))

    def test_main_reads_env(self) -> None:
        env = {"INPUTS_IMAGE_TAG": "one", "CHECK_IMAGE_TAG": "two"}
        with mock.patch.dict(os.environ, env), self.assertRaises(CiToolError):
            main()


if __name__ == "__main__":
    unittest.main()

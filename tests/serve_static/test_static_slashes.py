import unittest

from serve_static import collapse_slashes

_SAMPLES = [
    "",
    "/",
    "//",
    "a",
    "/a",
    "a/",
    "//a///b////",
    "/a/b/c.txt",
    "///.secret",
    "a//b",
]


class CollapseSlashesTests(unittest.TestCase):
    def test_collapses_runs_and_keeps_both_ends_by_default(self) -> None:
        self.assertEqual("/a/b/", collapse_slashes("//a///b////"))
        self.assertEqual("/a/", collapse_slashes("a"))
        self.assertEqual("/", collapse_slashes(""))

    def test_can_drop_leading_or_trailing_slash(self) -> None:
        self.assertEqual("/a/b", collapse_slashes("//a//b//", keep_trailing=False))
        self.assertEqual("a/b/", collapse_slashes("//a//b", keep_leading=False))
        self.assertEqual(
            "a/b",
            collapse_slashes("a/b", keep_leading=False, keep_trailing=False),
        )

    def test_root_collapses_to_empty_when_both_ends_dropped(self) -> None:
        self.assertEqual("", collapse_slashes("///", keep_leading=False, keep_trailing=False))
        self.assertEqual("", collapse_slashes("/", keep_trailing=False))

    def test_output_never_contains_double_slashes(self) -> None:
        for sample in _SAMPLES:
            for keep_leading in (True, False):
                for keep_trailing in (True, False):
                    result = collapse_slashes(
                        sample,
                        keep_leading=keep_leading,
                        keep_trailing=keep_trailing,
                    )
                    self.assertNotIn("//", result, msg=repr(sample))

    def test_is_idempotent_under_matching_flags(self) -> None:
        for sample in _SAMPLES:
            for keep_leading in (True, False):
                for keep_trailing in (True, False):
                    once = collapse_slashes(
                        sample,
                        keep_leading=keep_leading,
                        keep_trailing=keep_trailing,
                    )
                    twice = collapse_slashes(
                        once,
                        keep_leading=keep_leading,
                        keep_trailing=keep_trailing,
                    )
                    self.assertEqual(once, twice, msg=repr(sample))


if __name__ == "__main__":
    unittest.main()

"""Tests for ignore-rule parsing, matching, and ordered verdict folding."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from githubdocs.errors import InputError
from githubdocs.ignore import (
    Rule,
    default_path_rules,
    filter_lines,
    is_ignored,
    load_rules_file,
    matches,
    parse_rule,
    parse_rules,
)


class ParseRuleTests(unittest.TestCase):
    def test_blank_and_comment_lines_are_not_rules(self) -> None:
        self.assertIsNone(parse_rule(""))
        self.assertIsNone(parse_rule("   "))
        self.assertIsNone(parse_rule("# comment"))
        self.assertIsNone(parse_rule("\r"))

    def test_bang_prefix_marks_negated_rule(self) -> None:
        rule = parse_rule("!keep.log")
        self.assertEqual(rule, Rule(raw="!keep.log", negated=True))
        self.assertEqual(rule.pattern, "keep.log")

    def test_parse_rules_keeps_order_and_strips_carriage_returns(self) -> None:
        rules = parse_rules("*.log\r\n\n# note\n!keep.log\n")
        self.assertEqual([rule.raw for rule in rules], ["*.log", "!keep.log"])

    def test_parse_rules_accepts_line_iterables(self) -> None:
        rules = parse_rules(["dist", "", "!dist/keep"])
        self.assertEqual(rules, [Rule("dist"), Rule("!dist/keep", negated=True)])

    def test_load_rules_file_reads_utf8_rules(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            rules_path = Path(tmp) / ".githubdocsignore"
            rules_path.write_text("# docs\nnotes-é.txt\n!LICENSE\n", encoding="utf-8")
            rules = load_rules_file(rules_path)
        self.assertEqual([rule.raw for rule in rules], ["notes-é.txt", "!LICENSE"])

    def test_load_rules_file_strips_byte_order_mark(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            rules_path = Path(tmp) / ".githubdocsignore"
            rules_path.write_bytes("\ufeff*.log\n!keep.log\n".encode("utf-8"))
            rules = load_rules_file(rules_path)
        self.assertEqual(rules[0], Rule("*.log"))
        self.assertTrue(is_ignored("build.log", rules))
        self.assertFalse(is_ignored("keep.log", rules))

    def test_load_rules_file_missing_raises_input_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(InputError):
                load_rules_file(Path(tmp) / "absent")


class MatchTests(unittest.TestCase):
    def test_exact_full_path_match(self) -> None:
        self.assertTrue(matches(Rule("src/app.py"), "src/app.py"))
        self.assertFalse(matches(Rule("src/app.py"), "lib/src/app.py"))

    def test_bare_name_matches_basename_at_any_depth(self) -> None:
        rule = Rule("LICENSE")
        self.assertTrue(matches(rule, "LICENSE"))
        self.assertTrue(matches(rule, "docs/LICENSE"))
        self.assertFalse(matches(rule, "LICENSE2"))

    def test_star_spans_any_characters_including_slashes(self) -> None:
        self.assertTrue(matches(Rule("*.log"), "logs/deep/app.log"))
        self.assertTrue(matches(Rule("src/*"), "src/a/b.py"))
        self.assertTrue(matches(Rule("*"), ""))

    def test_question_mark_matches_exactly_one_character(self) -> None:
        self.assertTrue(matches(Rule("file?.txt"), "file1.txt"))
        self.assertFalse(matches(Rule("file?.txt"), "file.txt"))
        self.assertFalse(matches(Rule("file?.txt"), "file12.txt"))

    def test_dot_is_literal(self) -> None:
        self.assertFalse(matches(Rule("a.c"), "abc"))

    def test_regex_metacharacters_are_literal_and_never_raise(self) -> None:
        self.assertTrue(matches(Rule("*.py[cod]"), "x.py[cod]"))
        self.assertFalse(matches(Rule("*.py[cod]"), "x.pyc"))
        self.assertTrue(matches(Rule("*$py.class"), "mod$py.class"))
        self.assertFalse(matches(Rule("(unclosed"), "anything"))
        self.assertTrue(matches(Rule("a+b"), "a+b"))

    def test_match_is_anchored_at_both_ends(self) -> None:
        self.assertFalse(matches(Rule("*.js"), "app.jsx"))
        self.assertFalse(matches(Rule("test"), "pytest"))

    def test_empty_pattern_matches_nothing(self) -> None:
        self.assertFalse(matches(Rule("!", negated=True), ""))
        self.assertFalse(matches(Rule("!", negated=True), "a"))


class IsIgnoredTests(unittest.TestCase):
    def test_empty_rule_list_ignores_nothing(self) -> None:
        self.assertFalse(is_ignored("src/app.py", []))

    def test_negation_overrides_earlier_plain_rule(self) -> None:
        rules = parse_rules(["*.log", "!keep.log"])
        self.assertFalse(is_ignored("keep.log", rules))
        self.assertTrue(is_ignored("other.log", rules))

    def test_later_plain_rule_overrides_earlier_negation(self) -> None:
        rules = parse_rules(["*.log", "!keep.log", "keep.log"])
        self.assertTrue(is_ignored("keep.log", rules))

    def test_negation_without_prior_match_keeps_path(self) -> None:
        rules = parse_rules(["!README.md"])
        self.assertFalse(is_ignored("README.md", rules))

    def test_basename_rule_ignores_nested_paths(self) -> None:
        rules = parse_rules(["LICENSE"])
        self.assertTrue(is_ignored("LICENSE", rules))
        self.assertTrue(is_ignored("docs/LICENSE", rules))
        self.assertFalse(is_ignored("LICENSE2", rules))

    def test_lock_file_is_always_ignored(self) -> None:
        self.assertTrue(is_ignored("package-lock.json", []))
        self.assertTrue(is_ignored("web/package-lock.json", []))
        self.assertTrue(is_ignored("package-lock.json", parse_rules(["!package-lock.json"])))
        self.assertFalse(is_ignored("package.json", []))

    def test_comment_rules_built_directly_do_not_change_verdict(self) -> None:
        rules = [Rule("*.md"), Rule("# *.md"), Rule("   ")]
        self.assertTrue(is_ignored("README.md", rules))
        self.assertFalse(is_ignored("# *.md", [Rule("# *.md")]))

    def test_verdict_is_deterministic(self) -> None:
        rules = parse_rules(["*.py", "!keep*.py", "keep_not.py"])
        for path in ["a.py", "keep1.py", "keep_not.py", "x/keep2.py", "b.txt"]:
            first = is_ignored(path, rules)
            for _ in range(3):
                self.assertEqual(is_ignored(path, rules), first)

    def test_default_path_rules_cover_common_noise(self) -> None:
        rules = default_path_rules()
        self.assertTrue(is_ignored("node_modules", rules))
        self.assertTrue(is_ignored("pkg/__pycache__", rules))
        self.assertTrue(is_ignored("assets/logo.png", rules))
        self.assertTrue(is_ignored("LICENSE.txt", rules))
        self.assertFalse(is_ignored("src/main.py", rules))

    def test_default_path_rules_cover_python_tool_files(self) -> None:
        rules = default_path_rules()
        for path in [
            "ipython_config.py",
            "x.sage.py",
            ".pdm.toml",
            "celerybeat-schedule",
            "celerybeat.pid",
            ".spyderproject",
            ".spyproject",
            ".ropeproject",
            ".scrapy",
            ".webassets-cache",
            "a.py,cover",
            "SourceSageAssets",
            ".CodeLumiaignore",
            "pkg/demo.egg-info",
        ]:
            with self.subTest(path=path):
                self.assertTrue(is_ignored(path, rules))

    def test_default_directory_rules_match_at_any_depth(self) -> None:
        rules = default_path_rules()
        for path in ["lib", "lib64", "target", "instance", "cover", "__pypackages__", "profile_default", "src/env", "web/build"]:
            with self.subTest(path=path):
                self.assertTrue(is_ignored(path, rules))

    def test_default_multi_segment_rules_match_from_root_only(self) -> None:
        rules = default_path_rules()
        self.assertTrue(is_ignored("docs/_build", rules))
        self.assertTrue(is_ignored("share/python-wheels", rules))
        self.assertFalse(is_ignored("guide/_build", rules))


class FilterLinesTests(unittest.TestCase):
    def test_drops_matching_lines_and_keeps_order(self) -> None:
        text = "import os\nconsole.log(x)\nprint(1)\nconsole.log(y)"
        rules = parse_rules(["console.log*"])
        self.assertEqual(filter_lines(text, rules), "import os\nprint(1)")

    def test_lines_are_matched_literally_including_leading_whitespace(self) -> None:
        text = "a\n    debug()\ndebug()"
        self.assertEqual(filter_lines(text, parse_rules(["debug()"])), "a\n    debug()")
        self.assertEqual(filter_lines(text, parse_rules(["*debug()"])), "a")

    def test_negated_line_rule_restores_line(self) -> None:
        text = "# TODO: x\n# TODO: keep\ncode"
        # A rule file cannot express a pattern starting with '#', so build rules directly.
        rules = [Rule("*TODO*"), Rule("!# TODO: keep", negated=True)]
        self.assertEqual(filter_lines(text, rules), "# TODO: keep\ncode")

    def test_empty_rules_return_text_unchanged(self) -> None:
        text = "package-lock.json\nbody\n"
        self.assertEqual(filter_lines(text, []), text)

    def test_filtering_is_idempotent(self) -> None:
        text = "keep\nskip me\n\nskip too\nkeep again\n"
        rules = parse_rules(["skip*"])
        once = filter_lines(text, rules)
        self.assertEqual(filter_lines(once, rules), once)
        self.assertEqual(once, "keep\n\nkeep again\n")


if __name__ == "__main__":
    unittest.main()

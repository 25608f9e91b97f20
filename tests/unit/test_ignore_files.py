"""Tests for directory-scoped ignore file handling."""

from codepack.core.ignore_files import IgnoreFileRules


def _rules_for(root, *directories, **kwargs) -> IgnoreFileRules:
    rules = IgnoreFileRules(root, **kwargs)
    for directory in ("",) + directories:
        rules.load_directory(directory)
    return rules


def test_nested_directory_pattern_ignores_files_under_that_directory(make_tree):
    """A nested `out/` pattern applies to the directory holding the .gitignore."""
    root = make_tree({"apps/web/.gitignore": "out/\n", "apps/web/src/app.js": ""})
    rules = _rules_for(root, "apps", "apps/web")

    assert rules.is_ignored("apps/web/out", is_dir=True)
    assert rules.is_ignored("apps/web/out/_next/framework.js")
    assert not rules.is_ignored("apps/web/src/app.js")


def test_nested_anchored_pattern_is_scoped_to_its_directory(make_tree):
    """Anchored patterns are relative to their ignore file, not to the walk root."""
    root = make_tree({"a/.gitignore": "/build\n", "a/b/keep": ""})
    rules = _rules_for(root, "a", "a/b")

    assert rules.is_ignored("a/build")
    assert not rules.is_ignored("build")
    assert not rules.is_ignored("a/b/build")


def test_subdirectory_rules_do_not_leak_to_siblings(make_tree):
    root = make_tree({"sub/.gitignore": "*.txt\n", "other/notes.txt": "", "sub/notes.txt": ""})
    rules = _rules_for(root, "sub", "other")

    assert rules.is_ignored("sub/notes.txt")
    assert not rules.is_ignored("other/notes.txt")
    assert not rules.is_ignored("notes.txt")


def test_negation_within_one_file(make_tree):
    root = make_tree({".gitignore": "*.log\n!keep.log\n"})
    rules = _rules_for(root)

    assert rules.is_ignored("debug.log")
    assert not rules.is_ignored("keep.log")


def test_deeper_negation_overrides_parent_rule(make_tree):
    root = make_tree({".gitignore": "*.log\n", "sub/.gitignore": "!important.log\n"})
    rules = _rules_for(root, "sub")

    assert not rules.is_ignored("sub/important.log")
    assert rules.is_ignored("sub/other.log")
    assert rules.is_ignored("important.log")


def test_comments_and_blank_lines_are_skipped(make_tree):
    root = make_tree({".gitignore": "# build output\n\n   \ndist\n"})
    rules = _rules_for(root)

    assert rules.is_ignored("dist", is_dir=True)
    assert not rules.is_ignored("# build output")


def test_dot_ignore_files_are_read(make_tree):
    root = make_tree(
        {
            ".ignore": "a.txt\n",
            ".repomixignore": "b.txt\n",
            ".codepackignore": "c.txt\n",
        }
    )
    rules = _rules_for(root)

    assert rules.is_ignored("a.txt")
    assert rules.is_ignored("b.txt")
    assert rules.is_ignored("c.txt")
    assert not rules.is_ignored("d.txt")


def test_dot_ignore_files_can_be_disabled(make_tree):
    root = make_tree({".gitignore": "a.txt\n", ".codepackignore": "b.txt\n"})
    rules = _rules_for(root, use_dot_ignore=False)

    assert rules.is_ignored("a.txt")
    assert not rules.is_ignored("b.txt")


def test_gitignore_can_be_disabled(make_tree):
    root = make_tree({".gitignore": "a.txt\n", ".ignore": "b.txt\n"})
    rules = _rules_for(root, use_gitignore=False)

    assert not rules.is_ignored("a.txt")
    assert rules.is_ignored("b.txt")


def test_git_info_exclude_applies_at_root(make_tree):
    root = make_tree({".git/info/exclude": "secret.cfg\n"})
    rules = _rules_for(root)

    assert rules.is_ignored("secret.cfg")
    assert rules.is_ignored("nested/secret.cfg")


def test_gitignore_overrides_git_info_exclude(make_tree):
    root = make_tree({".git/info/exclude": "*.cfg\n", ".gitignore": "!app.cfg\n"})
    rules = _rules_for(root)

    assert rules.is_ignored("other.cfg")
    assert not rules.is_ignored("app.cfg")


def test_directory_without_patterns_has_no_rules(make_tree):
    root = make_tree({"src/main.py": ""})
    rules = _rules_for(root, "src")

    assert rules.rule_count == 0
    assert rules.load_directory("src") is None
    assert not rules.is_ignored("src/main.py")


def test_each_directory_is_loaded_once(make_tree):
    root = make_tree({".gitignore": "*.tmp\n"})
    rules = IgnoreFileRules(root)

    first = rules.load_directory("")
    (root / ".gitignore").write_text("*.bak\n", encoding="utf-8")
    second = rules.load_directory("")

    assert first is second
    assert rules.is_ignored("x.tmp")
    assert not rules.is_ignored("x.bak")

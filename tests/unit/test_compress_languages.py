"""Compression against real Tree-sitter grammars."""

import pytest

from codepack.core.compress import CHUNK_SEPARATOR, compress_content
from codepack.core.transformer import TransformOptions, transform_content

pytest.importorskip("tree_sitter")


def test_python_keeps_signatures_docstrings_and_calls():
    pytest.importorskip("tree_sitter_python")
    source = (
        "import os\n"
        "\n"
        "def add(a, b):\n"
        '    """Add numbers."""\n'
        "    return a + b\n"
        "\n"
        "class Greeter:\n"
        "    def greet(self, name):\n"
        "        print(name)\n"
    )

    assert compress_content(source, ".py") == (
        "import os\n"
        f"{CHUNK_SEPARATOR}\n"
        "def add(a, b):\n"
        '    """Add numbers."""\n'
        f"{CHUNK_SEPARATOR}\n"
        "class Greeter:\n"
        "    def greet(self, name):\n"
        "        print(name)"
    )


def _runs(*runs: str) -> str:
    return f"\n{CHUNK_SEPARATOR}\n".join(runs)


GOLDEN_CASES = [
    pytest.param(
        "tree_sitter_javascript",
        ".js",
        'import { join } from "path";\n'
        "// Greets.\n"
        "function greet(name) {\n"
        '  console.log(join("a", name));\n'
        "}\n"
        "\n"
        "class Greeter {\n"
        "  hello() {\n"
        '    return greet("x");\n'
        "  }\n"
        "}\n",
        _runs(
            'import { join } from "path";\n'
            "// Greets.\n"
            "function greet(name) {\n"
            '  console.log(join("a", name));',
            "class Greeter {\n"
            "  hello() {\n"
            '    return greet("x");',
        ),
        id="javascript",
    ),
    pytest.param(
        "tree_sitter_typescript",
        ".ts",
        'import { readFile } from "fs";\n'
        "// Shape of a user.\n"
        "interface User {\n"
        "  name: string;\n"
        "}\n"
        "\n"
        "export function load(path: string): User {\n"
        "  return parse(readFile(path));\n"
        "}\n",
        _runs(
            'import { readFile } from "fs";\n'
            "// Shape of a user.\n"
            "interface User {",
            "export function load(path: string): User {\n"
            "  return parse(readFile(path));",
        ),
        id="typescript",
    ),
    pytest.param(
        "tree_sitter_typescript",
        ".tsx",
        'import React from "react";\n'
        "\n"
        "// Renders a greeting.\n"
        "export function Hello(props: { name: string }) {\n"
        "  return <div>{format(props.name)}</div>;\n"
        "}\n",
        _runs(
            'import React from "react";',
            "// Renders a greeting.\n"
            "export function Hello(props: { name: string }) {\n"
            "  return <div>{format(props.name)}</div>;",
        ),
        id="tsx",
    ),
    pytest.param(
        "tree_sitter_go",
        ".go",
        "package main\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "// Greet prints a greeting.\n"
        "func Greet(name string) {\n"
        "\tfmt.Println(name)\n"
        "}\n",
        _runs(
            "package main",
            'import "fmt"',
            "// Greet prints a greeting.\n"
            "func Greet(name string) {\n"
            "\tfmt.Println(name)",
        ),
        id="go",
    ),
    pytest.param(
        "tree_sitter_rust",
        ".rs",
        "use std::fmt;\n"
        "\n"
        "/// Adds one.\n"
        "fn add(a: i32) -> i32 {\n"
        "    helper(a)\n"
        "}\n",
        _runs(
            "use std::fmt;",
            "/// Adds one.\n"
            "fn add(a: i32) -> i32 {\n"
            "    helper(a)",
        ),
        id="rust",
    ),
    pytest.param(
        "tree_sitter_java",
        ".java",
        "import java.util.List;\n"
        "\n"
        "/** A greeter. */\n"
        "public class Greeter {\n"
        "    public void greet(String name) {\n"
        "        System.out.println(name);\n"
        "    }\n"
        "}\n",
        _runs(
            "import java.util.List;",
            "/** A greeter. */\n"
            "public class Greeter {\n"
            "    public void greet(String name) {\n"
            "        System.out.println(name);",
        ),
        id="java",
    ),
    pytest.param(
        "tree_sitter_c",
        ".c",
        "#include <stdio.h>\n"
        "\n"
        "/* Entry point. */\n"
        "int main(void) {\n"
        '    puts("hi");\n'
        "    return 0;\n"
        "}\n",
        _runs(
            "#include <stdio.h>",
            "/* Entry point. */\n"
            "int main(void) {\n"
            '    puts("hi");',
        ),
        id="c",
    ),
    pytest.param(
        "tree_sitter_cpp",
        ".cpp",
        "#include <string>\n"
        "\n"
        "namespace app {\n"
        "// Says hello.\n"
        "void greet(const std::string& name) {\n"
        "    log(name, 1);\n"
        "}\n"
        "}\n",
        _runs(
            "#include <string>",
            "namespace app {\n"
            "// Says hello.\n"
            "void greet(const std::string& name) {\n"
            "    log(name, 1);",
        ),
        id="cpp",
    ),
]


@pytest.mark.parametrize("grammar, extension, source, expected", GOLDEN_CASES)
def test_golden_output_per_language(grammar, extension, source, expected):
    pytest.importorskip(grammar)
    assert compress_content(source, extension) == expected


def test_rust_doc_comment_does_not_repeat_the_next_line():
    pytest.importorskip("tree_sitter_rust")
    source = "/// Adds.\nfn add(a: i32) -> i32 {\n    a + 1\n}\n"

    assert compress_content(source, ".rs") == "/// Adds.\nfn add(a: i32) -> i32 {"


@pytest.mark.parametrize("extension, grammar", [(".c", "tree_sitter_c"), (".cpp", "tree_sitter_cpp")])
def test_include_does_not_repeat_the_next_line(extension, grammar):
    pytest.importorskip(grammar)
    source = "#include <stdio.h>\nint main(void) {\n    return 0;\n}\n"

    assert compress_content(source, extension) == "#include <stdio.h>\nint main(void) {"


def test_python_body_statements_are_dropped():
    pytest.importorskip("tree_sitter_python")
    source = "def f(x):\n    y = x * 2\n    return y\n"

    result = compress_content(source, ".py")

    assert result.startswith("def f(x):")
    assert "return y" not in result


def test_rust_comment_removed_before_compression():
    pytest.importorskip("tree_sitter_rust")
    options = TransformOptions(remove_comments=True, compress=True)

    assert transform_content("// comment\nfn main() {}\n", "main.rs", options) == "fn main() {}"


def test_source_without_matches_compresses_to_empty():
    pytest.importorskip("tree_sitter_python")
    assert compress_content("x + 1\n", ".py") == ""

"""Unit tests for source usage scanning."""

import re

from dotenv_diff.core.scan import compare_with_env_files, filter_ignored_usages, scan_file
from dotenv_diff.models.env import EnvPattern


class TestScanFile:
    """Tests for scan_file."""

    def test_process_env_position(self):
        """Test line and column of a process.env reference."""
        [usage] = scan_file("src/a.js", "const a = process.env.API_KEY;")
        assert usage.variable == "API_KEY"
        assert usage.line == 1
        assert usage.column == 11
        assert usage.pattern == EnvPattern.PROCESS_ENV
        assert usage.context == "const a = process.env.API_KEY;"
        assert usage.is_logged is False

    def test_bracket_access(self):
        """Test process.env["KEY"] and import.meta.env['KEY']."""
        content = 'const a = process.env["A_KEY"];\nconst b = import.meta.env[\'B_KEY\'];\n'
        usages = scan_file("a.ts", content)
        assert [(u.variable, u.pattern, u.line) for u in usages] == [
            ("A_KEY", EnvPattern.PROCESS_ENV, 1),
            ("B_KEY", EnvPattern.IMPORT_META_ENV, 2),
        ]

    def test_pattern_order(self):
        """Test that results are grouped by pattern before position."""
        content = "const a = import.meta.env.VITE_A;\nconst b = process.env.B;\n"
        usages = scan_file("a.ts", content)
        assert [u.variable for u in usages] == ["B", "VITE_A"]

    def test_lowercase_names_are_not_usages(self):
        """Test that only upper-case identifiers are picked up."""
        assert scan_file("a.ts", "const a = process.env.apiKey;") == []

    def test_destructuring(self):
        """Test names destructured from process.env."""
        content = "const { HOST, PORT: port, USER = 'me' } = process.env;"
        usages = scan_file("a.ts", content)
        assert [u.variable for u in usages] == ["HOST", "PORT", "USER"]
        assert {u.column for u in usages} == {7}

    def test_logged_usage(self):
        """Test console logging on the same line."""
        [usage] = scan_file("a.ts", "console.log(process.env.TOKEN);")
        assert usage.is_logged is True

    def test_ignore_marker_same_line(self):
        """Test an ignore comment on the usage line."""
        content = "const a = process.env.A; // dotenv-diff-ignore\n\nconst b = process.env.B;\n"
        assert [u.variable for u in scan_file("a.ts", content)] == ["B"]

    def test_ignore_marker_previous_line(self):
        """Test an ignore comment directly above the usage."""
        content = "// dotenv-diff-ignore\nconst a = process.env.A;\nconst b = process.env.B;\n"
        assert [u.variable for u in scan_file("a.ts", content)] == ["B"]

    def test_sveltekit_static_import(self):
        """Test $env/static imports record the module."""
        content = "import { API_KEY } from '$env/static/private';\n"
        [usage] = scan_file("src/routes/+page.server.ts", content)
        assert usage.variable == "API_KEY"
        assert usage.pattern == EnvPattern.SVELTEKIT
        assert usage.imports == ["$env/static/private"]

    def test_sveltekit_dynamic_env(self):
        """Test env.KEY reads after a $env/dynamic import."""
        content = "import { env } from '$env/dynamic/public';\nconst u = env.PUBLIC_URL;\n"
        [usage] = scan_file("src/lib/a.ts", content)
        assert usage.variable == "PUBLIC_URL"
        assert usage.line == 2
        assert usage.imports == ["$env/dynamic/public"]

    def test_default_import_from_env_module(self):
        """Test the default-import form is still reported as a usage."""
        content = "import SECRET from '$env/static/private';\n"
        [usage] = scan_file("a.ts", content)
        assert usage.variable == "SECRET"

    def test_relative_path(self):
        """Test paths are made relative to the scan root."""
        [usage] = scan_file("/proj/src/a.js", "process.env.A", cwd="/proj")
        assert usage.file == "src/a.js"

    def test_backslashes_are_normalized(self):
        """Test Windows-style separators in reported paths."""
        [usage] = scan_file("src\\lib\\a.js", "process.env.A")
        assert usage.file == "src/lib/a.js"

    def test_multiple_usages_on_one_line(self):
        """Test every match on a line is reported."""
        usages = scan_file("a.ts", "f(process.env.A, process.env.B)")
        assert [(u.variable, u.column) for u in usages] == [("A", 3), ("B", 18)]


class TestFilterIgnoredUsages:
    """Tests for filter_ignored_usages."""

    def test_exact_and_regex(self, make_usage):
        """Test both ignore forms."""
        usages = [make_usage("A"), make_usage("NEXT_PUBLIC_X"), make_usage("B")]
        kept = filter_ignored_usages(usages, ["A"], [re.compile(r"^NEXT_PUBLIC_")])
        assert [u.variable for u in kept] == ["B"]

    def test_no_ignores(self, make_usage):
        """Test that nothing is dropped without ignores."""
        usages = [make_usage("A"), make_usage("B")]
        assert filter_ignored_usages(usages) == usages


class TestCompareWithEnvFiles:
    """Tests for compare_with_env_files."""

    def test_missing_and_unused(self, make_usage):
        """Test both directions of the comparison."""
        usages = [make_usage("B"), make_usage("A"), make_usage("B", line=5)]
        missing, unused = compare_with_env_files(usages, ["A", "C", "D"])
        assert missing == ["B"]
        assert unused == ["C", "D"]

    def test_everything_declared(self, make_usage):
        """Test a fully consistent project."""
        missing, unused = compare_with_env_files([make_usage("A")], ["A"])
        assert missing == []
        assert unused == []

    def test_no_usages(self):
        """Test that every key is unused without usages."""
        assert compare_with_env_files([], ["A", "A", "B"]) == ([], ["A", "B"])

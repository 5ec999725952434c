"""
Tests for the input sanitization layer.
"""

import pytest

from omnifocus_mcp.omnifocus_api.sanitization import (
    SanitizationError,
    escape_js_string,
    sanitize_array,
    sanitize_input,
)


class TestSanitizeInput:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Hello World", "Hello World"),
            ('Task with "quotes"', 'Task with \\"quotes\\"'),
            ("Task with 'apostrophes'", "Task with \\'apostrophes\\'"),
            ("Path\\to\\file", "Path\\\\to\\\\file"),
            ("Task with `backticks`", "Task with \\`backticks\\`"),
            ("Price: $100", "Price: \\$100"),
            ("Line 1\nLine 2", "Line 1\\nLine 2"),
            ("Line 1\rLine 2", "Line 1\\rLine 2"),
            ("Col1\tCol2", "Col1\\tCol2"),
            ("Text\x00Null", "Text\\0Null"),
            ("Task with émojis 🎯", "Task with émojis 🎯"),
            ("", ""),
        ],
    )
    def test_escapes(self, raw, expected):
        assert sanitize_input(raw) == expected

    def test_real_world_examples(self):
        assert sanitize_input('Call "John Smith"') == 'Call \\"John Smith\\"'
        assert (
            sanitize_input("Review Q4 report\n- Section 1\n- Section 2")
            == "Review Q4 report\\n- Section 1\\n- Section 2"
        )
        assert sanitize_input("Budget: $1,000") == "Budget: \\$1,000"
        assert sanitize_input("Path: C:\\Users\\Admin") == "Path: C:\\\\Users\\\\Admin"

    @pytest.mark.parametrize(
        "raw, label",
        [
            ("${malicious}", "template literal injection"),
            ("eval(code)", "eval() function call"),
            ("EVAL(code)", "eval() function call"),
            ('Function("return 1")()', "Function() constructor"),
            ("Function (code)", "Function() constructor"),
            ('require("fs")', "require() function call"),
            ('REQUIRE("fs")', "require() function call"),
            ('import fs from "fs"', "import statement"),
            ("IMPORT something", "import statement"),
            ("obj.constructor", "constructor access"),
            ("obj.CONSTRUCTOR", "constructor access"),
            ("__proto__", "prototype pollution"),
            ('exec("ls")', "exec() function call"),
            ('spawn("sh")', "spawn() function call"),
            ("process.exit()", "process object access"),
            ("PROCESS.env", "process object access"),
            ("global.something", "global object access"),
            ("GLOBAL.test", "global object access"),
        ],
    )
    def test_rejects_dangerous_patterns(self, raw, label):
        with pytest.raises(SanitizationError, match="potentially dangerous pattern") as excinfo:
            sanitize_input(raw)
        assert label in str(excinfo.value)

    def test_first_matching_pattern_is_reported(self):
        with pytest.raises(SanitizationError) as excinfo:
            sanitize_input("${eval(x)}")
        assert "template literal injection" in str(excinfo.value)

    def test_length_boundary(self):
        assert sanitize_input("a" * 500) == "a" * 500
        with pytest.raises(SanitizationError, match="exceeds maximum length of 500 characters"):
            sanitize_input("a" * 501)

    def test_custom_max_length(self):
        assert sanitize_input("a" * 100, 100) == "a" * 100
        with pytest.raises(SanitizationError, match="maximum length of 100"):
            sanitize_input("a" * 101, 100)

    def test_rejects_excessive_control_characters(self):
        with pytest.raises(SanitizationError, match="excessive control characters"):
            sanitize_input("text" + "\x01\x02\x03\x04\x05\x06\x07\x08\x09\x0A\x0B")

    def test_allows_ten_control_characters(self):
        result = sanitize_input("text\n\r\t\n\r\t\n\r\t\n")
        assert "\\n" in result
        assert "\\r" in result
        assert "\\t" in result

    @pytest.mark.parametrize("value", [123, None, {}, ["a"]])
    def test_rejects_non_strings(self, value):
        with pytest.raises(SanitizationError, match="must be a string"):
            sanitize_input(value)

    def test_sanitization_error_is_value_error(self):
        assert issubclass(SanitizationError, ValueError)


class TestEscapeJsString:

    def test_escaping_compounds(self):
        once = escape_js_string('say "hi"')
        assert once == 'say \\"hi\\"'
        assert escape_js_string(once) == 'say \\\\\\"hi\\\\\\"'


class TestSanitizeArray:

    def test_sanitizes_each_element(self):
        assert sanitize_array(["Task 1", "Task 2"]) == ["Task 1", "Task 2"]
        assert sanitize_array(['Task "one"', 'Task "two"']) == ['Task \\"one\\"', 'Task \\"two\\"']

    @pytest.mark.parametrize("value", ["not an array", 123, None])
    def test_rejects_non_arrays(self, value):
        with pytest.raises(SanitizationError, match="must be an array"):
            sanitize_array(value)

    def test_rejects_too_many_items(self):
        with pytest.raises(SanitizationError, match="exceeds maximum length of 100 items"):
            sanitize_array(["item"] * 101, 500, 100)

    def test_accepts_max_items(self):
        assert len(sanitize_array(["item"] * 100)) == 100

    def test_first_bad_element_aborts(self):
        with pytest.raises(SanitizationError, match="eval"):
            sanitize_array(["fine", "eval(x)", "also fine"])

    def test_element_length_limit(self):
        with pytest.raises(SanitizationError, match="maximum length of 10"):
            sanitize_array(["short", "a" * 11], max_length=10)

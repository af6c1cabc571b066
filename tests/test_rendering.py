"""Tests for template rendering."""

from dataclasses import dataclass

import pytest

from filecast.core.exceptions import TemplateError
from filecast.rendering import render


@dataclass
class HostVars:
    hostname: str
    port: int


class TestRender:
    def test_mapping_context(self):
        assert render("server {{ name }};", {"name": "web1"}) == "server web1;"

    def test_object_context_uses_attributes(self):
        assert render("{{ hostname }}:{{ port }}", HostVars("db1", 5432)) == "db1:5432"

    def test_plain_text_untouched(self):
        assert render("no placeholders here\n", None) == "no placeholders here\n"

    def test_trailing_newline_kept(self):
        assert render("{{ a }}\n", {"a": 1}) == "1\n"

    def test_empty_text(self):
        assert render("", {"a": 1}) == ""

    def test_undefined_variable_fails(self):
        with pytest.raises(TemplateError, match="missing"):
            render("hello {{ missing }}", {})

    def test_undefined_attribute_fails(self):
        with pytest.raises(TemplateError):
            render("{{ host.port }}", {"host": {}})

    def test_malformed_template_fails(self):
        with pytest.raises(TemplateError):
            render("{{ unclosed ", {"unclosed": 1})

    def test_error_keeps_cause(self):
        with pytest.raises(TemplateError) as excinfo:
            render("{{ nope }}", {})
        assert excinfo.value.__cause__ is not None

    def test_object_without_attributes_fails(self):
        with pytest.raises(TemplateError, match="mapping"):
            render("{{ x }}", 42)


class TestPassThrough:
    """Only {{ }} is a placeholder; other brace forms are file content."""

    def test_shell_length_expansion(self):
        text = 'n=${#ARGS[@]}\necho "$n"\n'
        assert render(text, {}) == text

    def test_hash_brace_sequence(self):
        text = "{# not a comment #}\n"
        assert render(text, {}) == text

    def test_block_tags_are_literal(self):
        text = "{% raw %}x{% endraw %}\n{% if a %}b{% endif %}\n"
        assert render(text, {}) == text

    def test_block_tags_next_to_placeholders(self):
        assert render("{% set x = 1 %}{{ x }}", {"x": 2}) == "{% set x = 1 %}2"

    def test_literal_braces_via_expression(self):
        assert render("{{ '{{' }} name }}", {}) == "{{ name }}"

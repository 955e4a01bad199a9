"""Tests for template-insert protection and regex escaping."""

import time
import unittest

from htmlbind.protect import TemplateProtector, escape_regexp


class TestEscapeRegexp(unittest.TestCase):
    def test_escapes_every_metacharacter(self):
        chars = "?+|$(){}[]^.-\\/*"
        assert escape_regexp(chars) == "".join("\\" + c for c in chars)

    def test_leaves_other_characters_alone(self):
        assert escape_regexp("<%=") == "<%="
        assert escape_regexp("abc") == "abc"

    def test_common_delimiters(self):
        assert escape_regexp("{{") == "\\{\\{"
        assert escape_regexp("${") == "\\$\\{"


class TestTemplateProtector(unittest.TestCase):
    def test_protect_and_restore_round_trip(self):
        html = "a {{x}} b {{ y }}"
        protector = TemplateProtector(("{{", "}}"))
        protected = protector.protect(html)
        assert protected == "a htmlbind_1_ b htmlbind_2_"
        assert protector.inserts == [("htmlbind_1_", "{{x}}"), ("htmlbind_2_", "{{ y }}")]
        assert protector.restore(protected) == html

    def test_inserts_are_non_greedy_and_may_span_lines(self):
        html = "{{#if a}}\n<p>{{ b\n }}</p>\n{{/if}}"
        protector = TemplateProtector(("{{", "}}"))
        protector.protect(html)
        assert [insert for _, insert in protector.inserts] == ["{{#if a}}", "{{ b\n }}", "{{/if}}"]

    def test_restore_replaces_every_occurrence(self):
        protector = TemplateProtector(("{{", "}}"))
        protector.protect("{{x}}")
        assert protector.restore("htmlbind_1_ and htmlbind_1_") == "{{x}} and {{x}}"

    def test_restore_keeps_inserts_with_backslashes(self):
        html = "{{ '\\1' }}"
        protector = TemplateProtector(("{{", "}}"))
        assert protector.restore(protector.protect(html)) == html

    def test_literal_token_in_markup_forces_counter_advance(self):
        html = "htmlbind_1_ {{x}}"
        protector = TemplateProtector(("{{", "}}"))
        protected = protector.protect(html)
        assert protector.inserts == [("htmlbind_2_", "{{x}}")]
        assert protected == "htmlbind_1_ htmlbind_2_"
        assert protector.restore(protected) == html

    def test_every_literal_token_is_skipped(self):
        html = "htmlbind_htmlbind_1_ htmlbind_2_ {{x}}"
        protector = TemplateProtector(("{{", "}}"))
        protected = protector.protect(html)
        assert protector.inserts == [("htmlbind_3_", "{{x}}")]
        assert protector.restore(protected) == html

    def test_token_followed_by_digits_does_not_collide(self):
        html = "{{a}}0_" + " {{b}}" * 10
        protector = TemplateProtector(("{{", "}}"))
        protected = protector.protect(html)
        assert protected.startswith("htmlbind_1_0_ ")
        assert [token for token, _ in protector.inserts][-1] == "htmlbind_11_"
        assert protector.restore(protected) == html

    def test_untracked_placeholder_text_is_left_alone(self):
        protector = TemplateProtector(("{{", "}}"))
        protector.protect("{{a}}")
        assert protector.restore("htmlbind_7_ htmlbind_1_") == "htmlbind_7_ {{a}}"
        assert not protector.contains_placeholder("htmlbind_7_")

    def test_pattern_is_none_without_inserts(self):
        protector = TemplateProtector(("{{", "}}"))
        assert protector.protect("<p>plain</p>") == "<p>plain</p>"
        assert protector.pattern is None
        assert protector.contains_placeholder("htmlbind_1_") is False
        assert protector.restore("htmlbind_1_") == "htmlbind_1_"

    def test_contains_placeholder(self):
        protector = TemplateProtector(("{{", "}}"))
        protector.protect("{{a}} {{b}}")
        assert protector.contains_placeholder("x htmlbind_2_ y")
        assert not protector.contains_placeholder("x y")

    def test_custom_delimiters_and_prefix(self):
        protector = TemplateProtector(("<%", "%>"), prefix="slot_")
        assert protector.protect("<p><%= a %></p>") == "<p>slot_1_</p>"

    def test_instances_do_not_share_state(self):
        first = TemplateProtector(("{{", "}}"))
        second = TemplateProtector(("{{", "}}"))
        first.protect("{{a}} {{b}}")
        assert second.protect("{{c}}") == "htmlbind_1_"

    def test_many_inserts_scale_linearly(self):
        html = "<p>{{x}} text text text text text</p>" * 20000
        protector = TemplateProtector(("{{", "}}"))
        start = time.perf_counter()
        protected = protector.protect(html)
        restored = protector.restore(protected)
        elapsed = time.perf_counter() - start
        assert restored == html
        assert len(protector.inserts) == 20000
        assert elapsed < 2.0

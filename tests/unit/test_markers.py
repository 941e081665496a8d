"""Tests for eject marker stripping and skip sentinels."""

from __future__ import annotations

import pytest

from ejecta.eject.markers import EjectRules, MarkerRule, strip_markers


class TestStripMarkers:
    """Test region removal with the default rules."""

    def test_strips_javascript_region(self) -> None:
        content = "a\n// @remove-on-eject-begin\nsecret\n// @remove-on-eject-end\nb"

        assert strip_markers(content) == "a\nb\n"

    def test_strips_applescript_region(self) -> None:
        content = (
            'tell application "Chrome"\n'
            "-- @remove-on-eject-begin\n"
            "set devMode to true\n"
            "-- @remove-on-eject-end\n"
            "end tell\n"
        )

        assert strip_markers(content) == 'tell application "Chrome"\nend tell\n'

    def test_strips_every_region(self) -> None:
        content = (
            "one\n"
            "// @remove-on-eject-begin\nx\n// @remove-on-eject-end\n"
            "two\n"
            "// @remove-on-eject-begin\ny\n// @remove-on-eject-end\n"
            "three\n"
        )

        assert strip_markers(content) == "one\ntwo\nthree\n"

    def test_region_ends_at_nearest_end_marker(self) -> None:
        content = (
            "// @remove-on-eject-begin\nfirst\n// @remove-on-eject-end\n"
            "kept\n"
            "// @remove-on-eject-end\n"
        )

        assert strip_markers(content) == "kept\n// @remove-on-eject-end\n"

    def test_inline_region(self) -> None:
        content = "const a = 1; // @remove-on-eject-begin dev only // @remove-on-eject-end\nb\n"

        assert strip_markers(content) == "const a = 1; b\n"

    def test_indented_region_keeps_following_indentation(self) -> None:
        content = (
            "{\n"
            "    // @remove-on-eject-begin\n"
            "    babelrc: false,\n"
            "    // @remove-on-eject-end\n"
            "    compact: true,\n"
            "}\n"
        )

        assert strip_markers(content) == "{\n    compact: true,\n}\n"

    def test_indented_region_after_code_on_same_line(self) -> None:
        content = "  loader: 'babel', // @remove-on-eject-begin\n  x\n  // @remove-on-eject-end\n}\n"

        assert strip_markers(content) == "  loader: 'babel', }\n"

    def test_unterminated_begin_is_left_alone(self) -> None:
        content = "a\n// @remove-on-eject-begin\nno end marker here\n"

        assert strip_markers(content) == content

    def test_mismatched_comment_syntax_does_not_pair(self) -> None:
        content = "// @remove-on-eject-begin\nx\n-- @remove-on-eject-end\n"

        assert strip_markers(content) == content

    def test_content_without_markers_only_normalizes_ending(self) -> None:
        assert strip_markers("const x = 1;\n\n\n  ") == "const x = 1;\n"
        assert strip_markers("const x = 1;") == "const x = 1;\n"

    def test_leading_whitespace_is_kept(self) -> None:
        assert strip_markers("\n\nindented\n") == "\n\nindented\n"

    def test_empty_result_is_single_newline(self) -> None:
        assert strip_markers("") == "\n"
        assert strip_markers("// @remove-on-eject-begin\nx\n// @remove-on-eject-end") == "\n"

    @pytest.mark.parametrize(
        "content",
        [
            "a\n// @remove-on-eject-begin\nsecret\n// @remove-on-eject-end\nb",
            "plain text   \n\n",
            "x\n// @remove-on-eject-begin\nnever closed\n",
            "",
        ],
    )
    def test_stripping_is_idempotent(self, content: str) -> None:
        once = strip_markers(content)

        assert strip_markers(once) == once


class TestEjectRules:
    """Test the combined rule set."""

    def test_skip_sentinel(self) -> None:
        rules = EjectRules()

        assert rules.should_skip("// @remove-file-on-eject\nmodule.exports = {};\n")
        assert not rules.should_skip("module.exports = {};\n")

    def test_render_returns_none_for_skipped_file(self) -> None:
        content = (
            "// @remove-on-eject-begin\nx\n// @remove-on-eject-end\n"
            "// @remove-file-on-eject\n"
        )

        assert EjectRules().render(content) is None

    def test_render_strips_regular_file(self) -> None:
        assert EjectRules().render("a   \n") == "a\n"

    def test_custom_rules_apply_in_order(self) -> None:
        rules = EjectRules(
            regions=(
                MarkerRule.for_comment("#"),
                MarkerRule(begin="<!-- drop -->", end="<!-- /drop -->"),
            ),
            skip_sentinels=("# @remove-file-on-eject",),
        )
        content = (
            "keep\n"
            "# @remove-on-eject-begin\nhidden\n# @remove-on-eject-end\n"
            "<!-- drop -->gone<!-- /drop -->\n"
            "// @remove-on-eject-begin\nnot a region for these rules\n// @remove-on-eject-end\n"
        )

        assert rules.strip(content) == (
            "keep\n"
            "// @remove-on-eject-begin\nnot a region for these rules\n// @remove-on-eject-end\n"
        )
        assert rules.should_skip("# @remove-file-on-eject\n")
        assert not rules.should_skip("// @remove-file-on-eject\n")

    def test_marker_rule_pattern_escapes_literals(self) -> None:
        rule = MarkerRule(begin="[[", end="]]")

        assert rule.strip("a[[b]]c") == "ac"

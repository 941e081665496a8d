"""
Conditional-inclusion annotations embedded in template files.

Template sources carry two kinds of annotations that only matter on eject:

- Region markers: a begin/end pair around code that the template needs but
  an ejected project does not. The whole region, markers included, is cut.
- Skip sentinels: a single line anywhere in a file that drops the file from
  the ejected tree entirely.

Both kinds are evaluated from one declarative rule set (``EjectRules``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property

REMOVE_BEGIN = "@remove-on-eject-begin"
REMOVE_END = "@remove-on-eject-end"
REMOVE_FILE = "@remove-file-on-eject"


@dataclass(frozen=True)
class MarkerRule:
    """
    A begin/end marker pair delimiting a removable region.

    Attributes:
        begin: Literal text opening the region
        end: Literal text closing the region
    """

    begin: str
    end: str

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        """
        Begin marker through the nearest end marker, plus the rest of that line.

        A begin marker that opens its line takes the line's indentation with it.
        """
        return re.compile(
            r"(?:^[^\S\n]*)?"
            + re.escape(self.begin)
            + r"[\s\S]*?"
            + re.escape(self.end)
            + r"[^\S\n]*\n?",
            re.MULTILINE,
        )

    @classmethod
    def for_comment(cls, prefix: str) -> MarkerRule:
        """Build the standard eject markers for a line-comment syntax."""
        return cls(begin=f"{prefix} {REMOVE_BEGIN}", end=f"{prefix} {REMOVE_END}")

    def strip(self, content: str) -> str:
        """Delete every region matched by this rule."""
        return self.pattern.sub("", content)


DEFAULT_MARKER_RULES: tuple[MarkerRule, ...] = (
    # JavaScript
    MarkerRule.for_comment("//"),
    # AppleScript
    MarkerRule.for_comment("--"),
)

DEFAULT_SKIP_SENTINELS: tuple[str, ...] = (f"// {REMOVE_FILE}",)


@dataclass(frozen=True)
class EjectRules:
    """
    Ordered rule set applied to every template file on eject.

    Region rules run in declaration order, each over the output of the
    previous one.
    """

    regions: tuple[MarkerRule, ...] = DEFAULT_MARKER_RULES
    skip_sentinels: tuple[str, ...] = field(default=DEFAULT_SKIP_SENTINELS)

    def should_skip(self, content: str) -> bool:
        """Check whether the file opts out of ejection entirely."""
        return any(sentinel in content for sentinel in self.skip_sentinels)

    def strip(self, content: str) -> str:
        """
        Remove all marked regions and normalize the file ending.

        An unterminated begin marker is left in place. The result always
        ends with exactly one newline.
        """
        for rule in self.regions:
            content = rule.strip(content)
        return content.rstrip() + "\n"

    def render(self, content: str) -> str | None:
        """
        Transform a template file for the ejected project.

        Returns:
            The stripped content, or None when the file must be skipped
        """
        if self.should_skip(content):
            return None
        return self.strip(content)


def strip_markers(content: str, rules: EjectRules | None = None) -> str:
    """Strip eject regions from content using the default rules unless given."""
    return (rules or EjectRules()).strip(content)

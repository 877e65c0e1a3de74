"""
Named extraction rules for delimited provider output.

Every section of a completion is wrapped in a pair of marker lines such
as ``## viral score start ##`` / ``## viral score ends ##``. Markers are
matched case-insensitively, with any run of ``#`` on either side and
flexible inner whitespace. Each rule below is independent so it can be
tested and tuned on its own.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Pattern


def marker_pattern(label: str) -> Pattern:
    """Compile the pattern for one ``## label ##`` marker."""
    words = [re.escape(word) for word in label.split()]
    return re.compile(r"#+[ \t]*" + r"\s+".join(words) + r"[ \t]*#+", re.IGNORECASE)


@dataclass(frozen=True)
class SectionRule:
    """
    A block delimited by a start and an end marker.

    When ``start_optional`` is set and no start marker precedes the end
    marker, the block runs from the beginning of the text.
    """

    name: str
    start_label: str
    end_label: str
    start_optional: bool = False
    start: Pattern = field(init=False, repr=False, compare=False)
    end: Pattern = field(init=False, repr=False, compare=False)
    whole: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "start", marker_pattern(self.start_label))
        object.__setattr__(self, "end", marker_pattern(self.end_label))
        object.__setattr__(
            self,
            "whole",
            re.compile(self.start.pattern + r"[\s\S]*?" + self.end.pattern, re.IGNORECASE)
        )

    def remove_blocks(self, text: str) -> str:
        """Drop every complete start..end block from ``text``."""
        return self.whole.sub("", text)

    def find_block(self, raw: str) -> Optional[str]:
        """Return the text between the markers, or None when the block is absent."""
        if not raw:
            return None

        start_match = self.start.search(raw)
        if start_match:
            end_match = self.end.search(raw, start_match.end())
            if end_match:
                return raw[start_match.end():end_match.start()]

        if self.start_optional:
            end_match = self.end.search(raw)
            if end_match:
                return raw[:end_match.start()]

        return None


SCRIPT_SECTION = SectionRule(
    name="script",
    start_label="script results start",
    end_label="script results ends",
    start_optional=True
)

ANALYSIS_SECTION = SectionRule(
    name="content_analysis",
    start_label="content analyses start",
    end_label="content analyses ends"
)

SCORE_SECTION = SectionRule(
    name="viral_score",
    start_label="viral score start",
    end_label="viral score ends"
)

# "- Title (Pontuação: 8/10): description" or "- Title (Score: 8/10): description"
ANALYSIS_LINE = re.compile(
    r"^\s*-\s*(?P<title>[\w\t /-]+?)\s*"
    r"\(\s*(?:score|pontuação|pontuacao)\s*:\s*(?P<score>\d+)\s*/\s*10\s*\)"
    r"\s*:\s*(?P<description>.*?)\s*$",
    re.IGNORECASE
)

# "Pontuação Viral: 77" or "Viral Score: 77"
SCORE_LABEL = re.compile(
    r"(?:pontuação\s+viral|pontuacao\s+viral|viral\s+score)\s*:?\s*(?P<score>\d+)",
    re.IGNORECASE
)

# Fallback for a score block holding just the number.
BARE_SCORE = re.compile(r"^\s*(?P<score>\d+)\s*$", re.MULTILINE)

EMPHASIS = re.compile(r"\*")

MAX_ITEM_SCORE = 10
MAX_AGGREGATE_SCORE = 100

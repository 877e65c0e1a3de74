"""
Response parser for provider completions.

Extracts three independent artifacts from free text: the script body,
the scored analysis items and the aggregate viral score. Extraction is
permissive and never raises on malformed input; each extractor degrades
to its empty/zero sentinel and the caller decides whether that is
acceptable.
"""

import logging
from typing import List, Optional

from ..models.content import AnalysisItem, ParsedContent
from . import rules


logger = logging.getLogger(__name__)


def extract_script(raw: str) -> str:
    """
    Extract the script body.

    The start marker is optional; the end marker is not. Analysis and
    score blocks caught inside the captured text are dropped. Returns the
    trimmed text with every ``*`` removed, or "" when no end marker exists.
    """
    block = rules.SCRIPT_SECTION.find_block(raw)
    if block is None:
        return ""

    for section in (rules.ANALYSIS_SECTION, rules.SCORE_SECTION):
        block = section.remove_blocks(block)

    return rules.EMPHASIS.sub("", block.strip())


def parse_analysis_line(line: str) -> Optional[AnalysisItem]:
    """Parse one ``- Title (Score: N/10): description`` line, or return None."""
    match = rules.ANALYSIS_LINE.match(rules.EMPHASIS.sub("", line))
    if not match:
        return None

    title = match.group("title").strip()
    description = match.group("description").strip()
    score = int(match.group("score"), 10)

    if not title or not description or score > rules.MAX_ITEM_SCORE:
        return None

    return AnalysisItem(title=title, score=score, description=description)


def extract_analysis_items(raw: str) -> List[AnalysisItem]:
    """
    Extract the analysis items, in source order.

    Lines that do not match the item shape are skipped; a missing block
    yields an empty list.
    """
    block = rules.ANALYSIS_SECTION.find_block(raw)
    if block is None:
        return []

    items = []
    for line in block.splitlines():
        if not line.strip():
            continue
        item = parse_analysis_line(line)
        if item is None:
            logger.debug(f"Skipping malformed analysis line: {line.strip()[:80]}")
            continue
        items.append(item)

    return items


def find_aggregate_score(raw: str) -> Optional[int]:
    """Return the score in the viral score block, or None when absent or unparseable."""
    block = rules.SCORE_SECTION.find_block(raw)
    if block is None:
        return None

    block = rules.EMPHASIS.sub("", block)
    match = rules.SCORE_LABEL.search(block) or rules.BARE_SCORE.search(block)
    if not match:
        return None

    score = int(match.group("score"), 10)
    if score > rules.MAX_AGGREGATE_SCORE:
        return None

    return score


def extract_aggregate_score(raw: str) -> int:
    """Extract the aggregate score; 0 when the block is absent or unparseable."""
    score = find_aggregate_score(raw)
    return score if score is not None else 0


def parse_completion(raw: str, platform: str = None) -> ParsedContent:
    """
    Run every extractor over one raw completion.

    Args:
        raw: Provider text
        platform: Platform the completion belongs to, for log context only

    Returns:
        ParsedContent, possibly holding empty/zero sentinels
    """
    raw = raw or ""
    score = find_aggregate_score(raw)

    parsed = ParsedContent(
        script_body=extract_script(raw),
        analysis_items=extract_analysis_items(raw),
        aggregate_score=score if score is not None else 0,
        has_aggregate_score=score is not None
    )

    label = platform or "completion"
    if not parsed.script_body:
        logger.warning(f"No script section found for {label}")
    if not parsed.analysis_items:
        logger.warning(f"No content analysis items found for {label}")
    if score is None:
        logger.warning(f"No viral score found for {label}")

    return parsed

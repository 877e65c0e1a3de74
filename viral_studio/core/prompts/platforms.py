"""
Platform format templates and lookup.

Each entry in BUILTIN_PLATFORM_FORMATS describes the structure a script
should take on that platform. A configuration store may override any
entry; platforms with neither a stored nor a built-in template get an
empty template, which is not an error.
"""

import logging
from typing import Optional

from ..models.content import PlatformFormat
from ..ports import PlatformFormatStore


logger = logging.getLogger(__name__)


BUILTIN_PLATFORM_FORMATS = {

    "youtube": """YOUTUBE SCRIPT FORMAT (full script required):
- Write the complete spoken script, not an outline or bullet list.
- The script must flow as if the creator is speaking directly to the audience.
- Adapt it fully to the topic and audience; avoid generic examples.
- After the script, list 5 benefits of the strategy used and 5 tips to apply it.
  Benefits and tips appear ONLY after the full script.

[Video Title]: an intriguing title that earns the click.
[Hook - 5-10 seconds]: a bold statement, question or surprising fact about the topic.
[Introduction - 15-30 seconds]: who is speaking and what the viewer will gain.
[Main Content - 3-7 minutes]: the substance, split into clear segments with examples.
[Engagement Prompt]: a question that invites comments.
[Final Takeaway - 30-60 seconds]: the key points, summarised.
[Call to Action - 10 seconds]: one clear next step for the viewer.""",

    "instagram": """INSTAGRAM FORMAT:
- Caption of 150-300 words written for mobile reading: short lines, generous spacing.
- Optional carousel: up to 10 slides, one idea per slide.

[Hook]: a first line that stops the scroll.
[Story]: the main content in short, relatable chunks.
[Engagement Prompt]: a question for the comments.
[Call to Action]: save, share or follow, with a concrete reason.
[Hashtags]: 5-10 specific, relevant hashtags.""",

    "newsletter": """NEWSLETTER FORMAT:
- 500-1200 words in a personal, direct voice.

[Subject Line]: under 50 characters, specific and curiosity-driven.
[Preview Text]: one sentence that complements the subject line.
[Opening Hook]: a relatable scenario or surprising fact.
[Main Content]: 3-5 sections with subheadings and practical takeaways.
[Engagement Prompt]: invite the reader to reply.
[Final Takeaway]: the single idea the reader should remember.
[Call to Action]: one link or action.""",

    "linkedin": """LINKEDIN FORMAT:
- 150-300 words, professional but personal; short paragraphs of 1-2 lines.
- No external links in the body.

[Hook]: a first line that works before the "see more" cut.
[Story]: a professional experience or insight with a concrete detail.
[Lesson]: what the reader can apply at work.
[Question]: an open question for the comments.
[Call to Action]: a clear, low-effort next step.
[Hashtags]: 3-5 professional hashtags.""",

    "twitter": """TWITTER/X THREAD FORMAT:
- 5-8 tweets, each under 280 characters, numbered 1/, 2/, ...
- The first tweet must stand alone as the hook.

[Tweet 1 - Hook]: the boldest claim or most surprising fact.
[Tweets 2-6 - Main Content]: one idea per tweet, concrete and specific.
[Tweet 7 - Engagement Prompt]: a question or prompt for replies.
[Tweet 8 - Call to Action]: retweet the first tweet or follow for more on the topic.""",

    "facebook": """FACEBOOK FORMAT:
- 100-250 words in a warm, conversational tone.
- Structure breakdown appears ONLY at the end of the response.

[Hook]: a relatable opening.
[Story]: the main content in short chunks.
[Question]: an engagement prompt.
[CTA]: one clear action step.""",
}


def get_builtin_format(platform: str) -> str:
    """Built-in template for a platform, or an empty string."""
    return BUILTIN_PLATFORM_FORMATS.get(platform.lower(), "")


class PlatformFormatResolver:
    """
    Look up the format template for a platform.

    Stored templates win over built-in ones. Lookup never fails on a
    missing entry; store errors propagate to the caller.
    """

    def __init__(self, store: Optional[PlatformFormatStore] = None, use_builtin: bool = True):
        self.store = store
        self.use_builtin = use_builtin

    async def get_platform_format(self, platform: str) -> PlatformFormat:
        """Resolve the template for ``platform``."""
        platform_id = platform.strip().lower()

        template = None
        if self.store is not None:
            template = await self.store.get_template(platform_id)

        if template is None and self.use_builtin:
            template = get_builtin_format(platform_id)

        if not template:
            logger.debug(f"No format template for platform: {platform_id}")

        return PlatformFormat(platform_id=platform_id, template_text=template or "")

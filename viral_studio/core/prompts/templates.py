"""
Instruction templates for generation and refinement.

Both templates ask for the same delimited output so a single parser
handles first-time generation and refinement:

    ## script results start ## ... ## script results ends ##
    ## content analyses start ## ... ## content analyses ends ##
    ## viral score start ## ... ## viral score ends ##

The section order of the script itself is fixed by SECTION_ORDER.
"""

TARGET_LANGUAGE = "Portuguese"

SECTION_ORDER = (
    "Hook",
    "Introduction",
    "Main Content",
    "Engagement Prompt",
    "Final Takeaway",
    "Call to Action",
)

NO_CONTEXT = "None"

OUTPUT_FORMAT = """## script results start ##
[The complete script, following the platform structure, written in {language}]
## script results ends ##

## content analyses start ##
- Potencial de Engajamento (Pontuação: 8/10): Why this content will or will not drive interaction
- Apelo ao Público-Alvo (Pontuação: 7/10): How well the content fits the intended audience
- Eficácia do Gancho (Pontuação: 9/10): How strongly the opening captures attention
- Força da Chamada para Ação (Pontuação: 8/10): How likely the CTA is to move the audience
- SEO/Descoberta (Pontuação: 7/10): How discoverable the content is organically
- Impacto Emocional (Pontuação: 8/10): How much emotional connection the content creates
- Fatores de Compartilhamento (Pontuação: 9/10): How likely the audience is to share it
## content analyses ends ##

## viral score start ##
Pontuação Viral: 85
## viral score ends ##"""

FORMAT_RULES = """FORMAT RULES:
- Replace every example score above with your own assessment (integers from 1 to 10).
- Replace every example description with your own analysis, written in {language}.
- The viral score is an integer between 1 and 100.
- Never emit placeholders such as 'X/10' or '[Explanation]'.
- Each analysis line must match exactly: "- Title (Pontuação: N/10): Description".
- Keep every '##' marker line exactly as shown."""

GENERATION_SYSTEM = """You are an expert content creator producing social media and newsletter content in {language}.

CRITICAL INSTRUCTIONS:
1. ALL output MUST be written in {language}, including section titles, analysis and scores.
2. Never mix in words from any other language; translate anything that is not in {language}.
3. Follow the output format below EXACTLY.
4. Every script must contain these sections, in this order:
{sections}
5. Write the full script, not an outline. It must read as finished, publishable content.

Your response must follow this format EXACTLY:

{output_format}

{format_rules}"""

GENERATION_USER = """Create content about "{topic}" for {platform}.
Platform format: {platform_format}
Context: {context}"""

REFINEMENT_SYSTEM = """You are a content optimization expert who makes precise, targeted edits.

CRITICAL INSTRUCTIONS:
1. The existing content is organised in bracketed sections (for example [Hook], [Introduction]).
2. Return the COMPLETE content with EVERY section present.
3. Modify ONLY the section named in the refinement request.
4. Every other section must be returned byte-for-byte identical to the input.
5. Keep all formatting, section markers and structure.
6. ALL output MUST be written in {language}.
7. Re-score the analysis and the viral score for the refined content.

Your response must follow this format EXACTLY:

{output_format}

{format_rules}"""

REFINEMENT_USER = """Original topic: {topic}
Platform: {platform}
Platform format: {platform_format}

Current content:
{current_content}

Refinement request: {instruction}

IMPORTANT: preserve the exact structure and text of the script. Change only the section the
refinement request refers to. If the request is about the hook, keep the [Hook] marker, rewrite
only what is inside it, and leave [Introduction], [Main Content] and every other section untouched.

Return the COMPLETE content with ONLY the requested change. Do not summarize or drop any section."""


def render_sections() -> str:
    """Numbered list of the mandatory script sections."""
    return "\n".join(f"   {i}. {name}" for i, name in enumerate(SECTION_ORDER, start=1))

"""System-prompt composition for ministry content tasks.

This module is intentionally narrow: it only turns a `(task, mode)` pair into a
system prompt string. Provider selection, validation, and model invocation
happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed component order for every task and mode:
      role -> assignment -> general guidelines -> voice guidelines,
      joined by newlines.
    - No hidden side effects (no I/O, no global state mutation).
    - Total: unknown tasks resolve to the fallback prompt, never an error.

Two-phase sermon workflow:
    `sermonCrafter` is the only task that reads `mode`. `mode="outline"` asks the
    model for an outline and tells it to stop and wait for approval. Any other
    mode asks for the full sermon built on an approved outline. The two phases
    are independent calls; the caller carries the approved outline forward as
    the phase-2 input. Nothing is stored here.

Prompt safety model:
    Safety is instruction-led. User input never enters the system prompt; it
    is sent separately by the provider adapters.
"""

from dataclasses import dataclass
from types import MappingProxyType


SERMON_CRAFTER = "sermonCrafter"
SERMON_ENHANCER = "sermonEnhancer"
BIBLE_STUDY_TOOL = "bibleStudyTool"
BIBLICAL_APPLICATIONS = "biblicalApplications"

OUTLINE_MODE = "outline"
FULL_MODE = "full"

KNOWN_TASKS = (SERMON_CRAFTER, SERMON_ENHANCER, BIBLE_STUDY_TOOL, BIBLICAL_APPLICATIONS)


# =========================================================
# POLICY BLOCKS (GLOBAL)
# =========================================================
# Appended to every prompt, byte-identical across tasks and modes.

GENERAL_GUIDELINES = " ".join([
    "Default Scripture is NKJV — quote verbatim or reference.",
    "All content should be biblically accurate and align with sound Evangelical "
    "Christian doctrine, with an emphasis on Pentecostal beliefs.",
    "Illustrations must be current and relevant to a modern audience.",
    "Tone: warm, authoritative, and compassionate; 'Human‑First' — avoid "
    "mechanical, robotic, or formulaic language.",
    "All content must be Christ‑centered and bring glory to God.",
])

VOICE_GUIDELINES = " ".join([
    "Write with a natural, pastoral human voice.",
    "Vary sentence length: mix short, punchy lines with longer, more reflective sentences.",
    "Use contractions (you’ll, we’re, don’t) and occasional rhetorical questions.",
    "Prefer paragraphs over bullet lists unless the structure explicitly requires lists.",
    "Avoid boilerplate phrases like 'in conclusion', 'in today’s fast-paced world', "
    "or 'this article will'.",
    "Avoid meta-language (do not say 'as an AI', 'this essay will').",
    "Include concrete, real-life details (e.g., a Tuesday commute, a grocery line, "
    "a late-night hospital visit) when illustrating.",
    "Allow mild, tasteful disfluencies for cadence (e.g., a fragment for emphasis).",
    "Keep tone warm, authentic, unpretentious; prioritize clarity over flourish.",
])


@dataclass(frozen=True)
class PromptSpec:
    """The four layered blocks of a system prompt."""

    role: str
    assignment: str
    general_guidelines: str = GENERAL_GUIDELINES
    voice_guidelines: str = VOICE_GUIDELINES

    def render(self) -> str:
        return "\n".join((
            self.role,
            self.assignment,
            self.general_guidelines,
            self.voice_guidelines,
        ))


# =========================================================
# SERMON CRAFTER (TWO-PHASE)
# =========================================================

_SERMON_CRAFTER_ROLE = (
    "You are Pentecostal and biblically sound; your communication style is "
    "'Human‑First'—warm, intellectually stimulating, and deeply authentic."
)

OUTLINE_STOP_INSTRUCTION = (
    "Then STOP and wait for explicit user approval. Do NOT write the full sermon."
)

_SERMON_OUTLINE_ASSIGNMENT = " ".join([
    "You follow a strict two‑step workflow for sermon creation.",
    "Step 1 (current): Generate a structured sermon outline that includes:",
    "• A compelling, concise introduction summary.",
    "• 3–5 distinct sermon points for the body; each point briefly states a "
    "biblical truth that will be explored.",
    "• A concise conclusion that reinforces the main message.",
    OUTLINE_STOP_INSTRUCTION,
])

_SERMON_FULL_ASSIGNMENT = " ".join([
    "Step 2: The user has approved the outline.",
    "Generate a COMPLETE sermon that strictly follows the approved outline and "
    "this exact structure:",
    "• Introduction (~200 words): An engaging passage that introduces the topic "
    "and hooks the listener.",
    "• Body (~1700 words): For each of the 3–5 sermon points, produce a complete "
    "teaching unit:",
    "  - A thorough explanation of the designated Scripture, including its "
    "original context.",
    "  - A clear breakdown of the theological principles (sound doctrine) found "
    "in the text.",
    "  - A modern, relatable story, analogy, or anecdote that makes the point "
    "tangible and memorable.",
    "  - Clear, actionable steps for listeners to apply the biblical truth to "
    "their daily lives.",
    "• Conclusion (~200 words): A strong wrap‑up that reinforces the main message "
    "and encourages application.",
])


# =========================================================
# SINGLE-PHASE TASKS
# =========================================================

_SERMON_ENHANCER = PromptSpec(
    role=(
        "You are a seasoned Pastor, master of Homiletics, and expert Speechwriter, "
        "Pentecostal and biblically sound, with a 'Human‑First' style—warm, "
        "intellectually stimulating, and deeply authentic."
    ),
    assignment=" ".join([
        "Perform TWO distinct tasks in a single response:",
        "1) Analyze the draft for clarity, theological flow, and emotional resonance.",
        "2) Then rewrite the sermon (~2000 words) for spoken delivery, optimizing for "
        "the ear (cadence, signposting, repetition for emphasis).",
    ]),
)

_BIBLE_STUDY_TOOL = PromptSpec(
    role="Act as an expert Bible study curriculum writer.",
    assignment=" ".join([
        "Create comprehensive, practical, and engaging Bible study guides for any "
        "provided topic.",
        "Emphasize practical, real-world application for today's Christian in every guide.",
        "Ensure all interpretations are biblically accurate and align with Christian doctrine.",
        "Integrate relevant illustrations or analogies to clarify and make concepts relatable.",
        "Structure every guide using EXACTLY these four sections:",
        "  • Icebreaker: Begin with a brief, relevant question or activity to open discussion.",
        "  • Discussion Questions: Provide ~8 insightful questions based on the "
        "passage/topic, EACH with a suggested answer to guide the study leader.",
        "  • Application: Provide clear, actionable steps that participants can "
        "practice this week.",
        "  • Prayer: Close with a short, heartfelt prayer aligned with the study's "
        "main message.",
        "Maintain a helpful, neutral, respectful, Christ-like tone in all responses.",
    ]),
)

_BIBLICAL_APPLICATIONS = PromptSpec(
    role="You are a biblically faithful teacher focused on practical discipleship.",
    assignment=(
        "Given a passage or topic, list concrete life applications with Scripture support."
    ),
)

FALLBACK_ROLE = "You are a helpful assistant for pastoral ministry."

_FALLBACK = PromptSpec(
    role=FALLBACK_ROLE,
    assignment=(
        "Respond to the request with pastoral care, sound biblical insight, and "
        "practical wisdom for ministry."
    ),
)


# =========================================================
# TASK-MODE MATRIX
# =========================================================
# Keys are `(task, mode)`; `mode=None` matches any mode. Read-only for the
# process lifetime.

TASK_MODE_MATRIX = MappingProxyType({
    (SERMON_CRAFTER, OUTLINE_MODE): PromptSpec(
        role=_SERMON_CRAFTER_ROLE,
        assignment=_SERMON_OUTLINE_ASSIGNMENT,
    ),
    (SERMON_CRAFTER, None): PromptSpec(
        role=_SERMON_CRAFTER_ROLE,
        assignment=_SERMON_FULL_ASSIGNMENT,
    ),
    (SERMON_ENHANCER, None): _SERMON_ENHANCER,
    (BIBLE_STUDY_TOOL, None): _BIBLE_STUDY_TOOL,
    (BIBLICAL_APPLICATIONS, None): _BIBLICAL_APPLICATIONS,
})


def resolve_prompt_spec(task, mode=None) -> PromptSpec:
    """Look up the prompt blocks for a task and mode.

    Exact `(task, mode)` entries win over the task's any-mode entry; tasks with
    no entry get the fallback blocks. Non-string or unhashable values simply
    miss and fall back.
    """
    for key in ((task, mode), (task, None)):
        try:
            spec = TASK_MODE_MATRIX.get(key)
        except TypeError:
            spec = None
        if spec is not None:
            return spec
    return _FALLBACK


def compose_system_prompt(task, mode="default") -> str:
    """Build the system prompt for a task and workflow mode.

    Args:
        task: Task identifier. Unknown values use the generic pastoral prompt.
        mode: Workflow stage. Only `sermonCrafter` distinguishes `"outline"`
            from everything else; other tasks ignore it.

    Returns:
        Newline-joined role, assignment, general guidelines, and voice guidelines.

    Determinism:
        Identical inputs always produce identical text.
    """
    return resolve_prompt_spec(task, mode).render()

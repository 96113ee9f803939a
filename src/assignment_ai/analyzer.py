"""Rule-based assignment analysis.

Every function here is total over ``str`` input: no I/O, no state, and a
deterministic fallback for each step.
"""

from __future__ import annotations

import logging
import re

from .models import AnalysisResult, AssignmentType

logger = logging.getLogger(__name__)

# Checked in order; the first rule with a matching needle wins.
TYPE_RULES: tuple[tuple[tuple[str, ...], AssignmentType], ...] = (
    (("essay", "write"), AssignmentType.WRITING),
    (("quiz", "test"), AssignmentType.QUIZ_TEST),
    (("code", "program"), AssignmentType.PROGRAMMING),
    (("research", "report"), AssignmentType.RESEARCH),
    (("present",), AssignmentType.PRESENTATION),
)

REQUIREMENT_PHRASES = ("must", "should", "need to", "required", "minimum", "at least")

TOPIC_KEYWORDS = (
    "python", "javascript", "programming", "math", "history", "science",
    "literature", "physics", "chemistry", "biology", "economics", "business",
    "art", "music", "philosophy", "psychology", "sociology", "anthropology",
    "engineering", "medicine", "law", "education", "technology", "climate",
    "environment", "politics", "health", "sport", "culture", "religion",
    "language", "geography", "debate", "ethics", "research", "analysis",
    "design", "development", "testing", "implementation", "evaluation",
)
MAX_TOPICS = 5
SUMMARY_SENTENCES = 3

EXTERNAL_RESOURCES_NOTE = "Additional requirements from external resources have been incorporated."

_BULLET_RE = re.compile(r"^[ \t]*[•\-*][ \t]*(.*)$", re.MULTILINE)
_NUMBERED_RE = re.compile(r"^[ \t]*\d+\.[ \t]*(.*)$", re.MULTILINE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_ANCHOR_HREF_RE = re.compile(r"""<a[^>]+href=["']([^"']+)["'][^>]*>""")

APPROACH_STEPS: dict[AssignmentType, tuple[str, ...]] = {
    AssignmentType.WRITING: (
        "Start by outlining your main arguments",
        "Create a strong thesis statement",
        "Develop each point with evidence and analysis",
        "Write a compelling introduction and conclusion",
        "Review for clarity, coherence, and grammar",
    ),
    AssignmentType.PROGRAMMING: (
        "Break down the problem into smaller components",
        "Plan your data structures and algorithms",
        "Implement the core functionality first",
        "Add error handling and edge case management",
        "Test thoroughly with various inputs",
        "Document your code and approach",
    ),
    AssignmentType.RESEARCH: (
        "Gather sources and relevant research",
        "Analyze different perspectives on the topic",
        "Organize your findings into logical sections",
        "Develop your own analysis based on the research",
        "Cite sources properly and create a bibliography",
    ),
    AssignmentType.QUIZ_TEST: (
        "Review key concepts and definitions",
        "Practice with similar problems or questions",
        "Identify patterns in question types",
        "Create a structured approach for each question type",
        "Allocate time based on point values",
    ),
    AssignmentType.PRESENTATION: (
        "Define your key message and takeaways",
        "Structure content with a clear beginning, middle, and end",
        "Include visual elements to support your points",
        "Prepare speaking notes and practice delivery",
        "Anticipate questions and prepare responses",
    ),
    AssignmentType.GENERAL: (
        "Understand all requirements thoroughly",
        "Break down the assignment into manageable parts",
        "Create a structured outline addressing each requirement",
        "Develop high-quality content for each section",
        "Review against the original requirements",
    ),
}

_DEFAULT_GUIDANCE = (
    "Structure your response clearly with appropriate headings and sections.",
    "Balance theoretical knowledge with practical applications.",
    "Include specific examples that demonstrate understanding of the concepts.",
)

PROMPT_GUIDANCE: dict[AssignmentType, tuple[str, ...]] = {
    AssignmentType.WRITING: (
        "Structure your response with a clear introduction, well-developed body paragraphs, and a conclusion.",
        "Use formal academic language and avoid colloquialisms.",
        "Include a thesis statement in the introduction that previews your main arguments.",
        "Each paragraph should have a clear topic sentence and supporting evidence.",
    ),
    AssignmentType.PROGRAMMING: (
        "Include well-commented code examples that address the requirements.",
        "Explain your approach and the logic behind your code.",
        "Consider edge cases and error handling in your implementation.",
        "Include explanations of any algorithms or data structures you use.",
    ),
    AssignmentType.RESEARCH: (
        "Present a balanced view of the topic, considering multiple perspectives.",
        "Cite relevant sources and research to support your arguments.",
        "Structure your response with clear sections addressing different aspects of the topic.",
        "Conclude with implications or recommendations based on your research.",
    ),
    AssignmentType.PRESENTATION: (
        "Create a clear structure with an introduction, main points, and conclusion.",
        "Include visual elements or descriptions where appropriate.",
        "Use engaging language that would capture the audience's attention.",
        "Include speaker notes or additional context where needed.",
    ),
    AssignmentType.QUIZ_TEST: _DEFAULT_GUIDANCE,
    AssignmentType.GENERAL: _DEFAULT_GUIDANCE,
}


def classify_assignment_type(description: str) -> AssignmentType:
    text = description.lower()
    for needles, assignment_type in TYPE_RULES:
        if any(needle in text for needle in needles):
            return assignment_type
    return AssignmentType.GENERAL


def _split_sentences(description: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(description) if s.strip()]


def _line_items(pattern: re.Pattern[str], description: str) -> list[str]:
    return [m.group(1).strip() for m in pattern.finditer(description) if m.group(1).strip()]


def extract_requirements(description: str) -> list[str]:
    """Pull requirement fragments out of free text.

    Stages run in order and the first one that yields anything is returned
    on its own: bullet lines, numbered lines, sentences containing a
    requirement phrase, and finally the first few sentences as a summary.
    """
    bullets = _line_items(_BULLET_RE, description)
    if bullets:
        logger.debug("requirements from %d bullet lines", len(bullets))
        return bullets

    numbered = _line_items(_NUMBERED_RE, description)
    if numbered:
        logger.debug("requirements from %d numbered lines", len(numbered))
        return numbered

    sentences = _split_sentences(description)
    phrased = [
        s for s in sentences if any(phrase in s.lower() for phrase in REQUIREMENT_PHRASES)
    ]
    if phrased:
        logger.debug("requirements from %d phrase sentences", len(phrased))
        return phrased

    logger.debug("requirements from leading sentences")
    return sentences[:SUMMARY_SENTENCES]


def extract_topics(description: str) -> list[str]:
    text = description.lower()
    topics = [kw[0].upper() + kw[1:] for kw in TOPIC_KEYWORDS if kw in text]
    if not topics:
        return [classify_assignment_type(description).value]
    return topics[:MAX_TOPICS]


def extract_external_links(description: str) -> list[str]:
    """Return anchor hrefs in document order, skipping in-page ``#`` links."""
    return [
        href for href in _ANCHOR_HREF_RE.findall(description) if not href.startswith("#")
    ]


def suggested_approach(assignment_type: AssignmentType) -> str:
    steps = APPROACH_STEPS[assignment_type]
    return "\n".join(f"{idx}. {step}" for idx, step in enumerate(steps, start=1))


def custom_prompt(
    assignment_type: AssignmentType,
    requirements: list[str],
    topics: list[str],
) -> str:
    requirements_text = "\n".join(f"- {req}" for req in requirements)
    preamble = (
        "You are a knowledgeable assistant helping a student complete an assignment.\n"
        f"Assignment type: {assignment_type.value}\n"
        f"Topics: {', '.join(topics)}\n"
        "\n"
        "Key requirements:\n"
        f"{requirements_text}\n"
        "\n"
        "Create a well-structured, thoughtful response that addresses all requirements.\n"
        "Write in a clear, academic style that demonstrates understanding of the subject.\n"
        "Provide specific examples and evidence to support your points.\n"
        "Ensure the work is original and tailored to the specific assignment.\n"
    )
    guidance = "\n".join(PROMPT_GUIDANCE[assignment_type])
    return f"{preamble}\n{guidance}"


def analyze(description: str, external_content: str | None = None) -> AnalysisResult:
    assignment_type = classify_assignment_type(description)
    requirements = extract_requirements(description)
    topics = extract_topics(description)
    links = extract_external_links(description)
    approach = suggested_approach(assignment_type)
    prompt = custom_prompt(assignment_type, requirements, topics)

    # External text is not mined; the note only records that it was supplied.
    if external_content is not None:
        requirements.append(EXTERNAL_RESOURCES_NOTE)

    logger.debug(
        "classified as %s with %d topics, %d requirements, %d links",
        assignment_type.value,
        len(topics),
        len(requirements),
        len(links),
    )
    return AnalysisResult(
        assignment_type=assignment_type,
        topics=tuple(topics),
        requirements=tuple(requirements),
        suggested_approach=approach,
        external_links=tuple(links),
        custom_prompt=prompt,
    )

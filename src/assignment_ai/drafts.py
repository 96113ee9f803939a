"""Markdown draft templates keyed by assignment type."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .models import AnalysisResult, AssignmentType, DraftResult

logger = logging.getLogger(__name__)

EXTERNAL_CITATION = "External resource cited in this draft"
DRAFT_NOTES = (
    "This draft has been generated based on the assignment requirements. "
    "Please review and personalize it as needed."
)

DraftGenerator = Callable[[str, AnalysisResult], str]


def build_context(description: str, external_content: str | None = None) -> str:
    if external_content is None:
        return description
    return f"Assignment Details:\n{description}\n\nAdditional Context:\n{external_content}"


def _title(analysis: AnalysisResult) -> str:
    return analysis.topics[0] if analysis.topics else analysis.assignment_type.value


def _overview(context: str, limit: int) -> str:
    return f"{context[:limit]}..."


def _requirements_list(analysis: AnalysisResult) -> str:
    return "\n".join(f"- {req}" for req in analysis.requirements)


def _approach_lines(analysis: AnalysisResult) -> list[str]:
    return [line.strip() for line in analysis.suggested_approach.splitlines() if line.strip()]


def _strip_marker(line: str) -> str:
    return line[2:].strip() if line.startswith("- ") else line


def programming_draft(context: str, analysis: AnalysisResult) -> str:
    strategy = "\n".join(_approach_lines(analysis))
    return f"""# {_title(analysis)}

## Assignment Overview
{_overview(context, 200)}

## Requirements
{_requirements_list(analysis)}

## Implementation Strategy
{strategy}

## Implementation Plan
1. Understand the problem requirements completely
2. Design the solution architecture using appropriate programming patterns
3. Implement the core functionality with robust error handling
4. Create comprehensive tests to verify correctness
5. Document the code and solution approach

## Conclusion
This implementation plan addresses all the specified requirements while ensuring code quality, maintainability, and performance.

## Notes
{analysis.custom_prompt}
"""


def writing_draft(context: str, analysis: AnalysisResult) -> str:
    outline = "\n\n".join(
        f"### {_strip_marker(line)}" if line.startswith("- ") else f"## {line}"
        for line in _approach_lines(analysis)
    )
    return f"""# {_title(analysis)}

## Assignment Overview
{_overview(context, 300)}

## Requirements
{_requirements_list(analysis)}

## Outline
{outline}

## Writing Approach
1. Conduct thorough research on the topic using credible sources
2. Develop a clear thesis statement that addresses the main requirements
3. Structure the essay with a logical flow of ideas
4. Support arguments with evidence and examples
5. Conclude with meaningful insights and implications

## Notes
{analysis.custom_prompt}
"""


def research_draft(context: str, analysis: AnalysisResult) -> str:
    title = _title(analysis)
    blocks: list[str] = []
    section = 0
    for line in _approach_lines(analysis):
        if line.startswith("- "):
            blocks.append(f"### {section}. {_strip_marker(line)}")
        else:
            section += 1
            blocks.append(f"## {section}. {line}")
    sections = "\n\n".join(blocks)
    topics = ", ".join(analysis.topics) or title
    return f"""# {title}

## Abstract

This research paper will examine {title.lower()} through a systematic investigation of the topic, incorporating analysis of relevant data and literature. The research aims to address key questions about {topics} and provide insights on their implications.

## Assignment Overview
{_overview(context, 300)}

## Research Requirements
{_requirements_list(analysis)}

{sections}

## Methodology

This research will employ a mixed-methods approach combining:

- Literature review of relevant scholarly sources
- Data analysis from primary and secondary sources
- Comparative case studies
- Synthesis of findings into actionable recommendations

## Expected Outcomes

This research aims to contribute to the understanding of {title} by:
1. Identifying key patterns and relationships
2. Establishing a theoretical framework for analysis
3. Providing evidence-based recommendations
4. Opening avenues for future research

## Notes
{analysis.custom_prompt}
"""


def presentation_draft(context: str, analysis: AnalysisResult) -> str:
    title = _title(analysis)
    slide_topics = [_strip_marker(line) for line in _approach_lines(analysis)]
    # Slides 1 and 2 are the title and overview slides.
    first = 3
    slides = "\n\n".join(
        f"""### Slide {number}: {topic}
**Key Points:**
- Topic exploration
- Supporting evidence
- Visual elements
- Discussion points

*[Speaker notes: Focus on clear explanation of concepts and engaging delivery.]*"""
        for number, topic in enumerate(slide_topics, start=first)
    )
    agenda = "\n".join(f"- {topic}" for topic in slide_topics)
    after = first + len(slide_topics)
    return f"""# {title}
## Presentation Outline

### Slide 1: Title Slide
**{title}**
- Presenter Name
- Date
- Course Information

### Slide 2: Presentation Overview
**Today's Agenda:**
{agenda}

## Assignment Overview
{_overview(context, 150)}

## Presentation Requirements
{_requirements_list(analysis)}

{slides}

### Slide {after}: Key Takeaways
**Remember These Points:**
- Main insights from the presentation
- Critical analysis of the topic
- Real-world applications
- Future research directions

*[Speaker notes: Emphasize actionable insights participants can apply.]*

### Slide {after + 1}: Discussion Questions
**Let's Discuss:**
- What aspects of {title} do you find most interesting?
- How can these concepts be applied in practice?
- What challenges might arise in implementation?
- How might future developments change our understanding?

*[Speaker notes: Prepare additional prompts if discussion is slow to start.]*

### Slide {after + 2}: Thank You
**Contact Information:**
- Email address
- References and resources for further reading

## Notes
{analysis.custom_prompt}
"""


def general_draft(context: str, analysis: AnalysisResult) -> str:
    title = _title(analysis)
    blocks: list[str] = []
    section = 0
    subsection = 0
    for line in _approach_lines(analysis):
        if line.startswith("- "):
            subsection += 1
            blocks.append(
                f"""### {section}.{subsection} {_strip_marker(line)}

This subsection explores key aspects of the topic in detail, providing analysis and examples.

- Important point 1 related to this subtopic
- Important point 2 related to this subtopic
- Supporting evidence and analysis
- Practical implications"""
            )
        else:
            section += 1
            subsection = 0
            blocks.append(
                f"""## {section}. {line}

This section provides an overview of {line.lower()}, examining its significance and relationship to the overall topic."""
            )
    sections = "\n\n".join(blocks)
    return f"""# {title}

## Assignment Overview
{_overview(context, 200)}

## Requirements
{_requirements_list(analysis)}

## Introduction

This assignment analyzes {title.lower()} and its various dimensions. The analysis covers key aspects, implications, and considerations related to this topic. By evaluating current research and relevant factors, this work aims to provide a comprehensive assessment of the subject matter.

{sections}

## Conclusion

This analysis has examined {title.lower()} from multiple perspectives. The key findings include the importance of understanding the interrelationships between various aspects of the topic, the practical implications for relevant stakeholders, and potential future developments. With appropriate approaches and methodologies, we can develop a more nuanced understanding of this subject and its broader implications.

## Notes
{analysis.custom_prompt}
"""


# Quiz/Test has a study plan in the analyzer but no draft template of its own.
TEMPLATES: dict[AssignmentType, DraftGenerator] = {
    AssignmentType.PROGRAMMING: programming_draft,
    AssignmentType.WRITING: writing_draft,
    AssignmentType.RESEARCH: research_draft,
    AssignmentType.PRESENTATION: presentation_draft,
    AssignmentType.QUIZ_TEST: general_draft,
    AssignmentType.GENERAL: general_draft,
}

_missing = set(AssignmentType) - set(TEMPLATES)
if _missing:
    raise RuntimeError(f"draft templates missing for: {sorted(m.value for m in _missing)}")


def generate_draft(
    description: str,
    analysis: AnalysisResult,
    external_content: str | None = None,
) -> DraftResult:
    context = build_context(description, external_content)
    assignment_type = AssignmentType.parse(analysis.assignment_type)
    generator = TEMPLATES[assignment_type]
    logger.debug("drafting %s with %s", assignment_type.value, generator.__name__)
    return DraftResult(
        content=generator(context, analysis),
        citations=(EXTERNAL_CITATION,) if external_content is not None else None,
        notes=DRAFT_NOTES,
    )

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AssignmentType(str, Enum):
    WRITING = "Writing Assignment"
    QUIZ_TEST = "Quiz/Test"
    PROGRAMMING = "Programming Assignment"
    RESEARCH = "Research Assignment"
    PRESENTATION = "Presentation"
    GENERAL = "General Assignment"

    @classmethod
    def parse(cls, label: str | AssignmentType) -> AssignmentType:
        """Map a label from the wire to a member; unknown labels become GENERAL."""
        if isinstance(label, cls):
            return label
        for member in cls:
            if member.value == label:
                return member
        return cls.GENERAL


@dataclass(frozen=True)
class AnalysisResult:
    assignment_type: AssignmentType
    topics: tuple[str, ...]
    requirements: tuple[str, ...]
    suggested_approach: str
    external_links: tuple[str, ...]
    custom_prompt: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "assignmentType": self.assignment_type.value,
            "topics": list(self.topics),
            "requirements": list(self.requirements),
            "suggestedApproach": self.suggested_approach,
            "externalLinks": list(self.external_links),
            "customPrompt": self.custom_prompt,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisResult:
        return cls(
            assignment_type=AssignmentType.parse(data.get("assignmentType", "")),
            topics=tuple(data.get("topics") or ()),
            requirements=tuple(data.get("requirements") or ()),
            suggested_approach=data.get("suggestedApproach") or "",
            external_links=tuple(data.get("externalLinks") or ()),
            custom_prompt=data.get("customPrompt") or "",
        )


@dataclass(frozen=True)
class DraftResult:
    content: str
    citations: tuple[str, ...] | None = None
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"content": self.content}
        if self.citations is not None:
            out["citations"] = list(self.citations)
        if self.notes is not None:
            out["notes"] = self.notes
        return out

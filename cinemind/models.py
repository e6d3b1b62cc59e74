"""Run configuration, pipeline roles and the film package."""

import time
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from .base_config import DEFAULT_LANGUAGE


class ProductionMode(str, Enum):
    """Tone and budget constraints baked into prompts"""
    NETFLIX = "Netflix"
    FESTIVAL = "Festival"
    BUDGET = "Budget"


class InputType(str, Enum):
    """What the run content holds"""
    LOGLINE = "logline"
    SCRIPT = "script"


class AgentRole(str, Enum):
    """Pipeline roles, declared in execution order"""
    SCRIPTWRITER = "Scriptwriter"
    DIRECTOR = "Director"
    CINEMATOGRAPHER = "Cinematographer"
    PRODUCER = "Producer"
    EDITOR = "Editor"
    MARKETING = "Marketing"


# Static status metadata: (label, description)
ROLE_METADATA: Dict[AgentRole, tuple] = {
    AgentRole.SCRIPTWRITER: ("Scriptwriter", "Screenplay drafting & polish"),
    AgentRole.DIRECTOR: ("Director", "Story structure & themes"),
    AgentRole.CINEMATOGRAPHER: ("Cinematographer", "Shot list & lighting"),
    AgentRole.PRODUCER: ("Producer", "Budget & feasibility"),
    AgentRole.EDITOR: ("Editor", "Pacing & rhythm"),
    AgentRole.MARKETING: ("Marketing", "Trailer & pitch"),
}

# FilmPackage field that holds each role's artifact
ROLE_FIELDS: Dict[AgentRole, str] = {
    AgentRole.SCRIPTWRITER: "generated_script",
    AgentRole.DIRECTOR: "script_breakdown",
    AgentRole.CINEMATOGRAPHER: "shot_list",
    AgentRole.PRODUCER: "budget_report",
    AgentRole.EDITOR: "edit_plan",
    AgentRole.MARKETING: "marketing_copy",
}


@dataclass(frozen=True)
class StoryInput:
    """Configuration for one production run"""
    content: str
    title: str = ""
    genre: str = ""
    mode: ProductionMode = ProductionMode.NETFLIX
    language: str = DEFAULT_LANGUAGE
    input_type: InputType = InputType.LOGLINE

    def __post_init__(self):
        # Accept plain strings from forms and JSON
        object.__setattr__(self, "mode", ProductionMode(self.mode))
        object.__setattr__(self, "input_type", InputType(self.input_type))
        if not self.language or not self.language.strip():
            object.__setattr__(self, "language", DEFAULT_LANGUAGE)

    @property
    def has_content(self) -> bool:
        return bool(self.content and self.content.strip())


@dataclass
class AgentStatus:
    """Display status for one role"""
    id: AgentRole
    label: str
    description: str
    is_processing: bool = False
    is_complete: bool = False

    @classmethod
    def for_role(cls, role: AgentRole) -> "AgentStatus":
        label, description = ROLE_METADATA[role]
        return cls(id=role, label=label, description=description)

    @property
    def state(self) -> str:
        if self.is_processing:
            return "processing"
        if self.is_complete:
            return "complete"
        return "pending"


@dataclass
class AgentOutput:
    """Result of one text agent call.

    ``completed`` is False when the model answered with no usable text and
    ``content`` holds the role's fallback sentinel instead.
    """
    role: AgentRole
    content: str
    completed: bool = True
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class StoryboardImage:
    """One storyboard slot.

    loading=True is in flight; loading=False with no base64 is a failed slot.
    """
    prompt: str
    base64: Optional[str] = None
    loading: bool = True

    @property
    def status(self) -> str:
        if self.loading:
            return "rendering"
        return "ready" if self.base64 else "failed"

    def resolved(self, base64: Optional[str]) -> "StoryboardImage":
        return replace(self, base64=base64, loading=False)


@dataclass
class FilmPackage:
    """Accumulating result of a production run"""
    input: StoryInput
    id: str = field(default_factory=lambda: f"pkg-{uuid.uuid4().hex[:8]}")
    generated_script: Optional[str] = None
    script_breakdown: Optional[str] = None
    shot_list: Optional[str] = None
    budget_report: Optional[str] = None
    edit_plan: Optional[str] = None
    marketing_copy: Optional[str] = None
    storyboard_prompts: List[str] = field(default_factory=list)
    generated_images: List[StoryboardImage] = field(default_factory=list)

    def artifact_for(self, role: AgentRole) -> Optional[str]:
        return getattr(self, ROLE_FIELDS[AgentRole(role)])

    def set_artifact(self, role: AgentRole, content: str) -> None:
        setattr(self, ROLE_FIELDS[AgentRole(role)], content)

    def populated_roles(self) -> List[AgentRole]:
        return [role for role in AgentRole if self.artifact_for(role) is not None]

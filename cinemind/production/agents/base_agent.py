"""
Shared prompt helpers and generation call for the text pipeline agents.
"""
import logging
from typing import Optional

from ...base_config import AGENT_INSTRUCTIONS, DEFAULT_LANGUAGE, MAX_CONTEXT_CHARS, get_model_config
from ...generation.client import GenerationClient
from ...models import AgentOutput, AgentRole, StoryInput

logger = logging.getLogger(__name__)


def truncate(text: Optional[str], limit: int = MAX_CONTEXT_CHARS) -> str:
    """Cut upstream text to the context budget."""
    return (text or "")[:limit]


def genre_label(story_input: StoryInput) -> str:
    return story_input.genre.strip() or "Unspecified"


def localization_directive(language: str) -> str:
    """Instruction block forcing the whole answer into the run language."""
    if language.strip().lower() == DEFAULT_LANGUAGE.lower():
        return f"""LOCALIZATION:
        Write your entire response in {language}."""

    return f"""LOCALIZATION:
        - Write your entire response (headers, descriptions, dialogue) in {language}.
        - Adapt the content to be culturally authentic for a {language}-speaking audience, avoiding literal translations.
        - Preserve the emotional subtext specific to the cultural context of the language."""


class BaseAgent:
    """Base class for one role of the text pipeline.

    Subclasses build a role-specific prompt and call ``_generate``. An empty
    model answer becomes the role's fallback sentinel with
    ``AgentOutput.completed = False``; a ``GenerationError`` propagates.
    """

    role: Optional[AgentRole] = None
    instruction_key: Optional[str] = None

    def __init__(self, client: GenerationClient, model: Optional[str] = None):
        if self.role is None or self.instruction_key is None:
            raise TypeError(f"{self.__class__.__name__} must define role and instruction_key")
        self.client = client
        self.model = model or get_model_config()["text_model"]
        self.system_instruction = AGENT_INSTRUCTIONS[self.instruction_key]
        logger.info(f"{self.__class__.__name__} initialized")

    @property
    def fallback_text(self) -> str:
        return f"{self.role.value} failed to generate output."

    async def _generate(self, prompt: str) -> AgentOutput:
        logger.info(f"{self.role.value} agent generating ({len(prompt)} prompt chars)")
        text = await self.client.generate_text(
            self.model,
            prompt,
            {"systemInstruction": self.system_instruction},
        )

        if not text or not text.strip():
            logger.warning(f"{self.role.value} agent returned no text, using fallback")
            return AgentOutput(role=self.role, content=self.fallback_text, completed=False)

        return AgentOutput(role=self.role, content=text)

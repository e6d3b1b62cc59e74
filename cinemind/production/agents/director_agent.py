from ...models import AgentOutput, AgentRole, StoryInput
from .base_agent import BaseAgent, genre_label, localization_directive, truncate


class DirectorAgent(BaseAgent):
    """Interprets the script into themes, character profiles and act structure."""

    role = AgentRole.DIRECTOR
    instruction_key = "director"

    def build_prompt(self, story_input: StoryInput, script_text: str) -> str:
        return f"""You are the Lead Director of a prestigious film studio.

        SCRIPT:
        "{truncate(script_text)}"

        GENRE: {genre_label(story_input)}
        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        1. Interpret the script deeply. Identify the core theme, tone, and emotional arc.
        2. Create detailed CHARACTER PROFILES for the main cast. For each character, provide:
           - Name & Role
           - Backstory & Personality
           - Core Motivation (What do they want?)
           - Key Emotional Arc (How do they change?)
        3. Divide the story into a clear 3-Act Structure (or alternative if Mode is Festival).
        4. Break down key scenes with specific directorial notes on performance.

        {localization_directive(story_input.language)}

        Output in clean Markdown format with headers.
        """

    async def break_down(self, story_input: StoryInput, script_text: str) -> AgentOutput:
        """Produce the script breakdown from the generated or uploaded script."""
        return await self._generate(self.build_prompt(story_input, script_text))

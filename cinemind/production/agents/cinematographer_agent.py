from ...models import AgentOutput, AgentRole, StoryInput
from .base_agent import BaseAgent, localization_directive, truncate


class CinematographerAgent(BaseAgent):
    role = AgentRole.CINEMATOGRAPHER
    instruction_key = "cinematographer"

    def build_prompt(self, story_input: StoryInput, script_breakdown: str) -> str:
        return f"""You are an Oscar-winning Cinematographer (DOP).

        DIRECTOR'S VISION:
        {truncate(script_breakdown)}

        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        1. Convert the key scenes into a visual shot list.
        2. Define the visual language: Color palette, lighting style (e.g., chiaroscuro, high-key), and camera movement.
        3. Specify lenses and aspect ratio suitable for the {story_input.mode.value} mode.

        {localization_directive(story_input.language)}

        Output in clean Markdown format. Use tables for shot lists where appropriate.
        """

    async def plan_shots(self, story_input: StoryInput, script_breakdown: str) -> AgentOutput:
        return await self._generate(self.build_prompt(story_input, script_breakdown))

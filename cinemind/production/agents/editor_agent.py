from ...models import AgentOutput, AgentRole, StoryInput
from .base_agent import BaseAgent, localization_directive, truncate


class EditorAgent(BaseAgent):
    role = AgentRole.EDITOR
    instruction_key = "editor"

    def build_prompt(self, story_input: StoryInput, script_breakdown: str, budget_report: str) -> str:
        return f"""You are a Master Film Editor.

        SCRIPT STRUCTURE:
        {truncate(script_breakdown)}

        PRODUCER NOTES:
        {truncate(budget_report)}

        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        1. Review the scene order. Suggest reordering for maximum emotional impact.
        2. Flag slow sections or pacing issues.
        3. Suggest where to cut early or enter late in scenes.
        4. Create a "Rhythm and Pacing" guide for the final cut.

        {localization_directive(story_input.language)}

        Output in Markdown.
        """

    async def plan_edit(self, story_input: StoryInput, script_breakdown: str, budget_report: str) -> AgentOutput:
        """Pacing and cut plan from the director's structure and producer notes."""
        return await self._generate(self.build_prompt(story_input, script_breakdown, budget_report))

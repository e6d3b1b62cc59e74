from ...models import AgentOutput, AgentRole, ProductionMode, StoryInput
from .base_agent import BaseAgent, localization_directive, truncate

# Only the directive matching the run mode is added to the prompt
MODE_DIRECTIVES = {
    ProductionMode.BUDGET: "CRITICAL: Rewrite or flag scenes to reduce cost drastically.",
    ProductionMode.NETFLIX: "Ensure the pacing is binge-worthy and commercial.",
    ProductionMode.FESTIVAL: "Focus on artistic merit over commercial viability, but keep it producible.",
}


class ProducerAgent(BaseAgent):
    """Checks feasibility and cost of the shot list for the run mode."""

    role = AgentRole.PRODUCER
    instruction_key = "producer"

    def build_prompt(self, story_input: StoryInput, shot_list: str) -> str:
        return f"""You are a pragmatic and experienced Executive Producer.

        CINEMATOGRAPHY PLAN:
        {truncate(shot_list)}

        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        1. Analyze the feasibility of the proposed shots and scenes.
        2. Identify expensive elements (CGI, locations, cast size).
        3. {MODE_DIRECTIVES[story_input.mode]}

        {localization_directive(story_input.language)}

        Output a production report in Markdown.
        """

    async def plan_budget(self, story_input: StoryInput, shot_list: str) -> AgentOutput:
        return await self._generate(self.build_prompt(story_input, shot_list))

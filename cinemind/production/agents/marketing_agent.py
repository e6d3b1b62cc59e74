from ...models import AgentOutput, AgentRole, ProductionMode, StoryInput
from .base_agent import BaseAgent, localization_directive, truncate

FESTIVAL_PITCH = "Draft a Director Statement for Sundance/Cannes."
STREAMER_PITCH = "Draft a pitch blurb for Netflix/Amazon executives."


class MarketingAgent(BaseAgent):
    """Logline, tagline, trailer script and pitch for the finished vision."""

    role = AgentRole.MARKETING
    instruction_key = "marketing"

    def build_prompt(self, story_input: StoryInput, script_breakdown: str) -> str:
        pitch = FESTIVAL_PITCH if story_input.mode == ProductionMode.FESTIVAL else STREAMER_PITCH

        return f"""You are a Head of Marketing at a major studio.

        FINAL VISION:
        {truncate(script_breakdown)}

        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        1. Write a compelling Logline (1 sentence).
        2. Write a Tagline.
        3. Write a Trailer Script (Voiceover + Visual cues).
        4. {pitch}

        {localization_directive(story_input.language)}
        - Ensure the tone fits the {story_input.language} film market.

        Output in Markdown.
        """

    async def write_campaign(self, story_input: StoryInput, script_breakdown: str) -> AgentOutput:
        return await self._generate(self.build_prompt(story_input, script_breakdown))

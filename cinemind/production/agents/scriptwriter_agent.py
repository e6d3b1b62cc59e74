from ...models import AgentOutput, AgentRole, InputType, StoryInput
from .base_agent import BaseAgent, genre_label, localization_directive, truncate


class ScriptwriterAgent(BaseAgent):
    """Writes a screenplay from a logline, or polishes an uploaded script."""

    role = AgentRole.SCRIPTWRITER
    instruction_key = "scriptwriter"

    def build_prompt(self, story_input: StoryInput) -> str:
        if story_input.input_type == InputType.SCRIPT:
            return f"""You are an expert Screenwriter.

        EXISTING SCRIPT CONTENT:
        "{truncate(story_input.content)}"

        GENRE: {genre_label(story_input)}
        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        Rewrite, format, and polish the existing script content into a professional screenplay.

        REQUIREMENTS:
        1. Fix any formatting issues (ensure standard Scene Headers, Action, Dialogue).
        2. Enhance dialogue for impact and natural flow.
        3. Ensure the tone matches the {story_input.mode.value} mode.
        4. Maintain the core story but improve execution.

        {localization_directive(story_input.language)}

        Output in clean Markdown.
        """

        return f"""You are an expert Screenwriter.

        LOGLINE/IDEA:
        "{truncate(story_input.content)}"

        GENRE: {genre_label(story_input)}
        MODE: {story_input.mode.value}
        TARGET LANGUAGE: {story_input.language}

        TASK:
        Write a complete short film screenplay based on the logline above.

        REQUIREMENTS:
        1. Standard Screenplay Format (Scene Headers, Action, Character Name, Dialogue).
        2. Develop compelling characters and dialogue.
        3. Ensure the tone matches the {story_input.mode.value} mode.
        4. Structure it with a clear beginning, middle, and end.

        {localization_directive(story_input.language)}

        Output in clean Markdown.
        """

    async def write_script(self, story_input: StoryInput) -> AgentOutput:
        return await self._generate(self.build_prompt(story_input))

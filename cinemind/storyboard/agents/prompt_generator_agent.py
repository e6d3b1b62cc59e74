import json
import logging
import re
from typing import Any, List, Optional

from ...base_config import AGENT_INSTRUCTIONS, MAX_STORYBOARD_CONTEXT_CHARS, STORYBOARD_PROMPT_COUNT, get_model_config
from ...generation.client import GenerationClient, StructuredResponseError

logger = logging.getLogger(__name__)

PROMPTS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "prompts": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        }
    },
}


class PromptGeneratorAgent:
    """Agent responsible for turning the finished breakdown and shot list into image prompts.

    Prompts are always requested in English whatever the run language, since
    the image model responds best to English.
    """

    def __init__(self, client: GenerationClient, model: Optional[str] = None, prompt_count: int = STORYBOARD_PROMPT_COUNT):
        """Initialize the PromptGeneratorAgent.

        Args:
            client: Generation client used for the structured call
            model: Text model name (default: configured text model)
            prompt_count: Number of frames to ask for
        """
        logger.info("Initializing PromptGeneratorAgent")
        self.client = client
        self.model = model or get_model_config()["text_model"]
        self.prompt_count = prompt_count

        self.prompt_template = """
        Based on the following film production package, generate {count} distinct, highly visual image prompts for a text-to-image AI model.
        These should represent the {count} most iconic frames of the movie.

        CONTEXT:
        {context}

        IMPORTANT: Even if the context is in another language, generate the image prompts in ENGLISH for best image generation results.

        RETURN JSON ONLY:
        {{
          "prompts": ["prompt 1", "prompt 2", ...]
        }}
        """

    @staticmethod
    def build_context(script_breakdown: Optional[str], shot_list: Optional[str]) -> str:
        """Serialize the script structure and shot list bundle."""
        return json.dumps({"script": script_breakdown, "shots": shot_list}, ensure_ascii=False)

    def build_prompt(self, context: str) -> str:
        if len(context) > MAX_STORYBOARD_CONTEXT_CHARS:
            context = context[:MAX_STORYBOARD_CONTEXT_CHARS] + "... (truncated)"
        return self.prompt_template.format(count=self.prompt_count, context=context)

    async def generate_prompts(self, script_breakdown: Optional[str], shot_list: Optional[str]) -> List[str]:
        """Generate the ordered storyboard prompts.

        Args:
            script_breakdown: Director output
            shot_list: Cinematographer output

        Returns:
            List of English image prompts; empty when the answer does not parse

        Raises:
            GenerationError: If the call itself fails
        """
        prompt = self.build_prompt(self.build_context(script_breakdown, shot_list))

        try:
            data = await self.client.generate_structured(
                self.model,
                prompt,
                PROMPTS_SCHEMA,
                {"systemInstruction": AGENT_INSTRUCTIONS["storyboard"]},
            )
        except StructuredResponseError as e:
            logger.error(f"Failed to parse prompts: {e.message}")
            return []

        prompts = self._clean_prompts(data)
        logger.info(f"Generated {len(prompts)} storyboard prompts")
        return prompts

    def _clean_prompts(self, data: Any) -> List[str]:
        if not isinstance(data, dict) or not isinstance(data.get("prompts"), list):
            logger.warning("Structured response has no prompts array")
            return []

        prompts = []
        for item in data["prompts"]:
            if not isinstance(item, str):
                continue
            # Remove prefixes like "Prompt:" or wrapping quotes
            cleaned = re.sub(r'^(prompt:\s*|"|\')', '', item.strip(), flags=re.IGNORECASE)
            cleaned = re.sub(r'("|\')\s*$', '', cleaned).strip()
            if cleaned:
                prompts.append(cleaned)
        return prompts

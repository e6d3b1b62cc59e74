from typing import Dict, Any, Optional
import logging

from ..generation.client import GenerationClient
from ..models import StoryboardImage
from ..store import ProductionStore
from .agents.prompt_generator_agent import PromptGeneratorAgent
from .agents.image_generator_agent import ImageGeneratorAgent

logger = logging.getLogger(__name__)


class StoryboardCoordinator:
    """Asset-generation phase run after the text pipeline completes.

    Images are rendered one at a time in prompt order and every slot update
    republishes the whole image list.
    """

    def __init__(
        self,
        client: GenerationClient,
        store: ProductionStore,
        prompt_generator: Optional[PromptGeneratorAgent] = None,
        image_generator: Optional[ImageGeneratorAgent] = None,
    ):
        logger.info("Initializing StoryboardCoordinator")
        self.store = store
        self.prompt_generator = prompt_generator or PromptGeneratorAgent(client)
        self.image_generator = image_generator or ImageGeneratorAgent(client)

    async def generate_storyboard(self, script_breakdown: str, shot_list: str) -> Dict[str, Any]:
        """Generate prompts, then fill one image slot per prompt."""
        self.store.set_generating_images(True)
        try:
            logger.info("Step 1: Generating storyboard prompts")
            prompts = await self.prompt_generator.generate_prompts(script_breakdown, shot_list)
            self.store.set_storyboard_prompts(prompts)

            images = [StoryboardImage(prompt=prompt) for prompt in prompts]
            self.store.set_images(images)
            if not images:
                logger.warning("No storyboard prompts generated, skipping images")
                return {"status": "empty", "images": []}

            logger.info(f"Step 2: Generating {len(images)} storyboard images")
            for i, prompt in enumerate(prompts):
                base64 = await self.image_generator.generate_image(prompt)
                images[i] = images[i].resolved(base64)
                self.store.set_images(images)

            failed = sum(1 for image in images if image.status == "failed")
            if failed:
                logger.warning(f"{failed} of {len(images)} storyboard images failed")
            logger.info("Storyboard generation completed")
            return {"status": "success", "images": list(images)}

        except Exception as e:
            logger.error(f"Asset generation failed: {str(e)}", exc_info=True)
            return {
                "error": str(e),
                "status": "failed",
                "images": list(self.store.package.generated_images),
            }
        finally:
            self.store.set_generating_images(False)

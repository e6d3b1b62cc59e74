import logging
from typing import Dict, Any, Optional

from ...base_config import IMAGE_ASPECT_RATIO, IMAGE_STYLE_SUFFIX, get_model_config
from ...generation.client import GenerationClient

logger = logging.getLogger(__name__)


class ImageGeneratorAgent:
    """Agent responsible for rendering one storyboard frame.

    Failures never raise: the caller gets None and records a failed slot.
    """

    def __init__(
        self,
        client: GenerationClient,
        model: Optional[str] = None,
        aspect_ratio: str = IMAGE_ASPECT_RATIO,
    ):
        """Initialize the ImageGeneratorAgent.

        Args:
            client: Generation client used for the image call
            model: Image model name (default: configured image model)
            aspect_ratio: Requested frame aspect ratio
        """
        logger.info("Initializing ImageGeneratorAgent")
        self.client = client
        self.model = model or get_model_config()["image_model"]
        self.aspect_ratio = aspect_ratio

    def build_contents(self, prompt: str) -> Dict[str, Any]:
        return {"parts": [{"text": prompt + IMAGE_STYLE_SUFFIX}]}

    async def generate_image(self, prompt: str) -> Optional[str]:
        """Render a prompt and return it as a ``data:<mime>;base64,...`` URI, or None."""
        try:
            image = await self.client.generate_image(
                self.model,
                self.build_contents(prompt),
                {"imageConfig": {"aspectRatio": self.aspect_ratio}},
            )
        except Exception as e:
            logger.error(f"Image generation failed: {str(e)}")
            return None

        if image is None:
            logger.warning("No image data returned for storyboard prompt")
            return None

        logger.info(f"Generated storyboard image ({image.mime_type})")
        return image.data_uri

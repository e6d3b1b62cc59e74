"""
Storyboard Agents

Prompt generation, image rendering and export formatting for the storyboard phase.
"""

from cinemind.storyboard.agents.prompt_generator_agent import PromptGeneratorAgent
from cinemind.storyboard.agents.image_generator_agent import ImageGeneratorAgent
from cinemind.storyboard.agents.storyboard_formatter_agent import StoryboardFormatterAgent

__all__ = ['PromptGeneratorAgent', 'ImageGeneratorAgent', 'StoryboardFormatterAgent']

"""
Storyboard Module

This module turns the finished script breakdown and shot list into
storyboard prompts and renders one image per prompt.
"""

from cinemind.storyboard.coordinator import StoryboardCoordinator

# Expose key classes at the module level
__all__ = ['StoryboardCoordinator']

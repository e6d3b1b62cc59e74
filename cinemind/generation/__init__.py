"""
Generation Module

Client for the text, structured-JSON and image generation backend.
"""

from cinemind.generation.client import (
    GenerationClient,
    GenerationError,
    InlineImage,
    StructuredResponseError,
)

__all__ = ['GenerationClient', 'GenerationError', 'InlineImage', 'StructuredResponseError']

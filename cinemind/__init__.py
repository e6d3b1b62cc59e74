"""
Source code for the CineMind film production pipeline.
This package contains the agents, coordinators and generation client.
"""

# Module exports
__all__ = [
    'generation',
    'production',
    'storyboard',
    'ingestion',
    'backend',
]

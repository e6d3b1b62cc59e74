"""
Production Module

This module sequences the text agents (scriptwriter through marketing)
into a film package and hands off to the storyboard phase.
"""

from cinemind.production.coordinator import ProductionCoordinator, active_roles

# Expose key classes at the module level
__all__ = ['ProductionCoordinator', 'active_roles']

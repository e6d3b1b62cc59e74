"""
Production Agents

One agent per text pipeline role, from screenplay to marketing copy.
"""

from cinemind.production.agents.scriptwriter_agent import ScriptwriterAgent
from cinemind.production.agents.director_agent import DirectorAgent
from cinemind.production.agents.cinematographer_agent import CinematographerAgent
from cinemind.production.agents.producer_agent import ProducerAgent
from cinemind.production.agents.editor_agent import EditorAgent
from cinemind.production.agents.marketing_agent import MarketingAgent

__all__ = [
    'ScriptwriterAgent',
    'DirectorAgent',
    'CinematographerAgent',
    'ProducerAgent',
    'EditorAgent',
    'MarketingAgent',
]

"""
Agent package for the highlight backend.
All agents inherit from BaseAgent and implement the process() method.
"""
from .base_agent import BaseAgent

__all__ = ["BaseAgent"]

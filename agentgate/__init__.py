"""
agentgate: stage multi-turn conversations over plain HTTP calls and
forward them to LLM providers in their native wire formats.
"""

__version__ = "0.1.0"

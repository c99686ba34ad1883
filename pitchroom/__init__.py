"""
PITCHROOM - Multi-Agent Pitch Deck Engine
Role-specialised generation, conversational revision and rubric scoring
for natural history film pitches.
"""

__version__ = "0.1.0"

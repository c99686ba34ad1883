"""
Prompt templates for PITCHROOM roles and scoring agents.
"""

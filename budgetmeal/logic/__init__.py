"""Core business logic layer.

Subpackages:
- selection: budget filtering, variety exclusion and combination choice
- planning: plan formatting and the generation pipeline
- reporting: day analysis and monthly spend figures
"""
__all__ = ["selection", "planning", "reporting"]

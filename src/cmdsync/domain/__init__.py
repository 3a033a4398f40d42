"""Domain layer — command models, structural equality, and diffing.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

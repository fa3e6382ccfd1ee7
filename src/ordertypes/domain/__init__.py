"""Domain layer — order type models and hierarchy rules.

This layer depends only on stdlib and pydantic.
It must never import from validation, services, infrastructure, commands, or config.
"""

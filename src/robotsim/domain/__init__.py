"""Domain layer — directions, positions, table bounds, and the Robot.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

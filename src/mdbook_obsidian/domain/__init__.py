"""Domain layer: link grammar, book tree, and boundary models.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, config, or output.
"""

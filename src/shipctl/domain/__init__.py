"""Domain layer: statuses, destinations, pricing rules and shipment models.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

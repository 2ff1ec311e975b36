# Schemas package init
"""Pydantic request/response models for the Product API."""

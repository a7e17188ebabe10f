"""Tutorhub Types - Pydantic DTOs for the Tutorhub platform."""

__version__ = "0.1.0"

from .base import (
    BaseEntityGet,
    EntityReference,
)

"""Mapping store layer for the TinyURL service."""

from .base import MappingStoreBase
from .memory import InMemoryMappingStore
from .models import UrlMapping

__all__ = ["MappingStoreBase", "InMemoryMappingStore", "UrlMapping"]

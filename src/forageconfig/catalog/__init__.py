"""Catalog of known factory types, bean kinds and coordinates."""

from .index import Catalog, FactoryMetadata
from .loader import load_catalog
from .models import CatalogDocument

__all__ = ["Catalog", "CatalogDocument", "FactoryMetadata", "load_catalog"]

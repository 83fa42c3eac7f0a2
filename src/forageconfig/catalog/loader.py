"""Load the catalog from YAML."""

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import CatalogError
from .index import Catalog
from .models import CatalogDocument

logger = logging.getLogger(__name__)

CATALOG_ENV_VAR = "FORAGE_CATALOG"
CATALOG_RESOURCE = "forage-catalog.yaml"


def _read_catalog_text(path: Optional[Union[str, Path]]) -> tuple[str, str]:
    if path is None:
        path = os.environ.get(CATALOG_ENV_VAR) or None
    if path is not None:
        path = Path(path).expanduser()
        try:
            return path.read_text(encoding="utf-8"), str(path)
        except OSError as e:
            raise CatalogError(f"Forage catalog not found: {path}") from e
    resource = resources.files("forageconfig.catalog").joinpath("data", CATALOG_RESOURCE)
    return resource.read_text(encoding="utf-8"), CATALOG_RESOURCE


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load and index a catalog.

    Args:
        path: YAML file; defaults to ``$FORAGE_CATALOG``, then the packaged catalog.

    Raises:
        CatalogError: If the file is missing, not YAML, or does not match the model.
    """
    text, origin = _read_catalog_text(path)
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise CatalogError(f"Failed to load Forage catalog {origin}: {e}") from e
    try:
        document = CatalogDocument.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid Forage catalog {origin}: {e}") from e
    logger.debug("Loaded catalog %s with %d factories", origin, len(document.factories))
    return Catalog(document)

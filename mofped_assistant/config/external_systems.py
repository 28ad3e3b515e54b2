"""Loader for the versioned external-systems table."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from ..core.domain.exceptions import InvalidConfigurationError
from ..core.domain.external_system import ExternalSystemCatalog

logger = logging.getLogger(__name__)


def load_external_systems(path: Path) -> ExternalSystemCatalog:
    """Read and validate the external systems JSON file.

    Args:
        path: Location of the JSON table.

    Returns:
        The parsed catalog.

    Raises:
        InvalidConfigurationError: If the file is missing, not JSON, or fails validation.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        catalog = ExternalSystemCatalog.model_validate(raw)
    except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
        raise InvalidConfigurationError(
            "Could not load external systems table",
            cause=e,
            context={"path": str(path)},
        ) from e

    logger.info(
        "Loaded %d external systems (table version %s)", len(catalog.systems), catalog.version
    )
    return catalog

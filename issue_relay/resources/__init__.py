"""Capability documents for the discovery endpoints."""

from functools import cache
from pathlib import Path
from typing import Any

import yaml

from issue_relay.utils.logging import get_logger

logger = get_logger("resources")

CAPABILITIES_FILE = Path(__file__).with_name("capabilities.yaml")


@cache
def load_capabilities(path: Path = CAPABILITIES_FILE) -> dict[str, dict[str, Any]]:
    """Load every capability document.

    Args:
        path: YAML file mapping service name to its document.

    Returns:
        Mapping of service name (``github``, ``notion``, ``google-docs``) to
        its capability document.

    Raises:
        ValueError: If the file does not hold a mapping.
    """
    content = path.read_text(encoding="utf-8")
    documents = yaml.safe_load(content)

    if not isinstance(documents, dict):
        raise ValueError(f"Capability file {path} must contain a mapping")

    logger.debug("Loaded capability documents", extra={"services": sorted(documents)})
    return documents


def get_capability(name: str) -> dict[str, Any]:
    """Return one capability document.

    Raises:
        KeyError: If no document exists for ``name``.
    """
    return load_capabilities()[name]

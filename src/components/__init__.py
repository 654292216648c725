"""Components module - MJML component tables and spec extraction.

Example usage:
    >>> from src.components import extract_component_specs
    >>> specs = extract_component_specs()
    >>> specs["mj-button"].attributes["align"].enum
    ['left', 'center', 'right']
"""

from .lib import (
    COMPONENT_PACKAGES,
    COMPONENT_REGISTRY,
    ComponentDefinition,
    ComponentSpec,
    DefinitionLoadError,
    build_component_spec,
    extract_component_specs,
    get_component_definition,
    load_component_definitions,
    parse_component_definitions,
)

__all__ = [
    # Tables
    "COMPONENT_PACKAGES",
    "COMPONENT_REGISTRY",
    # Types
    "ComponentDefinition",
    "ComponentSpec",
    "DefinitionLoadError",
    # Loading
    "get_component_definition",
    "load_component_definitions",
    "parse_component_definitions",
    # Extraction
    "build_component_spec",
    "extract_component_specs",
]

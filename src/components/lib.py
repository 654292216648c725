"""MJML component definitions and attribute spec extraction.

This module holds the static knowledge about which MJML components exist,
which npm package ships each of them, and the attribute tables the MJML
component classes declare (``allowedAttributes`` / ``defaultAttributes``).

The built-in registry mirrors MJML 4. A JSON dump of the same tables (for
example exported from a node install) can be loaded to replace or extend
individual entries.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.core.log import get_logger
from src.inference import AttributeSchema, infer_attribute_schema

logger = get_logger(__name__)

# Component name -> npm package. Order drives the order of every artifact.
COMPONENT_PACKAGES: dict[str, str] = {
    "mj-accordion": "mjml-accordion",
    "mj-accordion-element": "mjml-accordion",
    "mj-accordion-title": "mjml-accordion",
    "mj-accordion-text": "mjml-accordion",
    "mj-body": "mjml-body",
    "mj-button": "mjml-button",
    "mj-carousel": "mjml-carousel",
    "mj-carousel-image": "mjml-carousel",
    "mj-column": "mjml-column",
    "mj-divider": "mjml-divider",
    "mj-group": "mjml-group",
    "mj-hero": "mjml-hero",
    "mj-image": "mjml-image",
    "mj-navbar": "mjml-navbar",
    "mj-navbar-link": "mjml-navbar",
    "mj-raw": "mjml-raw",
    "mj-section": "mjml-section",
    "mj-social": "mjml-social",
    "mj-social-element": "mjml-social",
    "mj-spacer": "mjml-spacer",
    "mj-table": "mjml-table",
    "mj-text": "mjml-text",
    "mj-wrapper": "mjml-wrapper",
    "mj-head": "mjml-head",
    "mj-attributes": "mjml-head-attributes",
    "mj-breakpoint": "mjml-head-breakpoint",
    "mj-font": "mjml-head-font",
    "mj-html-attributes": "mjml-head-html-attributes",
    "mj-preview": "mjml-head-preview",
    "mj-style": "mjml-head-style",
    "mj-title": "mjml-head-title",
    "mjml": "mjml-core",
}


class DefinitionLoadError(Exception):
    """Raised when a component definition file cannot be used."""


@dataclass(frozen=True)
class ComponentDefinition:
    """Attribute tables declared by one MJML component class.

    Attributes:
        name: Component tag name (e.g. "mj-button").
        package_name: npm package shipping the component.
        allowed_attributes: Attribute name -> annotation string.
        default_attributes: Attribute name -> default literal (None allowed).
    """

    name: str
    package_name: str
    allowed_attributes: dict[str, Any] = field(default_factory=dict)
    default_attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class ComponentSpec:
    """Extracted specification for one component.

    Attributes keep the declaration order of ``allowed_attributes``.
    """

    name: str
    package_name: str
    allowed_attributes: dict[str, Any]
    default_attributes: dict[str, Any]
    attributes: dict[str, AttributeSchema] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the raw-spec document entry."""
        return {
            "packageName": self.package_name,
            "allowedAttributes": dict(self.allowed_attributes),
            "defaultAttributes": dict(self.default_attributes),
            "attributes": {
                attr_name: schema.to_dict()
                for attr_name, schema in self.attributes.items()
            },
        }


# =============================================================================
# Built-in Attribute Tables (MJML 4)
# =============================================================================

_FONT_STACK = "Ubuntu, Helvetica, Arial, sans-serif"

_PADDING: dict[str, str] = {
    "padding": "unit(px,%){1,4}",
    "padding-bottom": "unit(px,%)",
    "padding-left": "unit(px,%)",
    "padding-right": "unit(px,%)",
    "padding-top": "unit(px,%)",
}

_BORDERS: dict[str, str] = {
    "border": "string",
    "border-bottom": "string",
    "border-left": "string",
    "border-right": "string",
    "border-top": "string",
}

_INNER_BORDERS: dict[str, str] = {
    "inner-border": "string",
    "inner-border-bottom": "string",
    "inner-border-left": "string",
    "inner-border-right": "string",
    "inner-border-top": "string",
}

_ICON_ATTRIBUTES: dict[str, str] = {
    "icon-align": "enum(top,middle,bottom)",
    "icon-height": "unit(px,%)",
    "icon-position": "enum(left,right)",
    "icon-unwrapped-alt": "string",
    "icon-unwrapped-url": "string",
    "icon-width": "unit(px,%)",
    "icon-wrapped-alt": "string",
    "icon-wrapped-url": "string",
}

_SECTION_ATTRIBUTES: dict[str, str] = {
    "background-color": "color",
    "background-url": "string",
    "background-repeat": "enum(repeat,no-repeat)",
    "background-size": "string",
    "background-position": "string",
    "background-position-x": "string",
    "background-position-y": "string",
    **_BORDERS,
    "border-radius": "string",
    "direction": "enum(ltr,rtl)",
    "full-width": "enum(full-width,false,)",
    **_PADDING,
    "text-align": "enum(left,center,right)",
    "text-padding": "unit(px,%){1,4}",
}

_SECTION_DEFAULTS: dict[str, Any] = {
    "background-repeat": "repeat",
    "background-size": "auto",
    "background-position": "top center",
    "direction": "ltr",
    "padding": "20px 0",
    "text-align": "center",
    "text-padding": "4px 4px 4px 0",
}


def _definition(
    name: str,
    allowed: dict[str, Any] | None = None,
    defaults: dict[str, Any] | None = None,
) -> ComponentDefinition:
    return ComponentDefinition(
        name=name,
        package_name=COMPONENT_PACKAGES[name],
        allowed_attributes=dict(allowed or {}),
        default_attributes=dict(defaults or {}),
    )


_BUILTIN_DEFINITIONS: tuple[ComponentDefinition, ...] = (
    # === ACCORDION ===
    _definition(
        "mj-accordion",
        {
            "container-background-color": "color",
            "border": "string",
            "font-family": "string",
            **_ICON_ATTRIBUTES,
            **_PADDING,
        },
        {
            "border": "2px solid black",
            "font-family": _FONT_STACK,
            "icon-align": "middle",
            "icon-wrapped-url": "https://i.imgur.com/bIXv1bk.png",
            "icon-wrapped-alt": "+",
            "icon-unwrapped-url": "https://i.imgur.com/w4uTygT.png",
            "icon-unwrapped-alt": "-",
            "icon-position": "right",
            "icon-height": "32px",
            "icon-width": "32px",
            "padding": "10px 25px",
        },
    ),
    _definition(
        "mj-accordion-element",
        {
            "background-color": "color",
            "border": "string",
            "font-family": "string",
            **_ICON_ATTRIBUTES,
        },
        {"title": None, "text": None},
    ),
    _definition(
        "mj-accordion-title",
        {
            "background-color": "color",
            "color": "color",
            "font-size": "unit(px)",
            "font-family": "string",
            **_PADDING,
        },
        {"font-size": "13px", "padding": "16px"},
    ),
    _definition(
        "mj-accordion-text",
        {
            "background-color": "color",
            "font-size": "unit(px)",
            "font-family": "string",
            "font-weight": "string",
            "letter-spacing": "unit(px,em)",
            "line-height": "unit(px,%,)",
            "color": "color",
            **_PADDING,
        },
        {"font-size": "13px", "line-height": "1", "padding": "16px"},
    ),
    # === LAYOUT ===
    _definition(
        "mj-body",
        {"width": "unit(px)", "background-color": "color"},
        {"width": "600px"},
    ),
    _definition(
        "mj-button",
        {
            "align": "enum(left,center,right)",
            "background-color": "color",
            "border-bottom": "string",
            "border-left": "string",
            "border-radius": "string",
            "border-right": "string",
            "border-top": "string",
            "border": "string",
            "color": "color",
            "container-background-color": "color",
            "font-family": "string",
            "font-size": "unit(px)",
            "font-style": "string",
            "font-weight": "string",
            "height": "unit(px,%)",
            "href": "string",
            "name": "string",
            "title": "string",
            "inner-padding": "unit(px,%){1,4}",
            "letter-spacing": "unit(px,em)",
            "line-height": "unit(px,%,)",
            **_PADDING,
            "rel": "string",
            "target": "string",
            "text-decoration": "string",
            "text-transform": "string",
            "vertical-align": "enum(top,bottom,middle)",
            "text-align": "enum(left,right,center)",
            "width": "unit(px,%)",
        },
        {
            "align": "center",
            "background-color": "#414141",
            "border": "none",
            "border-radius": "3px",
            "color": "#ffffff",
            "font-family": _FONT_STACK,
            "font-size": "13px",
            "font-weight": "normal",
            "inner-padding": "10px 25px",
            "line-height": "120%",
            "padding": "10px 25px",
            "target": "_blank",
            "text-decoration": "none",
            "text-transform": "none",
            "vertical-align": "middle",
        },
    ),
    _definition(
        "mj-carousel",
        {
            "align": "enum(left,center,right)",
            "border-radius": "unit(px,%){1,4}",
            "container-background-color": "color",
            "icon-width": "unit(px,%)",
            "left-icon": "string",
            **_PADDING,
            "right-icon": "string",
            "thumbnails": "enum(visible,hidden)",
            "tb-border": "string",
            "tb-border-radius": "unit(px,%)",
            "tb-hover-border-color": "color",
            "tb-selected-border-color": "color",
            "tb-width": "unit(px,%)",
        },
        {
            "align": "center",
            "border-radius": "6px",
            "icon-width": "44px",
            "left-icon": "https://i.imgur.com/xTh3hln.png",
            "right-icon": "https://i.imgur.com/os7o9kz.png",
            "thumbnails": "visible",
            "tb-border": "2px solid transparent",
            "tb-border-radius": "6px",
            "tb-hover-border-color": "#fead0d",
            "tb-selected-border-color": "#ccc",
        },
    ),
    _definition(
        "mj-carousel-image",
        {
            "alt": "string",
            "href": "string",
            "rel": "string",
            "target": "string",
            "title": "string",
            "src": "string",
            "thumbnails-src": "string",
            "border-radius": "unit(px,%){1,4}",
            "tb-border": "string",
            "tb-border-radius": "unit(px,%){1,4}",
        },
        {"alt": "", "target": "_blank"},
    ),
    _definition(
        "mj-column",
        {
            "background-color": "color",
            **_BORDERS,
            "border-radius": "unit(px,%){1,4}",
            **_INNER_BORDERS,
            "inner-border-radius": "unit(px,%){1,4}",
            "inner-background-color": "color",
            **_PADDING,
            "width": "unit(px,%)",
            "vertical-align": "enum(top,bottom,middle)",
            "direction": "enum(ltr,rtl)",
        },
        {"direction": "ltr", "vertical-align": "top"},
    ),
    _definition(
        "mj-divider",
        {
            "border-color": "color",
            "border-style": "string",
            "border-width": "unit(px)",
            "container-background-color": "color",
            **_PADDING,
            "width": "unit(px,%)",
            "align": "enum(left,center,right)",
        },
        {
            "border-color": "#000000",
            "border-style": "solid",
            "border-width": "4px",
            "padding": "10px 25px",
            "width": "100%",
            "align": "center",
        },
    ),
    _definition(
        "mj-group",
        {
            "background-color": "color",
            "direction": "enum(ltr,rtl)",
            "vertical-align": "enum(top,bottom,middle)",
            "width": "unit(px,%)",
        },
        {"direction": "ltr"},
    ),
    _definition(
        "mj-hero",
        {
            "mode": "string",
            "height": "unit(px,%)",
            "background-url": "string",
            "background-width": "unit(px,%)",
            "background-height": "unit(px,%)",
            "background-position": "string",
            "border-radius": "string",
            "container-background-color": "color",
            "inner-background-color": "color",
            "inner-padding": "unit(px,%){1,4}",
            "inner-padding-top": "unit(px,%)",
            "inner-padding-left": "unit(px,%)",
            "inner-padding-right": "unit(px,%)",
            "inner-padding-bottom": "unit(px,%)",
            **_PADDING,
            "background-color": "color",
            "vertical-align": "enum(top,bottom,middle)",
        },
        {
            "mode": "fixed-height",
            "height": "0px",
            "background-url": None,
            "background-position": "center center",
            "padding": "0px",
            "padding-bottom": None,
            "padding-left": None,
            "padding-right": None,
            "padding-top": None,
            "background-color": "#ffffff",
            "vertical-align": "top",
        },
    ),
    _definition(
        "mj-image",
        {
            "alt": "string",
            "href": "string",
            "name": "string",
            "src": "string",
            "srcset": "string",
            "sizes": "string",
            "title": "string",
            "rel": "string",
            "align": "enum(left,center,right)",
            **_BORDERS,
            "border-radius": "unit(px,%){1,4}",
            "container-background-color": "color",
            "fluid-on-mobile": "boolean",
            **_PADDING,
            "target": "string",
            "width": "unit(px)",
            "height": "unit(px,auto)",
            "max-height": "unit(px,%)",
            "font-size": "unit(px)",
            "usemap": "string",
        },
        {
            "align": "center",
            "border": "0",
            "height": "auto",
            "padding": "10px 25px",
            "target": "_blank",
            "font-size": "13px",
        },
    ),
    # === NAVBAR ===
    _definition(
        "mj-navbar",
        {
            "align": "enum(left,center,right)",
            "base-url": "string",
            "hamburger": "string",
            "ico-align": "enum(left,center,right)",
            "ico-open": "string",
            "ico-close": "string",
            "ico-color": "color",
            "ico-font-size": "unit(px,%)",
            "ico-font-family": "string",
            "ico-text-transform": "string",
            "ico-padding": "unit(px,%){1,4}",
            "ico-padding-left": "unit(px,%)",
            "ico-padding-top": "unit(px,%)",
            "ico-padding-right": "unit(px,%)",
            "ico-padding-bottom": "unit(px,%)",
            "ico-text-decoration": "string",
            "ico-line-height": "unit(px,%,)",
        },
        {
            "align": "center",
            "base-url": None,
            "hamburger": None,
            "ico-align": "center",
            "ico-open": "&#9776;",
            "ico-close": "&#8855;",
            "ico-color": "#000000",
            "ico-font-size": "30px",
            "ico-font-family": _FONT_STACK,
            "ico-text-transform": "uppercase",
            "ico-padding": "10px",
            "ico-text-decoration": "none",
            "ico-line-height": "30px",
        },
    ),
    _definition(
        "mj-navbar-link",
        {
            "color": "color",
            "font-family": "string",
            "font-size": "unit(px)",
            "font-style": "string",
            "font-weight": "string",
            "href": "string",
            "name": "string",
            "target": "string",
            "rel": "string",
            "letter-spacing": "unit(px,em)",
            "line-height": "unit(px,%,)",
            **_PADDING,
            "text-decoration": "string",
            "text-transform": "string",
        },
        {
            "color": "#000000",
            "font-family": _FONT_STACK,
            "font-size": "13px",
            "font-weight": "normal",
            "line-height": "22px",
            "padding": "15px 10px",
            "target": "_blank",
            "text-decoration": "none",
            "text-transform": "uppercase",
        },
    ),
    # === CONTENT ===
    _definition("mj-raw", {"position": "enum(file-start)"}),
    _definition("mj-section", _SECTION_ATTRIBUTES, _SECTION_DEFAULTS),
    _definition(
        "mj-social",
        {
            "align": "enum(left,right,center)",
            "border-radius": "unit(px,%)",
            "container-background-color": "color",
            "color": "color",
            "font-family": "string",
            "font-size": "unit(px)",
            "font-style": "string",
            "font-weight": "string",
            "icon-size": "unit(px,%)",
            "icon-height": "unit(px,%)",
            "icon-padding": "unit(px,%){1,4}",
            "inner-padding": "unit(px,%){1,4}",
            "line-height": "unit(px,%,)",
            "mode": "enum(horizontal,vertical)",
            **_PADDING,
            "table-layout": "enum(auto,fixed)",
            "text-padding": "unit(px,%){1,4}",
            "text-decoration": "string",
        },
        {
            "align": "center",
            "border-radius": "3px",
            "color": "#333333",
            "font-family": _FONT_STACK,
            "font-size": "13px",
            "icon-size": "20px",
            "inner-padding": None,
            "line-height": "22px",
            "mode": "horizontal",
            "padding": "10px 25px",
            "text-decoration": "none",
        },
    ),
    _definition(
        "mj-social-element",
        {
            "align": "enum(left,center,right)",
            "icon-position": "enum(left,right)",
            "background-color": "color",
            "color": "color",
            "border-radius": "unit(px)",
            "font-family": "string",
            "font-size": "unit(px)",
            "font-style": "string",
            "font-weight": "string",
            "href": "string",
            "icon-size": "unit(px,%)",
            "icon-height": "unit(px,%)",
            "icon-padding": "unit(px,%){1,4}",
            "line-height": "unit(px,%,)",
            "name": "string",
            **_PADDING,
            "text-padding": "unit(px,%){1,4}",
            "rel": "string",
            "src": "string",
            "srcset": "string",
            "sizes": "string",
            "alt": "string",
            "title": "string",
            "target": "string",
            "text-decoration": "string",
            "vertical-align": "enum(top,middle,bottom)",
        },
        {
            "alt": "",
            "align": "left",
            "icon-position": "left",
            "color": "#000",
            "border-radius": "3px",
            "font-family": _FONT_STACK,
            "font-size": "13px",
            "line-height": "1",
            "padding": "4px",
            "text-padding": "4px 4px 4px 0",
            "target": "_blank",
            "text-decoration": "none",
            "vertical-align": "middle",
        },
    ),
    _definition(
        "mj-spacer",
        {
            **_BORDERS,
            "container-background-color": "color",
            **_PADDING,
            "height": "unit(px,%)",
        },
        {"height": "20px"},
    ),
    _definition(
        "mj-table",
        {
            "align": "enum(left,right,center)",
            "border": "string",
            "cellpadding": "integer",
            "cellspacing": "integer",
            "container-background-color": "color",
            "color": "color",
            "font-family": "string",
            "font-size": "unit(px)",
            "font-weight": "string",
            "line-height": "unit(px,%,)",
            **_PADDING,
            "role": "enum(none,presentation)",
            "table-layout": "enum(auto,fixed,initial,inherit)",
            "vertical-align": "enum(top,bottom,middle)",
            "width": "unit(px,%,auto)",
        },
        {
            "align": "left",
            "border": "none",
            "cellpadding": "0",
            "cellspacing": "0",
            "color": "#000000",
            "font-family": _FONT_STACK,
            "font-size": "13px",
            "line-height": "22px",
            "padding": "10px 25px",
            "table-layout": "auto",
            "width": "100%",
        },
    ),
    _definition(
        "mj-text",
        {
            "align": "enum(left,right,center,justify)",
            "background-color": "color",
            "color": "color",
            "container-background-color": "color",
            "font-family": "string",
            "font-size": "unit(px)",
            "font-style": "string",
            "font-weight": "string",
            "height": "unit(px,%)",
            "letter-spacing": "unit(px,em)",
            "line-height": "unit(px,%,)",
            **_PADDING,
            "text-decoration": "string",
            "text-transform": "string",
            "vertical-align": "enum(top,bottom,middle)",
        },
        {
            "align": "left",
            "color": "#000000",
            "font-family": _FONT_STACK,
            "font-size": "13px",
            "line-height": "1",
            "padding": "10px 25px",
        },
    ),
    _definition(
        "mj-wrapper",
        {**_SECTION_ATTRIBUTES, "gap": "unit(px)"},
        _SECTION_DEFAULTS,
    ),
    # === HEAD ===
    _definition("mj-head"),
    _definition("mj-attributes"),
    _definition("mj-breakpoint", {"width": "unit(px)"}),
    _definition("mj-font", {"name": "string", "href": "string"}),
    _definition("mj-html-attributes"),
    _definition("mj-preview"),
    _definition("mj-style", {"inline": "string"}),
    _definition("mj-title"),
    _definition(
        "mjml",
        {"owa": "string", "lang": "string", "dir": "string"},
        {"owa": "none", "lang": "und", "dir": "auto"},
    ),
)

COMPONENT_REGISTRY: dict[str, ComponentDefinition] = {
    definition.name: definition for definition in _BUILTIN_DEFINITIONS
}


# =============================================================================
# Definition Loading
# =============================================================================


class _DefinitionEntry(BaseModel):
    """One component entry of a definition dump file."""

    package_name: str | None = Field(default=None, alias="packageName")
    allowed_attributes: dict[str, Any] = Field(
        default_factory=dict, alias="allowedAttributes"
    )
    default_attributes: dict[str, Any] = Field(
        default_factory=dict, alias="defaultAttributes"
    )

    model_config = {"populate_by_name": True}

    @field_validator("allowed_attributes", "default_attributes", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


def parse_component_definitions(
    data: dict[str, Any],
) -> dict[str, ComponentDefinition]:
    """Validate raw definition data into ComponentDefinition objects.

    Args:
        data: Mapping of component name to ``allowedAttributes`` /
            ``defaultAttributes`` tables (``packageName`` optional).

    Returns:
        Dict mapping component name to its definition.

    Raises:
        DefinitionLoadError: If the data does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise DefinitionLoadError(
            f"Definition data must be an object, got {type(data).__name__}"
        )

    definitions: dict[str, ComponentDefinition] = {}
    for name, raw in data.items():
        try:
            entry = _DefinitionEntry.model_validate(raw)
        except ValidationError as e:
            raise DefinitionLoadError(f"Invalid definition for {name}: {e}") from e

        definitions[name] = ComponentDefinition(
            name=name,
            package_name=entry.package_name or COMPONENT_PACKAGES.get(name, "unknown"),
            allowed_attributes=entry.allowed_attributes,
            default_attributes=entry.default_attributes,
        )
    return definitions


def load_component_definitions(
    path: Path | str,
    base: dict[str, ComponentDefinition] | None = None,
) -> dict[str, ComponentDefinition]:
    """Load a definition dump file, layered over a base registry.

    Args:
        path: JSON file with component attribute tables.
        base: Definitions to extend. Defaults to the built-in registry.

    Returns:
        Merged definitions; file entries replace base entries.

    Raises:
        DefinitionLoadError: If the file is missing or malformed.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise DefinitionLoadError(f"Definition file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DefinitionLoadError(f"Definition file is not valid JSON: {e}") from e

    merged = dict(COMPONENT_REGISTRY if base is None else base)
    loaded = parse_component_definitions(data)
    for name in loaded:
        if name not in COMPONENT_PACKAGES:
            logger.warning(
                f"{name} is not a known MJML component and will not be extracted"
            )
    merged.update(loaded)
    logger.info(f"Loaded {len(loaded)} component definitions from {path}")
    return merged


def get_component_definition(name: str) -> ComponentDefinition:
    """Get the built-in definition for a component.

    Raises:
        KeyError: If the component is not in the registry.
    """
    return COMPONENT_REGISTRY[name]


# =============================================================================
# Spec Extraction
# =============================================================================


def build_component_spec(definition: ComponentDefinition) -> ComponentSpec:
    """Infer attribute schemas for every declared attribute of a component.

    Args:
        definition: Component attribute tables.

    Returns:
        ComponentSpec with one AttributeSchema per allowed attribute.
    """
    spec = ComponentSpec(
        name=definition.name,
        package_name=definition.package_name,
        allowed_attributes=dict(definition.allowed_attributes),
        default_attributes=dict(definition.default_attributes),
    )
    for attr_name, annotation in definition.allowed_attributes.items():
        spec.attributes[attr_name] = infer_attribute_schema(
            attr_name, annotation, definition.default_attributes.get(attr_name)
        )
    return spec


def extract_component_specs(
    definitions: dict[str, ComponentDefinition] | None = None,
    components: dict[str, str] | None = None,
) -> dict[str, ComponentSpec]:
    """Extract specs for all known components.

    Components without a definition are reported and skipped, as are
    components whose extraction fails; the rest are still returned.

    Args:
        definitions: Attribute tables by component. Defaults to the built-in
            registry.
        components: Ordered component -> package table to walk. Defaults to
            COMPONENT_PACKAGES.

    Returns:
        Ordered dict of component name to ComponentSpec.
    """
    definitions = COMPONENT_REGISTRY if definitions is None else definitions
    components = COMPONENT_PACKAGES if components is None else components

    logger.info("Extracting MJML component specifications...")

    specs: dict[str, ComponentSpec] = {}
    for component_name, package_name in components.items():
        definition = definitions.get(component_name)
        if definition is None:
            logger.warning(
                f"Could not find definition in {package_name} for {component_name}"
            )
            continue

        try:
            spec = build_component_spec(definition)
        except Exception as e:
            logger.error(f"Error processing {component_name}: {e}")
            continue

        specs[component_name] = spec
        logger.info(f"{component_name}: {len(spec.attributes)} attributes")

    return specs


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

"""
SERP Parser - Declarative Extraction Configs

An ExtractionConfig describes how to turn a node (or NodeSet) into a value
without writing extractor-specific code:

- query:       selector / predicate / ordered fallback list to search with.
               Without a query the config applies to the element itself.
- attribute:   "text" for get_text over the matches, or the name of an
               attribute read from the first match.
- separator, trim, shallow_search:
               get_text options, only used with attribute="text".
- properties:  overrides attribute. Mapping of field name -> config; every
               match is turned into one record by applying each field config
               to it. Always produces a list.
- process:     overrides properties. Callable(element, config) whose return
               value is used as is.

Example:
    config = ExtractionConfig.record(
        "div.item",
        url=ExtractionConfig.attr("href", "a[href]"),
        title=ExtractionConfig.text("h1"),
    )
    items = parse_by_config(config, document)

Author: scrape-serp
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .serp_nodes import NodeSet
from .serp_select import ElementInput, Query, as_node_set, get_attribute, get_text, select


TEXT_ATTRIBUTE = "text"


class ConfigKind(Enum):
    """What a config produces, in precedence order."""
    PROCESS = "process"
    PROPERTIES = "properties"
    TEXT = "text"
    ATTRIBUTE = "attribute"
    NODES = "nodes"


@dataclass(frozen=True)
class ExtractionConfig:
    """Declarative description of one extracted value."""
    query: Optional[Query] = None
    attribute: Optional[str] = None
    separator: str = ", "
    trim: bool = True
    shallow_search: bool = False
    properties: Optional[Mapping[str, "ExtractionConfig"]] = None
    process: Optional[Callable[[Any, "ExtractionConfig"], Any]] = None

    @property
    def kind(self) -> ConfigKind:
        if self.process is not None:
            return ConfigKind.PROCESS
        if self.properties is not None:
            return ConfigKind.PROPERTIES
        if self.attribute == TEXT_ATTRIBUTE:
            return ConfigKind.TEXT
        if self.attribute:
            return ConfigKind.ATTRIBUTE
        return ConfigKind.NODES

    @classmethod
    def text(cls, query: Optional[Query] = None, separator: str = ", ", **options) -> "ExtractionConfig":
        """Config returning the joined text of the matches."""
        return cls(query=query, attribute=TEXT_ATTRIBUTE, separator=separator, **options)

    @classmethod
    def attr(cls, name: str, query: Optional[Query] = None) -> "ExtractionConfig":
        """Config returning an attribute of the first match."""
        return cls(query=query, attribute=name)

    @classmethod
    def record(cls, query: Optional[Query] = None, **properties: "ConfigInput") -> "ExtractionConfig":
        """Config returning one record per match."""
        return cls(
            query=query,
            properties={key: coerce_config(value) for key, value in properties.items()},
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractionConfig":
        """
        Build a config from a plain (possibly nested) mapping.

        Accepts camelCase `shallowSearch` as well as `shallow_search`.

        Raises:
            ValueError: If the mapping holds keys a config does not know
        """
        data = dict(data)
        if "shallowSearch" in data:
            data["shallow_search"] = data.pop("shallowSearch")

        unknown = set(data) - _CONFIG_KEYS
        if unknown:
            raise ValueError(f"Unknown extraction config keys: {sorted(unknown)}")

        properties = data.get("properties")
        if properties is not None:
            data["properties"] = {key: coerce_config(value) for key, value in properties.items()}

        return cls(**data)


_CONFIG_KEYS = {"query", "attribute", "separator", "trim", "shallow_search", "properties", "process"}

ConfigInput = Union[ExtractionConfig, Mapping[str, Any]]


def coerce_config(config: Optional[ConfigInput]) -> Optional[ExtractionConfig]:
    """Accept either an ExtractionConfig or its plain mapping form."""
    if config is None or isinstance(config, ExtractionConfig):
        return config
    return ExtractionConfig.from_dict(config)


def _parse_record(properties: Mapping[str, ExtractionConfig], node) -> Dict[str, Any]:
    return {key: parse_by_config(config, node) for key, config in properties.items()}


def parse_by_config(config: Optional[ConfigInput], element: ElementInput) -> Any:
    """
    Apply an extraction config to a node or NodeSet.

    Args:
        config: ExtractionConfig or plain mapping
        element: Node or NodeSet to extract from

    Returns:
        The extracted value; None when the config or element is missing or
        nothing matched
    """
    config = coerce_config(config)
    if config is None or not element:
        return None

    kind = config.kind
    if kind is ConfigKind.PROCESS:
        return config.process(element, config)

    if config.query is not None:
        found: NodeSet = select(config.query, element)
    else:
        found = as_node_set(element)

    if not found:
        return None

    if kind is ConfigKind.PROPERTIES:
        return [_parse_record(config.properties, node) for node in found]

    if kind is ConfigKind.TEXT:
        return get_text(
            found,
            separator=config.separator,
            trim=config.trim,
            shallow_search=config.shallow_search,
        )

    if kind is ConfigKind.ATTRIBUTE:
        return get_attribute(config.attribute, found)

    return found

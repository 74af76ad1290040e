from __future__ import annotations

"""
@meta
name: configuration_store
type: utility
domain: config
responsibility:
  - Hold ordered string key/value configuration entries
  - Merge Hadoop-style XML resources, honouring final properties
  - Expand ${var} references on read
inputs:
  - Base mappings or stores
  - *-site.xml / *-default.xml resources
outputs:
  - ConfigurationStore
tags:
  - utility
  - config
  - hadoop
lifecycle:
  status: active
"""
import logging
import os
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from .exceptions import ResourceLoadError, VariableSubstitutionError

logger = logging.getLogger(__name__)

PROGRAMMATIC_SOURCE = "programmatically"
MAX_SUBSTITUTIONS = 20
ENV_VAR_PREFIX = "env."

_VARIABLE_PATTERN = re.compile(r"\$\{([^}$\s]+)\}")

Resource = Union[str, Path]


def resource_to_path(resource: Resource) -> Path:
    """
    Convert a resource reference (path or ``file://`` URL) into a filesystem path.

    Raises:
        ResourceLoadError: If the URL scheme is not ``file``.
    """
    if isinstance(resource, Path):
        return resource
    parsed = urlparse(resource)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    # Single letters are Windows drive prefixes, not schemes
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ResourceLoadError(f"Unsupported resource scheme '{parsed.scheme}': {resource}", resource)
    return Path(resource)


def parse_configuration_xml(content: bytes, source: str) -> List[Tuple[str, str, bool]]:
    """
    Parse a Hadoop ``<configuration>`` document.

    Args:
        content: Raw XML bytes.
        source: Resource name used in error and log messages.

    Returns:
        ``(name, value, final)`` tuples in document order. Properties without
        a ``<name>`` or ``<value>`` are skipped.

    Raises:
        ResourceLoadError: If the document is not well-formed or its root
            element is not ``<configuration>``.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise ResourceLoadError(f"Malformed configuration resource {source}: {exc}", source) from exc

    if root.tag != "configuration":
        raise ResourceLoadError(
            f"Bad configuration resource {source}: top-level element is <{root.tag}>, not <configuration>",
            source,
        )

    properties: List[Tuple[str, str, bool]] = []
    for element in root:
        if not isinstance(element.tag, str):
            continue
        if element.tag != "property":
            logger.warning("Bad configuration resource %s: element <%s> is not <property>", source, element.tag)
            continue

        name: Optional[str] = None
        value: Optional[str] = None
        final = False
        for field in element:
            if field.tag == "name" and field.text:
                name = field.text.strip()
            elif field.tag == "value" and field.text is not None:
                value = field.text
            elif field.tag == "final" and field.text:
                final = field.text.strip() == "true"

        if name and value is not None:
            properties.append((name, value, final))
    return properties


class ConfigurationStore:
    """
    Ordered, mutable mapping of configuration keys to string values.

    Entries come from a caller-supplied base and from XML resources merged
    with :meth:`add_resource`; later resources override earlier ones unless
    the earlier definition was marked ``<final>true</final>``. Values read
    with :meth:`get` have ``${key}`` and ``${env.NAME}`` references expanded.
    """

    def __init__(
        self,
        base: Optional[Union["ConfigurationStore", Mapping[str, Any]]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._properties: Dict[str, str] = {}
        self._sources: Dict[str, str] = {}
        self._finals: Set[str] = set()
        self._resources: List[Path] = []
        self._environ = environ

        if isinstance(base, ConfigurationStore):
            self._properties.update(base._properties)
            self._sources.update(base._sources)
            self._finals.update(base._finals)
            self._resources.extend(base._resources)
            if environ is None:
                self._environ = base._environ
        elif base is not None:
            for key, value in base.items():
                self.set(key, value)

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    @property
    def resources(self) -> List[Path]:
        """Resources merged into this store, in load order."""
        return list(self._resources)

    def get_raw(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._properties.get(key, default)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for ``key`` with variable references expanded."""
        value = self._properties.get(key)
        if value is None:
            return default
        return self._substitute(value)

    def set(self, key: str, value: Any, source: str = PROGRAMMATIC_SOURCE) -> None:
        if key is None:
            raise ValueError("Property name must not be null")
        if value is None:
            raise ValueError(f"The value of property {key} must not be null")
        key = key.strip()
        self._properties[key] = str(value)
        self._sources[key] = source

    def unset(self, key: str) -> None:
        self._properties.pop(key, None)
        self._sources.pop(key, None)
        self._finals.discard(key)

    def get_source(self, key: str) -> Optional[str]:
        """Return the resource (or ``'programmatically'``) that last set ``key``."""
        return self._sources.get(key)

    def is_final(self, key: str) -> bool:
        return key in self._finals

    def add_resource(self, resource: Resource) -> Path:
        """
        Merge properties from a Hadoop XML resource into this store.

        Args:
            resource: Filesystem path or ``file://`` URL.

        Returns:
            Path of the loaded resource.

        Raises:
            ResourceLoadError: If the resource cannot be read or parsed.
        """
        path = resource_to_path(resource)
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise ResourceLoadError(f"Unable to read configuration resource {path}: {exc}", path) from exc

        source = str(path)
        loaded = 0
        for name, value, final in parse_configuration_xml(content, source):
            if name in self._finals and self._properties.get(name) != value:
                logger.warning(
                    "%s: attempt to override final parameter: %s; Ignoring.", source, name
                )
                continue
            self._properties[name] = value
            self._sources[name] = source
            if final:
                self._finals.add(name)
            loaded += 1

        self._resources.append(path)
        logger.debug("Loaded %d properties from %s", loaded, source)
        return path

    def _lookup_variable(self, name: str) -> Optional[str]:
        if name.startswith(ENV_VAR_PREFIX):
            return self.environ.get(name[len(ENV_VAR_PREFIX):])
        return self._properties.get(name)

    def _substitute(self, value: str) -> str:
        expanded = value
        for _ in range(MAX_SUBSTITUTIONS):
            changed = False
            for match in _VARIABLE_PATTERN.finditer(expanded):
                replacement = self._lookup_variable(match.group(1))
                if replacement is None or replacement == match.group(0):
                    continue
                expanded = expanded[: match.start()] + replacement + expanded[match.end():]
                changed = True
                break
            if not changed:
                return expanded
        raise VariableSubstitutionError(
            f"Variable substitution depth too large: {MAX_SUBSTITUTIONS} {value}"
        )

    def to_dict(self, expand: bool = False) -> Dict[str, str]:
        if not expand:
            return dict(self._properties)
        return {key: self._substitute(value) for key, value in self._properties.items()}

    def items(self) -> List[Tuple[str, str]]:
        return list(self._properties.items())

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"ConfigurationStore({len(self._properties)} properties, resources={[str(r) for r in self._resources]})"

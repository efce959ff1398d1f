"""Repository loaded from a JSON resource index.

Index document shape::

    {
      "name": "central",
      "resources": [
        {
          "capabilities": [
            {"namespace": "osgi.identity",
             "attributes": {"osgi.identity": "org.example.api", "version": "1.2.0"},
             "directives": {}}
          ],
          "requirements": [
            {"namespace": "osgi.wiring.package",
             "directives": {"filter": "(osgi.wiring.package=org.slf4j)"}}
          ]
        }
      ]
    }

The index is read from a local path or fetched over http(s). Values of the
``version`` and ``bundle-version`` attributes are parsed into Version so
that range filters compare them numerically.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from ..common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from ..constants import Constants
from ..errors import InvalidConfigurationError
from ..resource.model import CapReqBuilder, Resource, ResourceBuilder
from ..versioning import Version
from .memory import InMemoryRepository

logger = logging.getLogger(__name__)

_VERSION_KEYS = (Constants.VERSION_ATTRIBUTE, Constants.BUNDLE_VERSION_ATTRIBUTE)


def _convert_attributes(attributes: Mapping[str, Any]) -> Dict[str, Any]:
    converted = dict(attributes)
    for key in _VERSION_KEYS:
        value = converted.get(key)
        if isinstance(value, str):
            converted[key] = Version.parse(value)
    return converted


def _builder(entry: Any, where: str) -> CapReqBuilder:
    if not isinstance(entry, dict) or not isinstance(entry.get("namespace"), str):
        raise InvalidConfigurationError(f"Index entry at {where} needs a string 'namespace'")
    attributes = entry.get("attributes") or {}
    directives = entry.get("directives") or {}
    if not isinstance(attributes, dict) or not isinstance(directives, dict):
        raise InvalidConfigurationError(f"Index entry at {where} has non-mapping attributes/directives")
    return (
        CapReqBuilder(entry["namespace"])
        .add_attributes(_convert_attributes(attributes))
        .add_directives({str(k): str(v) for k, v in directives.items()})
    )


def parse_index(document: Mapping[str, Any]) -> List[Resource]:
    """Build resources from a decoded index document."""
    entries = document.get("resources")
    if not isinstance(entries, list):
        raise InvalidConfigurationError("Index document needs a 'resources' list")

    resources = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InvalidConfigurationError(f"Index resource #{i} is not a mapping")
        builder = ResourceBuilder()
        for j, cap in enumerate(entry.get("capabilities") or []):
            builder.add_capability(_builder(cap, f"resources[{i}].capabilities[{j}]"))
        for j, req in enumerate(entry.get("requirements") or []):
            builder.add_requirement(_builder(req, f"resources[{i}].requirements[{j}]"))
        resources.append(builder.build())
    return resources


def _fetch(location: str) -> Dict[str, Any]:
    target = safe_url(location)
    with Timer() as t:
        try:
            res = requests.get(location, timeout=Constants.REQUEST_TIMEOUT)
        except requests.Timeout as exc:
            raise InvalidConfigurationError(
                f"Index download from {target} timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:
            raise InvalidConfigurationError(f"Index download from {target} failed: {exc}") from exc

    if is_debug_enabled(logger):
        logger.debug(
            "Index response",
            extra=extra_context(
                event="http_response",
                component="indexed_repository",
                action="GET",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=target,
            ),
        )
    if res.status_code != 200:
        raise InvalidConfigurationError(f"Index download from {target} returned HTTP {res.status_code}")
    try:
        return res.json()
    except ValueError as exc:
        raise InvalidConfigurationError(f"Index at {target} is not valid JSON") from exc


def _read(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fh:
        try:
            return json.load(fh)
        except json.JSONDecodeError as exc:
            raise InvalidConfigurationError(f"Index file {path} is not valid JSON: {exc}") from exc


class IndexedRepository(InMemoryRepository):
    """In-memory repository populated from a JSON index."""

    def __init__(self, location: Union[str, Path], name: Optional[str] = None):
        self.location = str(location)
        if self.location.startswith(("http://", "https://")):
            document = _fetch(self.location)
        else:
            document = _read(Path(location))
        if not isinstance(document, dict):
            raise InvalidConfigurationError(f"Index at {safe_url(self.location)} is not a JSON object")

        resources = parse_index(document)
        super().__init__(name or document.get("name") or self.location, resources)
        logger.info("Loaded %d resources from index %s", len(resources), self.name)

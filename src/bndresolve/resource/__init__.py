"""Resource model, filter expressions and header parsing."""

from .filters import (
    AndFilter,
    Filter,
    NotFilter,
    OrFilter,
    PresentFilter,
    SimpleFilter,
    SubstringFilter,
    filter_from_version_range,
    parse_filter,
)
from .header import Clause, parse_parameters
from .model import (
    Capability,
    CapReqBuilder,
    HostedCapability,
    Requirement,
    Resource,
    ResourceBuilder,
    Wire,
    Wiring,
)

__all__ = [
    "AndFilter",
    "Capability",
    "CapReqBuilder",
    "Clause",
    "Filter",
    "HostedCapability",
    "NotFilter",
    "OrFilter",
    "PresentFilter",
    "Requirement",
    "Resource",
    "ResourceBuilder",
    "SimpleFilter",
    "SubstringFilter",
    "Wire",
    "Wiring",
    "filter_from_version_range",
    "parse_filter",
    "parse_parameters",
]

"""Resolve-time effectiveness of requirements."""
from __future__ import annotations

from ..constants import Constants, Effective
from ..resource.model import Requirement


def is_effective(requirement: Requirement) -> bool:
    """True when the ``effective`` directive is absent or ``resolve``."""
    effective = requirement.directives.get(Constants.EFFECTIVE_DIRECTIVE)
    return effective is None or effective == Effective.RESOLVE.value

"""Constants used in the project."""

from enum import Enum


class Namespaces(Enum):
    """Capability and requirement namespaces understood by the resolve context.

    Args:
        Enum (string): Namespace names.
    """

    IDENTITY = "osgi.identity"
    CONTRACT = "osgi.contract"


class Effective(Enum):
    """Values of the ``effective`` requirement directive.

    Args:
        Enum (string): Directive values.
    """

    RESOLVE = "resolve"
    ACTIVE = "active"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Attribute and directive names
    VERSION_ATTRIBUTE = "version"
    BUNDLE_VERSION_ATTRIBUTE = "bundle-version"
    FILTER_DIRECTIVE = "filter"
    EFFECTIVE_DIRECTIVE = "effective"

    # Value of the osgi.contract attribute that tags a framework implementation
    CONTRACT_OSGI_FRAMEWORK = "OSGiFramework"

    # Run descriptor keys, with and without the leading dash used in .bndrun files
    RUN_REPOS_KEYS = ("-runrepos", "runrepos")
    RUN_FRAMEWORK_KEYS = ("-runfw", "runfw")

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "BNDRESOLVE_LOG_LEVEL"
    ENV_RUN_FRAMEWORK = "BNDRESOLVE_RUNFW"
    ENV_RUN_REPOS = "BNDRESOLVE_RUNREPOS"

    REQUEST_TIMEOUT = 30  # Timeout in seconds for index downloads

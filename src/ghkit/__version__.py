"""Version information for ghkit.

Single source of truth for version number.
Follows PEP 440 and semantic versioning principles.
"""

__version__ = "0.3.0"
__version_info__ = tuple(int(part) for part in __version__.split("."))

# Version history:
# 0.3.0 - GraphQL requests, discussion builders, check suites
# 0.2.0 - Restartable pagination, update-in-place builders
# 0.1.0 - Initial release

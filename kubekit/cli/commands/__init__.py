"""CLI command modules.

Commands:
- apply: Create resources from a manifest file
- describe: Detailed report for a single resource
- cluster-info: API endpoint and served versions
- config: Current context namespace
"""

from .apply import apply
from .cluster_info import cluster_info
from .config import config_app
from .describe import describe

__all__ = [
    "apply",
    "describe",
    "cluster_info",
    "config_app",
]

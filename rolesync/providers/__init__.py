"""Tool list providers: where role definitions are fetched from.

- github: plain-text role files on a static host
- registry: JSON role registry service
"""

from rolesync.providers.base import ToolListProvider
from rolesync.providers.factory import create_provider

__all__ = ["ToolListProvider", "create_provider"]

"""rolesync: keep installed tools in sync with a set of remote roles."""

__version__ = "0.2.0"

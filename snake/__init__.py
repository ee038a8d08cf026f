"""Building blocks for small web services and a project scaffolding tool."""

__version__ = "0.2.0"
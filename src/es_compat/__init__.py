"""es-compat: check ECMAScript syntax compatibility of a package and its dependencies."""

__version__ = "0.3.0"

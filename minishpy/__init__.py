"""A small interactive shell with quoting, expansion, redirections, pipelines and builtins."""

__version__ = "0.1.0"
__all__ = ["__version__"]
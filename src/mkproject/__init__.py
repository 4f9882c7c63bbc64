"""mkproject - scaffold new projects from remote templates."""

__version__ = "1.0.0"

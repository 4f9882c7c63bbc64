"""Configuration management for mkproject."""

from .conditions import (
    TEMPLATES_FILE_ENV,
    ConditionEntry,
    TemplateSources,
    get_condition_table,
    get_template_sources,
    load_condition_table,
)

__all__ = [
    "TEMPLATES_FILE_ENV",
    "ConditionEntry",
    "TemplateSources",
    "get_condition_table",
    "get_template_sources",
    "load_condition_table",
]

"""
Top-level package for the entity picker.

This package exposes the selection core, the listing glue and the Dash UI.
Most code should import from submodules such as:
    entity_picker.core
    entity_picker.listing
    entity_picker.ui
"""

__all__: list[str] = []

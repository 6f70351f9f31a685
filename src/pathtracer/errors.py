# errors.py
"""Exceptions raised by the loading side of the renderer.

The rendering core never raises for bad geometry; these cover malformed
input files and settings only.
"""


class ConfigError(ValueError):
    """A render or camera setting is missing or has an invalid value."""


class SceneError(ValueError):
    """A scene or mesh file cannot be read or parsed."""

"""Apply display preferences to the runtime presentation environment.

The presentation environment is modelled by :class:`PresentationRoot`: a set
of classes on the root element, a set of classes on the body element, and a
map of style variables. Rendering code reads these; the theme applier is the
only writer. Every operation is idempotent for a given target value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dictionary_client.schemas.preferences import (
    FONT_SIZES,
    THEME_MODES,
    CustomColors,
    FontSize,
    ThemeMode,
)

logger = logging.getLogger(__name__)

BASELINE_THEME = "light"
FONT_SIZE_CLASS_PREFIX = "font-size-"

# Colour slot -> style variable it overrides.
COLOR_VARIABLES: dict[str, str] = {
    "text_color": "--foreground",
    "ui_buttons_color": "--primary",
    "screen_color": "--card",
    "background_color": "--background",
}


def font_size_class(size: str) -> str:
    return f"{FONT_SIZE_CLASS_PREFIX}{size}"


@dataclass
class PresentationRoot:
    """In-process model of the document the UI renders into."""

    root_classes: set[str] = field(default_factory=set)
    body_classes: set[str] = field(default_factory=set)
    style_properties: dict[str, str] = field(default_factory=dict)

    @property
    def active_theme(self) -> str:
        """Return the theme currently applied; no override class means light."""

        for theme in THEME_MODES:
            if theme in self.root_classes:
                return theme
        return BASELINE_THEME


class ThemeApplier:
    """Side-effecting helpers that push preferences into a presentation root."""

    def __init__(self, root: PresentationRoot | None = None) -> None:
        self.root = root if root is not None else PresentationRoot()

    def apply_theme(self, theme: ThemeMode) -> None:
        """Make ``theme`` the only theme class on the root element.

        The light theme is the baseline and is expressed by the absence of
        any theme class.
        """

        self.root.root_classes.difference_update(THEME_MODES)
        if theme != BASELINE_THEME:
            self.root.root_classes.add(theme)
        logger.debug("Applied theme %s", theme)

    def apply_font_size(self, size: FontSize) -> None:
        """Make ``size`` the only font size class on the body element."""

        self.root.body_classes.difference_update(font_size_class(known) for known in FONT_SIZES)
        self.root.body_classes.add(font_size_class(size))
        logger.debug("Applied font size %s", size)

    def apply_custom_colors(self, colors: CustomColors) -> None:
        """Override the style variables for every colour slot that is set.

        Slots left unset keep whatever value they currently have.
        """

        for slot, variable in COLOR_VARIABLES.items():
            value = getattr(colors, slot)
            if value:
                self.root.style_properties[variable] = value

    def reset_custom_colors(self, theme: ThemeMode) -> None:
        """Drop colour overrides and re-apply ``theme`` as the authority."""

        for variable in COLOR_VARIABLES.values():
            self.root.style_properties.pop(variable, None)
        self.apply_theme(theme)


__all__ = [
    "BASELINE_THEME",
    "COLOR_VARIABLES",
    "PresentationRoot",
    "ThemeApplier",
    "font_size_class",
]

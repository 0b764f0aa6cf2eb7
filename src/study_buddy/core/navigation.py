# src/study_buddy/core/navigation.py

from __future__ import annotations

import logging

from ..errors import NavigationError
from .models import Section
from .state import AppState

logger = logging.getLogger(__name__)


def select_section(state: AppState, section: Section) -> None:
    """Home -> section. Sections are only reachable from Home."""
    if state.section is not None:
        if state.section == section:
            return
        raise NavigationError(
            f"Go back to Home before opening {section.label} (currently in {state.section.label})."
        )
    state.section = section
    logger.debug("Navigated Home -> %s", section.value)


def go_back(state: AppState) -> bool:
    """Section -> Home. Returns False when already at Home."""
    if state.section is None:
        return False
    logger.debug("Navigated %s -> Home", state.section.value)
    state.section = None
    return True

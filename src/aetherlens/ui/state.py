"""State management utilities for the AetherLens UI.

This module handles lazy initialization of the per-session
:class:`~aetherlens.ui.models.UIState`.
"""

import logging

from aetherlens.core.config import config
from aetherlens.core.orchestrator import create_orchestrator

from .models import UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    Creates the session's orchestrator on first use.  The orchestrator does
    not connect to anything until a request needs it.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        return state

    logger.info("Initializing UIState orchestrator")
    state.orchestrator = create_orchestrator(config)
    state.identity.max_images = config.max_identity_images
    return state

"""
Operator message protocol.

Messages arrive from the game UI at a fixed interval and are visible for a
single tick. The pause keyword freezes the bot; any other message resumes
it. A message containing the debug keyword also sets the debug level from
the digits that follow it (``debug3``).
"""

from __future__ import annotations

import logging

from seamuse.core.session import SessionMemory

logger = logging.getLogger(__name__)


def apply_operator_message(
    message: str | None,
    session: SessionMemory,
    pause_keyword: str = "pause",
    debug_keyword: str = "debug",
) -> bool:
    """Update the pause flag and debug level from one operator message.

    Returns:
        The pause flag after the message is applied.
    """
    if message is None:
        return session.paused

    if message == pause_keyword:
        session.paused = True
        return True

    if debug_keyword in message:
        raw = message.replace(debug_keyword, "").strip()
        try:
            session.debug_level = int(raw)
        except ValueError:
            logger.warning("Ignoring unparsable debug level %r", raw)
    session.paused = False
    return False

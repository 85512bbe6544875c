"""Quiz error taxonomy."""

from __future__ import annotations


class StoreUnavailable(Exception):
    """Fetching the plan, a flashcard detail or the answer pool failed.

    The session that hit it cannot proceed and has to be restarted.
    """

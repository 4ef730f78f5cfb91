from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import exceptions

from table_browser.core.session import TableSession

if TYPE_CHECKING:
    from table_browser.ui.context import AppContext

logger = logging.getLogger(__name__)


def require_session(ctx: AppContext, session_id: Optional[str]) -> TableSession:
    session = ctx.session(session_id)
    if session is None:
        raise exceptions.PreventUpdate
    return session


def bump(version: Optional[int]) -> int:
    """Next value of a version store; any change re-triggers its renderers."""
    return (version or 0) + 1


def triggered_value() -> Any:
    """
    Value of the property that fired the callback.

    Pattern-matched buttons are re-created on every render with n_clicks=0,
    so a falsy value means "inserted", not "clicked".
    """
    triggered = dash.callback_context.triggered
    if not triggered:
        return None
    return triggered[0].get("value")

"""Subscription Composer — the listener set implied by the current State.

Invariants:
    - Always: keepalive, compile-finished, and the active pane's listeners
    - Exactly one of OnDetached (connected) / OnAttached (disconnected)
    - Pure: the runtime diffs consecutive results to start/stop listeners
"""

from codepad.core.action_pane import pane_subscriptions
from codepad.core.editor_state import State
from codepad.core.listeners import (
    ForPaneListener, Listener, OnAttached, OnCompileFinished, OnDetached,
    OnKeepAlive,
)


def subscriptions(state: State) -> frozenset[Listener]:
    token = state.token
    connectivity = OnDetached(token) if state.connected else OnAttached(token)
    pane = {ForPaneListener(l) for l in pane_subscriptions(state.action_pane)}
    return frozenset({
        OnKeepAlive(token),
        OnCompileFinished(token),
        connectivity,
        *pane,
    })

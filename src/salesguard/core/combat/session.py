from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionUpdate:
    effective: str | None
    changed: bool


def reconcile(current: str | None, reply_conversation_id: str | None) -> SessionUpdate:
    """Adopt the provider's conversation id when it issues a new one.

    The id is owned by the client and passed in on every turn; nothing is kept
    server side.
    """
    if reply_conversation_id and reply_conversation_id != current:
        return SessionUpdate(effective=reply_conversation_id, changed=True)
    return SessionUpdate(effective=current, changed=False)

"""Prepend the reviewer instructions to a conversation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from copilot_relay._prompt import PERSONA_PROMPT, PERSONALIZATION_PROMPT
from copilot_relay.errors import MalformedInputError
from copilot_relay.models import Message

if TYPE_CHECKING:
    from collections.abc import Sequence

    from copilot_relay.models import Identity


def augment_conversation(
    identity: Identity,
    messages: Sequence[Message],
    *,
    persona_prompt: str = PERSONA_PROMPT,
) -> list[Message]:
    """Return a new conversation with the system turns prepended.

    The result is ``[personalization, persona, *messages]``. The personalization
    turn must come first so the model reads it before the persona.

    Raises:
        MalformedInputError: If ``messages`` is empty.

    """
    if not messages:
        msg = "Conversation must contain at least one message"
        raise MalformedInputError(msg)

    augmented = list(messages)
    augmented.insert(0, Message(role="system", content=persona_prompt))
    augmented.insert(
        0,
        Message(role="system", content=PERSONALIZATION_PROMPT.format(login=identity.login)),
    )
    return augmented

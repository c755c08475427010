"""Visual markers (emoji) for check states."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .models import CheckState

UNKNOWN_MARKER = ":interrobang:"

MarkerFn = Callable[[CheckState], str]

_EMOJI_BY_STATE: dict[CheckState, str] = {
    CheckState.NONE: "",
    CheckState.SUCCESS: ":white_check_mark:",
    CheckState.RUNNING: ":hourglass:",
    CheckState.WARNING: ":warning:",
    CheckState.FAILURE: ":red_circle:",
    CheckState.ERROR: ":heavy_exclamation_mark:",
    CheckState.PANIC: ":skull:",
}


@runtime_checkable
class ToEmoji(Protocol):
    """Anything that can turn a check state into a marker string."""

    def to_emoji(self, state: CheckState) -> str: ...


def emoji_for_state(state: CheckState) -> str:
    """Return the GitHub/GitLab emoji shortcode for a state."""
    return _EMOJI_BY_STATE.get(state, UNKNOWN_MARKER)


class EmojiMarker:
    """Default marker collaborator using emoji shortcodes."""

    def to_emoji(self, state: CheckState) -> str:
        return emoji_for_state(state)


def as_marker_fn(marker: ToEmoji | MarkerFn) -> MarkerFn:
    """Adapt a ``ToEmoji`` object or a plain callable to a marker function."""
    if isinstance(marker, ToEmoji):
        return marker.to_emoji
    if callable(marker):
        return marker
    msg = f"Marker must be callable or implement to_emoji(), got {type(marker).__name__}"
    raise TypeError(msg)

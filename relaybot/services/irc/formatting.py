"""Render GitHub events as colored IRC lines."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from relaybot.services.github.schemas import Event

COLOR_CODE = "\x03"

MERGED_LABEL = "merged"


class MIRCColor(IntEnum):
    """Standard mIRC foreground colors."""

    WHITE = 0
    BLACK = 1
    BLUE = 2
    GREEN = 3
    RED = 4
    BROWN = 5
    PURPLE = 6
    ORANGE = 7
    YELLOW = 8
    LIGHT_GREEN = 9
    CYAN = 10
    LIGHT_CYAN = 11
    LIGHT_BLUE = 12
    PINK = 13
    GREY = 14
    LIGHT_GREY = 15


MERGED_COLOR = MIRCColor.PURPLE


@dataclass(frozen=True)
class ColorTheme:
    """Colors applied to the repository name and action labels."""

    actions: dict[str, MIRCColor] = field(default_factory=dict)
    repository: Optional[MIRCColor] = None

    def action_color(self, action: str) -> Optional[MIRCColor]:
        return self.actions.get(action)


DEFAULT_THEME = ColorTheme(
    actions={
        "opened": MIRCColor.GREEN,
        "reopened": MIRCColor.LIGHT_GREEN,
        "closed": MIRCColor.RED,
        "created": MIRCColor.CYAN,
    },
    repository=MIRCColor.LIGHT_BLUE,
)

PLAIN_THEME = ColorTheme()


def colorize(text: str, color: Optional[MIRCColor]) -> str:
    """Wrap text in an mIRC color code; no color leaves it untouched."""
    if color is None:
        return text
    return f"{COLOR_CODE}{int(color):02d}{text}{COLOR_CODE}"


def _single_line(text: str) -> str:
    return " ".join(text.splitlines()).strip()


def format_event(event: Event, theme: ColorTheme, url: Optional[str] = None) -> str:
    """Build the notification line for an event.

    ``[<repo>] <Kind> #<number> <action> by <actor>: <title>. <url>``

    Merged pull requests are labelled ``merged`` in a fixed color instead of
    their raw ``closed`` action. ``url`` replaces the subject URL, typically
    with a shortened link.
    """
    subject = event.subject

    if subject.merged:
        action = colorize(MERGED_LABEL, MERGED_COLOR)
    else:
        action = colorize(event.action, theme.action_color(event.action))

    repo = colorize(event.repository.name, theme.repository)

    head = f"[{repo}] {event.kind}"
    if subject.number is not None:
        head += f" #{subject.number}"

    link = url or subject.url
    return f"{head} {action} by {event.sender.login}: {_single_line(subject.title)}. {link}"

"""Minimal IRC line codec (RFC 1459 message framing)."""

from dataclasses import dataclass, field
from typing import Optional

RPL_WELCOME = "001"
ERR_NICKNAMEINUSE = "433"

ENCODING = "utf-8"


@dataclass(frozen=True)
class Message:
    """A parsed IRC protocol message."""

    command: str
    params: list[str] = field(default_factory=list)
    prefix: Optional[str] = None

    @property
    def nick(self) -> Optional[str]:
        """Nickname part of the prefix, if any."""
        if not self.prefix:
            return None
        return self.prefix.split("!", 1)[0]


def parse_message(line: str) -> Optional[Message]:
    """Parse one IRC line. Returns None for blank lines."""
    line = line.rstrip("\r\n")

    # IRCv3 message tags are not used by the relay
    if line.startswith("@"):
        _, _, line = line.partition(" ")

    if not line.strip():
        return None

    prefix = None
    if line.startswith(":"):
        prefix, _, line = line[1:].partition(" ")

    trailing = None
    if " :" in line:
        line, trailing = line.split(" :", 1)
    elif line.startswith(":"):
        line, trailing = "", line[1:]

    parts = line.split()
    if not parts:
        return None

    params = parts[1:]
    if trailing is not None:
        params.append(trailing)

    return Message(command=parts[0].upper(), params=params, prefix=prefix)


def _clean(value: str) -> str:
    return value.replace("\r", " ").replace("\n", " ")


def format_line(command: str, *params: str) -> bytes:
    """Serialize a command and its parameters into a CRLF-terminated line."""
    args = [_clean(p) for p in params]
    if args:
        last = args[-1]
        if not last or " " in last or last.startswith(":"):
            args[-1] = ":" + last
    return (" ".join([command, *args]) + "\r\n").encode(ENCODING)


def decode_line(raw: bytes) -> str:
    return raw.decode(ENCODING, errors="replace")

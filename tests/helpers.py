"""Payload builders and IRC fakes shared by the tests."""

import asyncio
import json

SECRET = "s3cret"


def repository_payload(name: str = "foo", description: str | None = None) -> dict:
    return {
        "name": name,
        "full_name": f"ury/{name}",
        "html_url": f"https://github.com/ury/{name}",
        "description": description,
        "private": False,
    }


def pull_request_payload(
    action: str = "opened",
    number: int = 7,
    title: str = "Fix bug",
    merged: bool = False,
    repo: str = "foo",
    login: str = "bob",
) -> dict:
    return {
        "action": action,
        "number": number,
        "pull_request": {
            "number": number,
            "title": title,
            "html_url": f"https://github.com/ury/{repo}/pull/{number}",
            "merged": merged,
            "state": "closed" if action == "closed" else "open",
        },
        "repository": repository_payload(repo),
        "sender": {"login": login, "id": 1},
    }


def issues_payload(
    action: str = "opened",
    number: int = 3,
    title: str = "Broken build",
    repo: str = "foo",
    login: str = "alice",
) -> dict:
    return {
        "action": action,
        "issue": {
            "number": number,
            "title": title,
            "html_url": f"https://github.com/ury/{repo}/issues/{number}",
        },
        "repository": repository_payload(repo),
        "sender": {"login": login},
    }


def repository_event_payload(
    action: str = "created",
    repo: str = "newrepo",
    description: str | None = "A new home",
    login: str = "carol",
) -> dict:
    return {
        "action": action,
        "repository": repository_payload(repo, description),
        "sender": {"login": login},
    }


def encode(payload: dict) -> bytes:
    return json.dumps(payload).encode()


class FakeWriter:
    """Records every line written to an IRC connection."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.closed = False

    def write(self, data: bytes) -> None:
        self.lines.append(data.decode().rstrip("\r\n"))

    async def drain(self) -> None:
        return None

    def is_closing(self) -> bool:
        return self.closed

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll a condition on the running loop."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met in time")
        await asyncio.sleep(0.01)

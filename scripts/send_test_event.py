#!/usr/bin/env python3
"""Send a signed sample webhook to a locally running relay."""
import json
import os
import sys

import httpx
from dotenv import load_dotenv

load_dotenv()

from relaybot.core.security import sign_payload

SAMPLE_PULL_REQUEST = {
    "action": "opened",
    "number": 1,
    "pull_request": {
        "number": 1,
        "title": "Test pull request",
        "html_url": "https://github.com/example/relaybot/pull/1",
        "merged": False,
    },
    "repository": {
        "name": "relaybot",
        "full_name": "example/relaybot",
        "html_url": "https://github.com/example/relaybot",
    },
    "sender": {"login": "octocat"},
}


def main():
    secret = os.getenv("RELAYBOT_GITHUB_WEBHOOK_SECRET")
    if not secret:
        sys.exit("RELAYBOT_GITHUB_WEBHOOK_SECRET is not set")

    port = os.getenv("RELAYBOT_PORT", "1337")
    path = os.getenv("RELAYBOT_WEBHOOK_PATH", "/")
    url = f"http://127.0.0.1:{port}{path}"

    body = json.dumps(SAMPLE_PULL_REQUEST).encode()
    response = httpx.post(
        url,
        content=body,
        headers={
            "Content-Type": "application/json",
            "X-GitHub-Event": "pull_request",
            "X-Hub-Signature": sign_payload(body, secret.encode()),
        },
    )
    print(f"{response.status_code}: {response.text}")


if __name__ == "__main__":
    main()

"""Pydantic schemas for GitHub webhook events.

Only the fields the relay renders are declared; everything else in the
payload is ignored.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict


class WebhookModel(BaseModel):
    """Immutable base for webhook payload parts."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Actor(WebhookModel):
    """User who triggered the event."""

    login: str


class Repository(WebhookModel):
    """Repository the event belongs to."""

    name: str
    full_name: str = ""
    html_url: str
    description: Optional[str] = None


class PullRequest(WebhookModel):
    number: int
    title: str
    html_url: str
    merged: bool = False


class Issue(WebhookModel):
    number: int
    title: str
    html_url: str


@dataclass(frozen=True)
class Subject:
    """The thing an event is about, flattened for formatting."""

    number: Optional[int]
    title: str
    url: str
    merged: bool = False


class WebhookEvent(WebhookModel):
    """Fields shared by every relayed event."""

    kind: ClassVar[str]
    relayed_actions: ClassVar[frozenset[str]]

    action: str
    sender: Actor
    repository: Repository

    @property
    def is_relayed(self) -> bool:
        """Whether this action produces a notification."""
        return self.action in self.relayed_actions

    @property
    def subject(self) -> Subject:
        raise NotImplementedError


class PullRequestEvent(WebhookEvent):
    """``pull_request`` webhook."""

    kind: ClassVar[str] = "Pull request"
    relayed_actions: ClassVar[frozenset[str]] = frozenset({"opened", "closed", "reopened"})

    pull_request: PullRequest

    @property
    def subject(self) -> Subject:
        pr = self.pull_request
        return Subject(number=pr.number, title=pr.title, url=pr.html_url, merged=pr.merged)


class IssuesEvent(WebhookEvent):
    """``issues`` webhook."""

    kind: ClassVar[str] = "Issue"
    relayed_actions: ClassVar[frozenset[str]] = frozenset({"opened", "closed", "reopened"})

    issue: Issue

    @property
    def subject(self) -> Subject:
        return Subject(number=self.issue.number, title=self.issue.title, url=self.issue.html_url)


class RepositoryEvent(WebhookEvent):
    """``repository`` webhook."""

    kind: ClassVar[str] = "Repository"
    relayed_actions: ClassVar[frozenset[str]] = frozenset({"created"})

    @property
    def subject(self) -> Subject:
        repo = self.repository
        title = repo.description or repo.full_name or repo.name
        return Subject(number=None, title=title, url=repo.html_url)


Event = Union[PullRequestEvent, IssuesEvent, RepositoryEvent]


class WebhookResponse(BaseModel):
    """Response schema for accepted webhook deliveries."""

    message: str
    event: str | None = None

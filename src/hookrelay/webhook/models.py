"""GitHub webhook payload models for push and pull request events.

Only the fields the relay renders are declared. Every model ignores unknown
keys so additions to GitHub's payload schema never break parsing, and every
model is frozen: a parsed event is an immutable snapshot of one delivery.

GitHub Webhook Payload Structure (push event, abridged):
{
  "ref": "refs/heads/main",
  "pusher": {"name": "alice"},
  "repository": {"name": "widgets", "full_name": "acme/widgets"},
  "commits": [
    {
      "id": "<40 hex chars>",
      "message": "Fix parser\\n\\nLonger description",
      "timestamp": "2024-05-01T12:00:00Z",
      "url": "https://github.com/acme/widgets/commit/<sha>",
      "author": {"name": "Alice", "username": "alice"}
    }
  ]
}
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GitHubModel(BaseModel):
    """Base for payload models: immutable, unknown fields ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Repository(GitHubModel):
    """Repository reference carried by every event.

    Attributes:
        name: Repository name without the owner.
        full_name: Fully qualified name in format "{owner}/{name}".
    """

    name: str
    full_name: str


class CommitAuthor(GitHubModel):
    name: str
    email: Optional[str] = None
    username: Optional[str] = None


class PushCommit(GitHubModel):
    """A single element of a push event's ``commits`` list."""

    id: str
    message: str = ""
    timestamp: Optional[str] = None
    url: str = ""
    author: CommitAuthor


class Pusher(GitHubModel):
    name: str
    email: Optional[str] = None


class CommitRecord(GitHubModel):
    """A pushed commit prepared for display.

    Attributes:
        id: Full commit hash.
        url: Link to the commit on GitHub.
        author_name: Author display name.
        author_username: GitHub handle of the author, when GitHub resolved one.
        message: Full commit message.
        timestamp: ISO-8601 commit timestamp as sent by GitHub.
        branch: Branch the commit was pushed to.
    """

    id: str
    url: str
    author_name: str
    author_username: Optional[str] = None
    message: str
    timestamp: Optional[str] = None
    branch: str

    @classmethod
    def from_commit(cls, commit: PushCommit, branch: str) -> "CommitRecord":
        return cls(
            id=commit.id,
            url=commit.url,
            author_name=commit.author.name,
            author_username=commit.author.username,
            message=commit.message,
            timestamp=commit.timestamp,
            branch=branch,
        )

    @property
    def short_id(self) -> str:
        """The abbreviated hash, first 7 characters."""
        return self.id[:7]

    @property
    def title(self) -> str:
        """The first line of the commit message."""
        return self.message.split("\n", 1)[0]


class PushEvent(GitHubModel):
    """Parsed GitHub push webhook event.

    A push that deletes a branch, or that carries no commits for any other
    reason, parses with an empty ``commits`` list.
    """

    ref: str
    pusher: Pusher
    repository: Repository
    commits: List[PushCommit] = Field(default_factory=list)

    @field_validator("commits", mode="before")
    @classmethod
    def null_commits_to_empty(cls, v):
        return [] if v is None else v

    @property
    def branch(self) -> str:
        """Branch name, the last segment of the ref path."""
        return self.ref.rsplit("/", 1)[-1]

    def commit_records(self) -> List[CommitRecord]:
        """Display records for every pushed commit, in payload order."""
        return [CommitRecord.from_commit(commit, self.branch) for commit in self.commits]


class GitHubUser(GitHubModel):
    login: str
    avatar_url: Optional[str] = None


class BranchRef(GitHubModel):
    """Head or base of a pull request.

    Attributes:
        label: Branch label in format "{owner}:{branch}".
        ref: Bare branch name.
    """

    label: str
    ref: Optional[str] = None


class PullRequest(GitHubModel):
    number: int
    title: str
    body: Optional[str] = None
    merged: bool = False
    html_url: str
    updated_at: Optional[str] = None
    user: GitHubUser
    head: BranchRef
    base: BranchRef

    @field_validator("body", mode="before")
    @classmethod
    def blank_body_to_none(cls, v):
        """GitHub sends null or "" for an empty description; both mean absent."""
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("merged", mode="before")
    @classmethod
    def null_merged_to_false(cls, v):
        return False if v is None else v


class PullRequestEvent(GitHubModel):
    """Parsed GitHub pull_request webhook event.

    Attributes:
        action: The activity type (opened, closed, synchronize, ...).
        pull_request: Snapshot of the pull request.
        repository: Repository the pull request targets.
    """

    action: str
    pull_request: PullRequest
    repository: Repository

    @property
    def is_merged(self) -> bool:
        return self.pull_request.merged

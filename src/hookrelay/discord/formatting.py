"""Discord message formatting for GitHub events.

Pure functions turning parsed push and pull request events into Discord
messages. Nothing here performs I/O; the only non-deterministic input, the
fallback timestamp for pull requests, can be injected by the caller.
"""

from datetime import datetime, timezone
from typing import Optional

from src.hookrelay.config import DISCORD_MAX_EMBEDS
from src.hookrelay.discord.models import (
    ChatMessage,
    Embed,
    EmbedAuthor,
    EmbedField,
    EmbedFooter,
)
from src.hookrelay.webhook.models import CommitRecord, PullRequestEvent, PushEvent, Repository


COMMIT_COLOR = 0x7289DA
PR_OPEN_COLOR = 0x2CBE4E
PR_MERGED_COLOR = 0x6F42C1
PR_CLOSED_COLOR = 0xD73A49

PR_BODY_PREVIEW_LENGTH = 200
ELLIPSIS = "..."

# Avatar URLs are built from the username by convention, they are not
# looked up, so the image may not exist for renamed or deleted accounts.
GITHUB_AVATAR_URL = "https://github.com/{username}.png"


def format_commit_embed(commit: CommitRecord, repository: Repository) -> Embed:
    """Render one pushed commit as an embed.

    Args:
        commit: The commit to render.
        repository: Repository the commit was pushed to.

    Returns:
        An embed linking the abbreviated hash to the commit, followed by
        the first line of the commit message.
    """
    icon_url = None
    if commit.author_username is not None:
        icon_url = GITHUB_AVATAR_URL.format(username=commit.author_username)

    return Embed(
        color=COMMIT_COLOR,
        author=EmbedAuthor(name=commit.author_name, icon_url=icon_url),
        title=f"[{repository.name}:{commit.branch or 'unknown'}]",
        description=f"[`{commit.short_id}`]({commit.url}) {commit.title}",
        timestamp=commit.timestamp,
        footer=EmbedFooter(text=repository.full_name),
    )


def format_push_message(
    event: PushEvent,
    max_embeds: int = DISCORD_MAX_EMBEDS,
) -> Optional[ChatMessage]:
    """Format a push event as a single Discord message.

    Only the first ``max_embeds`` commits get an embed, in the order GitHub
    sent them; the summary line still reports the full commit count.

    Args:
        event: The parsed push event.
        max_embeds: Upper bound on commit embeds.

    Returns:
        The message, or None when the push carries no commits.
    """
    if not event.commits:
        return None

    records = event.commit_records()
    count = len(records)
    plural = "s" if count > 1 else ""
    content = (
        f"**{event.pusher.name}** pushed {count} commit{plural} to "
        f"**{event.repository.full_name}:{event.branch}**"
    )

    embeds = [
        format_commit_embed(commit, event.repository)
        for commit in records[:max_embeds]
    ]
    return ChatMessage(content=content, embeds=embeds)


def pull_request_color(action: str, merged: bool) -> int:
    """Pick the embed color for a pull request action.

    Green for any activity on an open pull request, purple once merged,
    red when closed without merging.
    """
    if action == "closed":
        return PR_MERGED_COLOR if merged else PR_CLOSED_COLOR
    return PR_OPEN_COLOR


def truncate_body(body: str, limit: int = PR_BODY_PREVIEW_LENGTH) -> str:
    """Cut a pull request body to ``limit`` characters, marking the cut."""
    if len(body) > limit:
        return body[:limit] + ELLIPSIS
    return body


def format_pull_request_embed(
    event: PullRequestEvent,
    now: Optional[datetime] = None,
) -> Embed:
    """Render a pull request event as an embed.

    Args:
        event: The parsed pull request event.
        now: Fallback timestamp when GitHub omits ``updated_at``.
             Defaults to the current UTC time.

    Returns:
        The pull request embed.
    """
    pr = event.pull_request

    description = f"**Action:** {event.action}\n[View Pull Request]({pr.html_url})"
    if pr.body is not None:
        description += f"\n\n{truncate_body(pr.body)}"

    timestamp = pr.updated_at
    if timestamp is None:
        timestamp = (now or datetime.now(timezone.utc)).isoformat()

    return Embed(
        color=pull_request_color(event.action, pr.merged),
        author=EmbedAuthor(name=pr.user.login, icon_url=pr.user.avatar_url),
        title=f"[PR: {event.repository.name}] {pr.title} (#{pr.number})",
        description=description,
        fields=[
            EmbedField(name="Source (Fork)", value=pr.head.label, inline=True),
            EmbedField(name="Target", value=pr.base.label, inline=True),
        ],
        timestamp=timestamp,
        footer=EmbedFooter(text=event.repository.full_name),
    )


def format_pull_request_message(
    event: PullRequestEvent,
    now: Optional[datetime] = None,
) -> ChatMessage:
    """Format a pull request event as a single-embed Discord message."""
    return ChatMessage(
        content=f"🔄 Pull Request Update in **{event.repository.full_name}**",
        embeds=[format_pull_request_embed(event, now=now)],
    )

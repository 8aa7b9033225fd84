"""Property-based tests for push message formatting.

Push formatting is deterministic and keeps commit order: formatting the
same event twice yields equal messages, and embeds follow the payload's
commit order truncated to the embed limit.

Testing Configuration:
- Library: Hypothesis (Python)
- Minimum iterations: 100 per property test
"""

from hypothesis import given, settings, strategies as st

from src.hookrelay.discord.formatting import format_push_message, truncate_body
from src.hookrelay.webhook.models import PushEvent
from tests.payloads import make_commit, make_push_payload


commit_messages = st.text(
    alphabet=st.characters(exclude_categories=("Cs",)), min_size=1, max_size=200
)


@st.composite
def push_event(draw: st.DrawFn) -> PushEvent:
    """Generate a push event with 1-25 commits and arbitrary messages."""
    messages = draw(st.lists(commit_messages, min_size=1, max_size=25))
    usernames = draw(
        st.lists(
            st.one_of(st.none(), st.from_regex(r"[a-z][a-z0-9-]{0,15}", fullmatch=True)),
            min_size=len(messages),
            max_size=len(messages),
        )
    )
    branch = draw(st.from_regex(r"[a-z][a-z0-9_.-]{0,20}", fullmatch=True))
    commits = [
        make_commit(index=i, message=message, username=username)
        for i, (message, username) in enumerate(zip(messages, usernames))
    ]
    return PushEvent.model_validate(
        make_push_payload(commits=commits, ref=f"refs/heads/{branch}")
    )


class TestPushFormattingDeterminism:
    @given(event=push_event())
    @settings(max_examples=100)
    def test_formatting_is_idempotent(self, event: PushEvent) -> None:
        assert format_push_message(event) == format_push_message(event)
        assert format_push_message(event).to_payload() == format_push_message(
            event
        ).to_payload()


class TestPushFormattingOrder:
    @given(event=push_event(), limit=st.integers(min_value=1, max_value=10))
    @settings(max_examples=100)
    def test_embeds_follow_commit_order(self, event: PushEvent, limit: int) -> None:
        message = format_push_message(event, max_embeds=limit)

        expected = [c.id[:7] for c in event.commits[:limit]]
        assert [e.description.split("`")[1] for e in message.embeds] == expected

    @given(event=push_event())
    @settings(max_examples=100)
    def test_summary_counts_every_commit(self, event: PushEvent) -> None:
        message = format_push_message(event)

        assert f"pushed {len(event.commits)} commit" in message.content
        assert len(message.embeds) == min(len(event.commits), 10)

    @given(event=push_event())
    @settings(max_examples=100)
    def test_descriptions_use_first_message_line(self, event: PushEvent) -> None:
        message = format_push_message(event)

        for embed, commit in zip(message.embeds, event.commits):
            first_line = commit.message.split("\n", 1)[0]
            assert embed.description.endswith(f") {first_line}")
            assert "\n" not in embed.description


class TestBodyTruncationProperties:
    @given(body=st.text(max_size=500))
    @settings(max_examples=100)
    def test_truncated_body_is_bounded_prefix(self, body: str) -> None:
        result = truncate_body(body)

        if len(body) > 200:
            assert result == body[:200] + "..."
        else:
            assert result == body

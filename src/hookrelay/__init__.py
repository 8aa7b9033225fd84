"""GitHub to Discord webhook relay.

This package receives GitHub webhook notifications, authenticates them with
the shared webhook secret, and relays push and pull request events to a
Discord channel webhook as rich embed messages:
- HMAC-SHA256 signature verification over the raw request body
- Event classification (push, pull_request, everything else ignored)
- Pure formatting of events into Discord messages
- Single-attempt delivery to the Discord webhook
"""

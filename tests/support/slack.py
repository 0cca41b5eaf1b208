"""Slack alerting support for tests."""

from __future__ import annotations

__all__ = ["SLACK_WEBHOOK"]

SLACK_WEBHOOK = "https://slack.example.com/webhook"
"""Webhook URL intercepted by the ``mock_slack`` fixture."""

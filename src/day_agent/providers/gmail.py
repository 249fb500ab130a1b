"""Gmail as an EmailProvider."""

from __future__ import annotations

import asyncio
import logging

from day_agent.briefing.models import EmailDaySummary, ImportantEmail
from day_agent.exceptions import ProviderError
from day_agent.providers.base import EmailProvider

logger = logging.getLogger(__name__)

INBOX = "INBOX"


class GmailProvider(EmailProvider):
    """Unread inbox count and the newest unread messages from the Gmail API.

    The credentials are bound to one mailbox, so ``account_id`` is only used
    for logging.

    Args:
        credentials: A google.oauth2.credentials.Credentials object.
        max_important: How many unread messages to report individually.
        scan_limit: How many unread message ids to list before picking.
    """

    def __init__(self, credentials, max_important: int = 5, scan_limit: int = 20):
        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "google-api-python-client is required for GmailProvider. "
                "Install with: pip install day-agent[google]"
            )
        self._service = build("gmail", "v1", credentials=credentials, cache_discovery=False)
        self.max_important = max_important
        self.scan_limit = scan_limit

    def unread_count(self) -> int:
        try:
            label = self._service.users().labels().get(userId="me", id=INBOX).execute()
        except Exception as e:
            raise ProviderError(f"Failed to read inbox label: {e}") from e
        return int(label.get("messagesUnread", 0))

    def unread_messages(self) -> list[ImportantEmail]:
        """Newest unread inbox messages, metadata only."""
        try:
            listing = (
                self._service.users()
                .messages()
                .list(userId="me", labelIds=[INBOX, "UNREAD"], maxResults=self.scan_limit)
                .execute()
            )
            emails = []
            for ref in listing.get("messages", [])[: self.max_important]:
                message = (
                    self._service.users()
                    .messages()
                    .get(
                        userId="me",
                        id=ref["id"],
                        format="metadata",
                        metadataHeaders=["Subject", "From", "Date"],
                    )
                    .execute()
                )
                headers = {
                    h["name"].lower(): h["value"]
                    for h in message.get("payload", {}).get("headers", [])
                }
                emails.append(
                    ImportantEmail(
                        uid=message["id"],
                        folder=INBOX,
                        subject=headers.get("subject", "(No subject)"),
                        sender=headers.get("from", ""),
                        date=headers.get("date", ""),
                        is_read="UNREAD" not in message.get("labelIds", []),
                    )
                )
            return emails
        except Exception as e:
            raise ProviderError(f"Failed to list unread messages: {e}") from e

    def _summarize(self) -> EmailDaySummary:
        return EmailDaySummary(
            unread_count=self.unread_count(),
            important_emails=self.unread_messages(),
        )

    async def fetch_summary(self, account_id: str) -> EmailDaySummary:
        summary = await asyncio.to_thread(self._summarize)
        logger.debug(f"{account_id}: {summary.unread_count} unread")
        return summary

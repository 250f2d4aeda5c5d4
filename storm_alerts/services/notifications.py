"""Email delivery of region digests through the Resend HTTP API."""

from __future__ import annotations

import hashlib
import hmac
import logging
from html import escape
from typing import Any, Dict, Iterable, List
from urllib.parse import quote

import requests

from ..config import (
    EMAIL_FROM_ADDRESS,
    EMAIL_REQUEST_TIMEOUT_SECONDS,
    PUBLIC_BASE_URL,
    RESEND_API_URL,
    UNSUBSCRIBE_SECRET,
)
from ..models import HAIL, DeliveryResult, Recipient, RegionDigest
from .classifier import hail_size_label

logger = logging.getLogger(__name__)

UNSUBSCRIBE_PLACEHOLDER = "{{UNSUBSCRIBE_LINK}}"


def unsubscribe_token(email: str, secret: str = UNSUBSCRIBE_SECRET) -> str:
    """HMAC-SHA256 of *email*, hex encoded."""
    return hmac.new(secret.encode("utf-8"), email.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_unsubscribe_token(email: str, token: str, secret: str = UNSUBSCRIBE_SECRET) -> bool:
    return hmac.compare_digest(unsubscribe_token(email, secret), token or "")


def _format_number(value: float) -> str:
    return f"{value:g}"


def render_subject(region: str, category: str, digest: RegionDigest) -> str:
    if category == HAIL:
        size = _format_number(digest.max_hail_inches)
        return (
            f"New Hail Alert in {region} - Up to {size}\" "
            f"({hail_size_label(digest.max_hail_inches)}) Hail Reported"
        )
    return f"New Wind Alert in {region} - Up to {_format_number(digest.max_wind_mph)}mph Winds Reported"


def render_html(region: str, category: str, digest: RegionDigest) -> str:
    """Render the digest body; the unsubscribe link is left as a placeholder."""
    if category == HAIL:
        title = f"New Hail Alert for {escape(region)}"
        peak = (
            f"Max Hail Size: {_format_number(digest.max_hail_inches)}&quot; "
            f"({hail_size_label(digest.max_hail_inches)})"
        )
    else:
        title = f"New Wind Alert for {escape(region)}"
        peak = f"Max Wind Speed: {_format_number(digest.max_wind_mph)} mph"

    items: List[str] = []
    recommendations: List[str] = []
    for storm in digest.member_storms:
        window = ""
        if storm.onset_time and storm.expires_time:
            window = (
                f" (Effective: {storm.onset_time:%b %d %I:%M %p %Z}"
                f" - Expires: {storm.expires_time:%b %d %I:%M %p %Z})"
            )
        items.append(
            f"<li><strong>{escape(storm.event_type)}:</strong> "
            f"{escape(storm.headline or storm.area_description)}{escape(window)}</li>"
        )
        for rec in storm.recommendations:
            if rec not in recommendations:
                recommendations.append(rec)

    return "\n".join(
        [
            "<html><body style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">",
            f"<h1>{title}</h1>",
            f"<h2>{peak}</h2>",
            f"<p><strong>Affected Areas:</strong> {escape(', '.join(digest.affected_areas))}</p>",
            f"<p><strong>Estimated Market Opportunity:</strong> ${digest.total_market_value:,}</p>",
            "<h3>Alert Details:</h3>",
            "<ul>",
            *items,
            "</ul>",
            "<h3>Recommended Actions:</h3>",
            "<ul>",
            *(f"<li>{escape(rec)}</li>" for rec in recommendations),
            "</ul>",
            f"<p><a href=\"{UNSUBSCRIBE_PLACEHOLDER}\">Unsubscribe</a></p>",
            "</body></html>",
        ]
    )


class ResendEmailGateway:
    """Sends one personalised email per recipient; failures are isolated."""

    def __init__(
        self,
        session: requests.Session,
        *,
        api_url: str = RESEND_API_URL,
        from_address: str = EMAIL_FROM_ADDRESS,
        unsubscribe_secret: str = UNSUBSCRIBE_SECRET,
        base_url: str = PUBLIC_BASE_URL,
    ):
        self.session = session
        self.api_url = api_url
        self.from_address = from_address
        self.unsubscribe_secret = unsubscribe_secret
        self.base_url = base_url.rstrip("/")

    def unsubscribe_link(self, email: str) -> str:
        token = unsubscribe_token(email, self.unsubscribe_secret)
        return f"{self.base_url}/api/unsubscribe?token={token}&email={quote(email)}"

    def _send(self, to: str, subject: str, html: str) -> None:
        payload: Dict[str, Any] = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        response = self.session.post(self.api_url, json=payload, timeout=EMAIL_REQUEST_TIMEOUT_SECONDS)
        if response.status_code >= 400:
            raise RuntimeError(f"Resend API error: {response.status_code} - {response.text[:200]}")

    def send_category_digest(
        self,
        region: str,
        category: str,
        digest: RegionDigest,
        recipients: Iterable[Recipient],
    ) -> DeliveryResult:
        """Email *digest* to every recipient and report per-recipient outcomes."""
        subject = render_subject(region, category, digest)
        html = render_html(region, category, digest)
        result = DeliveryResult()

        for recipient in recipients:
            personalised = html.replace(UNSUBSCRIBE_PLACEHOLDER, escape(self.unsubscribe_link(recipient.email)))
            try:
                self._send(recipient.email, subject, personalised)
            except (requests.RequestException, RuntimeError) as exc:
                logger.error("Failed to send %s alert to %s: %s", category, recipient.email, exc)
                result.error_count += 1
                result.failed.append(recipient.email)
                continue
            result.success_count += 1

        logger.info(
            "%s digest for %s: %d sent, %d failed",
            category.capitalize(), region, result.success_count, result.error_count,
        )
        return result

__all__ = [
    "ResendEmailGateway",
    "render_subject",
    "render_html",
    "unsubscribe_token",
    "verify_unsubscribe_token",
]

"""
Google Calendar adapter - reads today's events with a service account.

The access token is fetched lazily and cached on the client until it expires.

Usage:
    client = GoogleCalendarClient(secrets.google_credentials)
    events = client.today_events("primary")
    client.close()
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timedelta
from typing import Any
from urllib.parse import quote

import httpx
from google.auth import crypt
from google.auth import jwt as google_jwt

from samwise.core.exceptions import AdapterError, AuthenticationError
from samwise.platform.calendar import CalendarEvent, CalendarReader, RSVPStatus

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
CALENDAR_API_BASE = "https://www.googleapis.com/calendar/v3"
CALENDAR_READ_SCOPE = "https://www.googleapis.com/auth/calendar.readonly"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
HTTP_TIMEOUT = 30.0

# Checked in order when an event has no structured conference data
MEETING_URL_PREFIXES = (
    "https://zoom.us/",
    "https://teams.microsoft.com/",
    "https://meet.google.com/",
)

_RSVP_VALUES = {status.value: status for status in RSVPStatus}


def parse_service_account(credentials_json: str) -> dict[str, str]:
    """
    Parse a service account JSON key.

    Raises:
        AuthenticationError: If the key is not JSON or lacks client_email/private_key
    """
    try:
        key = json.loads(credentials_json)
    except json.JSONDecodeError as e:
        raise AuthenticationError(
            f"parsing service account credentials: {e}", service="google"
        ) from e

    if not isinstance(key, dict) or not key.get("client_email") or not key.get("private_key"):
        raise AuthenticationError(
            "service account credentials missing client_email or private_key",
            service="google",
        )

    return {
        "client_email": key["client_email"],
        "private_key": key["private_key"],
        "token_uri": key.get("token_uri") or GOOGLE_TOKEN_URL,
    }


def _parse_datetime(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable event start: %s", value)
        return None


def extract_meeting_link_from_description(description: str) -> str:
    """Find the first Zoom, Teams or Meet URL in free text."""
    for prefix in MEETING_URL_PREFIXES:
        idx = description.find(prefix)
        if idx >= 0:
            return description[idx:].split(maxsplit=1)[0]
    return ""


def extract_meeting_link(item: dict[str, Any]) -> str:
    """Prefer a video conference entry point, then hangoutLink, then the description."""
    conference = item.get("conferenceData") or {}
    for entry in conference.get("entryPoints") or []:
        if entry.get("entryPointType") == "video" and entry.get("uri"):
            return entry["uri"]

    if item.get("hangoutLink"):
        return item["hangoutLink"]

    return extract_meeting_link_from_description(item.get("description") or "")


def extract_rsvp(attendees: list[dict[str, Any]] | None) -> RSVPStatus:
    """
    The response status of the attendee marked self.

    Events with no self attendee (e.g. ones the user organizes without being
    listed) count as accepted.
    """
    for attendee in attendees or []:
        if attendee.get("self"):
            status = _RSVP_VALUES.get(attendee.get("responseStatus", ""))
            if status is not None:
                return status
    return RSVPStatus.ACCEPTED


def parse_calendar_events(items: list[dict[str, Any]]) -> list[CalendarEvent]:
    """Convert Calendar API event resources to CalendarEvents."""
    events = []
    for item in items:
        start = item.get("start") or {}
        event = CalendarEvent(
            title=item.get("summary", ""),
            meeting_link=extract_meeting_link(item),
            rsvp=extract_rsvp(item.get("attendees")),
        )
        if start.get("date"):
            event.all_day = True
        elif start.get("dateTime"):
            event.start_time = _parse_datetime(start["dateTime"])
        events.append(event)
    return events


def day_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Local midnight today and tomorrow, timezone-aware."""
    now = (now or datetime.now()).astimezone()
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


class GoogleCalendarClient(CalendarReader):
    """
    Reads events from Google Calendar using a service account.

    The calendar must be shared with the service account's client_email.
    """

    def __init__(self, credentials_json: str, http_client: httpx.Client | None = None):
        """
        Args:
            credentials_json: Service account JSON key contents

        Raises:
            AuthenticationError: If the key is malformed
        """
        self.credentials = parse_service_account(credentials_json)
        self._client = http_client
        self._access_token: str | None = None
        self._token_expiry: float = 0.0

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=HTTP_TIMEOUT)
        return self._client

    def close(self) -> None:
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def _signed_assertion(self, now: int) -> str:
        claims = {
            "iss": self.credentials["client_email"],
            "scope": CALENDAR_READ_SCOPE,
            "aud": self.credentials["token_uri"],
            "iat": now,
            "exp": now + 3600,
        }
        try:
            signer = crypt.RSASigner.from_string(self.credentials["private_key"])
        except ValueError as e:
            raise AuthenticationError(f"parsing private key: {e}", service="google") from e
        return google_jwt.encode(signer, claims).decode("utf-8")

    def ensure_token(self) -> str:
        """
        Return a valid access token, exchanging a signed JWT when the cached one expired.

        Raises:
            AuthenticationError: If signing or the token exchange fails
        """
        if self._access_token and time.time() < self._token_expiry:
            return self._access_token

        now = int(time.time())
        assertion = self._signed_assertion(now)

        try:
            response = self._get_client().post(
                self.credentials["token_uri"],
                data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            )
        except httpx.HTTPError as e:
            raise AuthenticationError(
                f"exchanging JWT for token: {e}", service="google"
            ) from e

        if response.status_code != 200:
            raise AuthenticationError(
                f"token exchange returned {response.status_code}: {response.text}",
                service="google",
            )

        try:
            body = response.json()
            token = body["access_token"]
            expires_in = int(body.get("expires_in", 0))
        except (ValueError, KeyError, TypeError) as e:
            raise AuthenticationError(
                f"parsing token response: {e}", service="google"
            ) from e

        self._access_token = token
        self._token_expiry = now + expires_in
        logger.debug("Google access token acquired, expires in %ds", expires_in)
        return token

    def today_events(self, calendar_id: str) -> list[CalendarEvent]:
        """
        Fetch today's events for a calendar.

        Raises:
            AuthenticationError: If the token cannot be obtained
            AdapterError: On transport failure or a non-200 response
        """
        token = self.ensure_token()
        start, end = day_bounds()

        url = f"{CALENDAR_API_BASE}/calendars/{quote(calendar_id, safe='')}/events"
        params = {
            "timeMin": start.isoformat(),
            "timeMax": end.isoformat(),
            "singleEvents": "true",
            "orderBy": "startTime",
        }

        try:
            response = self._get_client().get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            raise AdapterError(
                f"fetching calendar events: {e}", adapter="google-calendar"
            ) from e

        if response.status_code != 200:
            raise AdapterError(
                f"Google Calendar API error: {response.text}",
                adapter="google-calendar",
                status_code=response.status_code,
            )

        try:
            items = response.json().get("items") or []
        except ValueError as e:
            raise AdapterError(
                f"parsing calendar response: {e}", adapter="google-calendar"
            ) from e

        events = parse_calendar_events(items)
        logger.info("Fetched %d events from calendar %s", len(events), calendar_id)
        return events

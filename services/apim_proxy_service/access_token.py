"""Access token assembly from dashboard cookies.

The dashboard splits the APIM access token across two cookies: the ``SDID``
field of the JSON ``DASHBOARD_USER`` cookie holds the first part and the
``HID`` cookie holds the rest. The token sent upstream is the two parts
concatenated with no separator.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

DASHBOARD_USER = "DASHBOARD_USER="
SESSION_ID_FIELD = "SDID"
HID = "HID="


class MalformedCookieError(ValueError):
    """Raised when the DASHBOARD_USER cookie does not hold a JSON object."""


def split_cookie_header(cookie_header: str) -> list[str]:
    """Split a raw Cookie header into its ``;``-separated fragments."""
    return cookie_header.split(";")


def _session_id_from(fragment: str) -> str | None:
    user_dto = fragment.replace(DASHBOARD_USER, "")
    try:
        user = json.loads(user_dto)
    except json.JSONDecodeError as e:
        raise MalformedCookieError(f"DASHBOARD_USER cookie is not valid JSON: {e.msg}") from e

    if not isinstance(user, dict):
        raise MalformedCookieError("DASHBOARD_USER cookie is not a JSON object")

    value = user.get(SESSION_ID_FIELD)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise MalformedCookieError(f"{SESSION_ID_FIELD} field is not a scalar value")
    # Numbers and booleans keep their JSON spelling
    return json.dumps(value)


def find_session_id(fragments: Iterable[str]) -> str:
    """Return the SDID of the last DASHBOARD_USER fragment, or ``""``.

    Raises:
        MalformedCookieError: If a DASHBOARD_USER fragment is not a JSON object
    """
    session_id = ""
    for fragment in fragments:
        if DASHBOARD_USER in fragment:
            value = _session_id_from(fragment)
            if value is not None:
                session_id = value
    return session_id


def find_hid(fragments: Iterable[str]) -> str:
    """Return the trimmed value of the last HID fragment, or ``""``.

    A fragment carrying DASHBOARD_USER is never read as an HID fragment.
    """
    hid = ""
    for fragment in fragments:
        if DASHBOARD_USER not in fragment and HID in fragment:
            hid = fragment.replace(HID, "").strip()
    return hid


def extract_access_token(cookie_header: str) -> str:
    """Assemble the APIM access token from a Cookie header.

    Args:
        cookie_header: Raw value of the inbound ``Cookie`` header

    Returns:
        SDID part followed directly by the HID part; either may be empty

    Raises:
        MalformedCookieError: If the DASHBOARD_USER cookie cannot be parsed
    """
    fragments = split_cookie_header(cookie_header)
    return find_session_id(fragments) + find_hid(fragments)

"""Load the participant roster from a URL or a local file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import requests

from ..models import Participant
from .parser import RosterParseError, parse_roster

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

# Used whenever the configured roster cannot be read, so the board still
# shows a few sold entries. Entries 1 and 3 share an owner.
SAMPLE_ROSTER_CSV = """numero,nombre,telefono
1,Juan Pérez,+5691122334455
2,María López,+5691123456789
3,Juan Pérez,+5691122334455
4,Carlos Gómez,+5691187654321
5,Ana Martínez,+5691145678901
"""


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_roster_text(
    source: Union[str, Path],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    http: Optional[requests.Session] = None,
) -> str:
    """Return the raw roster text from ``source``.

    Raises
    ------
    requests.RequestException
        If an HTTP source cannot be fetched.
    OSError
        If a file source cannot be read.
    """

    if isinstance(source, str) and _is_url(source):
        client = http or requests.Session()
        response = client.get(source, timeout=timeout)
        response.raise_for_status()
        if response.encoding is None or response.encoding.lower() == "iso-8859-1":
            response.encoding = "utf-8"
        return response.text
    return Path(source).read_text(encoding="utf-8")


def load_sample_roster() -> list[Participant]:
    """Return the built-in sample roster."""
    return parse_roster(SAMPLE_ROSTER_CSV)


def load_roster(
    source: Optional[Union[str, Path]],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    http: Optional[requests.Session] = None,
) -> list[Participant]:
    """Load participants from ``source``, falling back to the sample roster.

    Parameters
    ----------
    source : Optional[Union[str, Path]]
        ``http(s)://`` URL or local CSV path. ``None`` selects the sample
        roster directly.
    timeout : float, default: 10
        HTTP timeout in seconds.
    http : Optional[requests.Session], default: None
        Session used for HTTP sources; a new one is created when omitted.

    Returns
    -------
    list[Participant]
        Parsed participants. Never raises for unreachable or malformed
        sources; those are logged and the sample roster is returned instead.
    """

    if source is None:
        logger.info("No roster source configured, using sample roster")
        return load_sample_roster()

    try:
        text = fetch_roster_text(source, timeout=timeout, http=http)
        participants = parse_roster(text)
    except (requests.RequestException, OSError, UnicodeDecodeError, RosterParseError) as exc:
        logger.warning(f"Could not load roster from {source} ({exc}); using sample roster")
        return load_sample_roster()

    logger.info(f"Loaded {len(participants)} participants from {source}")
    return participants


__all__ = [
    "DEFAULT_TIMEOUT",
    "SAMPLE_ROSTER_CSV",
    "fetch_roster_text",
    "load_roster",
    "load_sample_roster",
]

"""
Scrapes the SoundCloud web player for the public client_id that the v2 API
requires on every request.

The landing page embeds a handful of asset scripts; one of them contains a
call like `("client_id=<32 chars>")`. Parsing is kept separate from fetching so
it can be exercised on plain text.
"""

import asyncio
import logging
import re
from contextlib import aclosing
from typing import AsyncIterable, AsyncIterator, List, Optional

import aiohttp
from bs4 import BeautifulSoup

from soundcloud_cli.api.executor import DEFAULT_HEADERS
from soundcloud_cli.exceptions import CredentialNotFoundError, ScriptNotFoundError

log = logging.getLogger(__name__)

_LANDING_URL = "https://soundcloud.com/h"
_SCRIPT_URL_REGEX = re.compile(r"^https://a-v2\.sndcdn\.com/assets/.+\.js$")
_CLIENT_ID_REGEX = re.compile(r'\("client_id=(?P<client_id>[A-Za-z0-9]{32})"\)')


def extract_script_urls(page_html: str) -> List[str]:
    """Returns the asset script URLs embedded in the landing page, in page order."""
    soup = BeautifulSoup(page_html, "html.parser")
    return [
        script["src"]
        for script in soup.find_all("script", src=True)
        if _SCRIPT_URL_REGEX.match(script["src"])
    ]


def extract_client_id(script: str) -> Optional[str]:
    """Extracts the 32-character client_id from a script, if it has one."""
    match = _CLIENT_ID_REGEX.search(script)
    return match.group("client_id") if match else None


async def find_client_id(scripts: AsyncIterable[str]) -> Optional[str]:
    """
    Returns the client_id of the first script that carries one, consuming
    `scripts` only up to that point.
    """
    async for script in scripts:
        if client_id := extract_client_id(script):
            return client_id
    return None


async def _fetch_scripts(
    session: aiohttp.ClientSession, script_urls: List[str]
) -> AsyncIterator[str]:
    """Yields script bodies one at a time so scanning can stop at the first hit."""
    for script_url in script_urls:
        try:
            async with session.get(script_url) as response:
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"Skipping script {script_url}: {e}")
            continue
        yield body


async def fetch_client_id(session: Optional[aiohttp.ClientSession] = None) -> str:
    """
    Fetches the landing page and scans its asset scripts for a client_id.
    The landing page is requested exactly once, without retries.

    Raises:
        ScriptNotFoundError: The landing page embeds no asset scripts.
        CredentialNotFoundError: No script contains a client_id.
    """
    if session is None:
        timeout = aiohttp.ClientTimeout(total=45, connect=15)
        async with aiohttp.ClientSession(
            headers=DEFAULT_HEADERS, timeout=timeout
        ) as own_session:
            return await fetch_client_id(own_session)

    async with session.get(_LANDING_URL) as response:
        page_html = await response.text()

    script_urls = extract_script_urls(page_html)
    if not script_urls:
        raise ScriptNotFoundError("script not found")
    log.debug(f"Found {len(script_urls)} asset scripts on the landing page.")

    async with aclosing(_fetch_scripts(session, script_urls)) as scripts:
        client_id = await find_client_id(scripts)

    if not client_id:
        raise CredentialNotFoundError("clientid not found")
    log.debug(f"Extracted client_id: {client_id[:8]}...")
    return client_id

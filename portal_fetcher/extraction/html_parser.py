"""
Locate the JSON document embedded in an HTML data attribute.
"""

import json
from typing import Any

from bs4 import BeautifulSoup

from portal_fetcher.config import DATA_ATTRIBUTE
from portal_fetcher.utils.log import log

_BS4_PARSER = "lxml"


def extract_data_content_json(html: str | None, attribute: str = DATA_ATTRIBUTE) -> Any:
    """
    Parse *html*, take the first element in document order carrying
    *attribute* and decode that attribute's value as JSON.

    Returns the decoded document, or ``None`` when there is no HTML, no
    such element, or the value is not valid JSON.
    """
    if not html:
        log.info("[PARSE] No HTML content to parse.")
        return None

    soup = BeautifulSoup(html, _BS4_PARSER)
    element = soup.find(attrs={attribute: True})
    if element is None:
        log.info("[PARSE] No element with a %s attribute found.", attribute)
        return None

    raw = element.get(attribute)
    if isinstance(raw, list):
        raw = " ".join(raw)
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        log.error("[PARSE] Error parsing JSON from %s", attribute, exc_info=True)
        return None

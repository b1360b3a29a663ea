"""Extract ``<img>`` tags from raw HTML blocks.

Slack has no HTML block, so raw HTML is dropped except for the common case
of an embedded image::

    <img src="https://example.com/chart.png" alt="Chart">

Only top-level ``img`` elements of the fragment are recognised; an image
nested inside other markup (``<p><img ...></p>``) is not.
"""

from __future__ import annotations

from typing import Any

from lxml import html
from lxml.etree import ParserError

from slackify.converter.blocks import image


def extract_images(raw: str) -> list[dict[str, Any]]:
    """Return one image block per top-level ``<img>`` tag in *raw*.

    ``alt`` defaults to the ``src`` URL.  Tags without ``src``, unparseable
    fragments and HTML with no images all produce no blocks.
    """
    if not raw.strip():
        return []
    try:
        fragments = html.fragments_fromstring(raw)
    except (ParserError, ValueError):
        return []

    blocks: list[dict[str, Any]] = []
    for fragment in fragments:
        if not isinstance(fragment, html.HtmlElement) or fragment.tag != "img":
            continue
        url = fragment.get("src")
        if not url:
            continue
        blocks.append(image(url, fragment.get("alt") or url))
    return blocks

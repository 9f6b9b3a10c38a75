"""Document parsing — raw markup into a BeautifulSoup node tree.

Parser failures (e.g. ``bs4.FeatureNotFound`` for a backend that is not
installed) propagate unchanged; they are not decode errors.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"


def parse_document(raw: bytes | str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse *raw* markup with the given BeautifulSoup tree builder.

    Args:
        raw: Document bytes (encoding sniffed by bs4) or text.
        parser: Tree builder name: ``"html.parser"``, ``"lxml"``,
            ``"html5lib"``, ``"xml"``, ...
    """
    logger.debug("Parsing %d-byte document with %s", len(raw), parser)
    return BeautifulSoup(raw, parser)

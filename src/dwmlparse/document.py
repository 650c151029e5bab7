"""
DWML document parsing.

Turns raw DWML text into the generic tree, checks that it is a DWML
document and hands its ``<data>`` subtree to the subtree parser.
"""

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from lxml import etree

from dwmlparse import subtree
from dwmlparse.config.settings import ParserOptions
from dwmlparse.errors import InvalidDocumentError
from dwmlparse.models import ParseResult
from dwmlparse.tree import TreeNode
from dwmlparse.utils.logging import get_logger, log_context

log = get_logger(__name__)

ROOT = "dwml"
DATA = "data"

# lxml refuses str input that still carries an encoding declaration
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def parse_document(
    source: str | bytes,
    options: ParserOptions | Mapping[str, Any] | None = None,
) -> ParseResult:
    """
    Parse a DWML document into points by location key.

    Args:
        source: Raw DWML document text.
        options: Parser options; defaults apply when omitted.

    Returns:
        Parsed result of the document's first ``<data>`` element.

    Raises:
        InvalidDocumentError: If the text is not a well-formed DWML document.
    """
    root = parse_tree(source)
    return subtree.parse(get_data_subtree(root), options)


def parse_file(
    path: Path | str,
    options: ParserOptions | Mapping[str, Any] | None = None,
) -> ParseResult:
    """
    Parse a DWML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidDocumentError: If the file is not a well-formed DWML document.
    """
    path = Path(path)
    if not path.exists():
        msg = f"DWML file not found: {path}"
        raise FileNotFoundError(msg)

    with log_context(document=str(path)):
        log.debug("Reading DWML file", bytes=path.stat().st_size)
        return parse_document(path.read_bytes(), options)


def parse_tree(source: str | bytes) -> TreeNode:
    """
    Parse XML text into a TreeNode.

    Raises:
        InvalidDocumentError: If the text is not well-formed XML.
    """
    if isinstance(source, str):
        source = _XML_DECLARATION.sub("", source, count=1)
    parser = etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )
    try:
        element = etree.fromstring(source, parser=parser)
    except etree.XMLSyntaxError as e:
        msg = f"Cannot parse DWML document: {e}"
        raise InvalidDocumentError(msg) from e
    if element is None:
        msg = "Cannot find document root"
        raise InvalidDocumentError(msg)
    return TreeNode.from_element(element)


def get_data_subtree(root: TreeNode) -> TreeNode:
    """
    Validate a DWML document root and return its first ``<data>`` child.

    Raises:
        InvalidDocumentError: If the root is not a DWML root or has no data.
    """
    if root.name != ROOT:
        msg = f'Root element is supposed to be named "{ROOT}", got "{root.name}"'
        raise InvalidDocumentError(msg)
    if not root.children:
        msg = "Cannot find DWML data [ie, the children element of the dwml tree]"
        raise InvalidDocumentError(msg)

    data = root.find(DATA)
    if data is None:
        msg = f"Cannot find the <{DATA}> element of the DWML document"
        raise InvalidDocumentError(msg)
    return data

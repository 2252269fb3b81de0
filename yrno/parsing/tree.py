from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Union

XmlValue = Union[str, "XmlMapping"]
XmlMapping = dict[str, XmlValue]


def parse_document(xml: str | bytes) -> ET.Element:
    """Parse a whole XML document and return its root element.

    Comments are kept in the tree so that the converter sees (and drops) them
    the same way it drops any other ``comment`` node.
    """
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    parser.feed(xml)
    return parser.close()


def xml_to_mapping(element: ET.Element | None) -> XmlMapping:
    """Flatten an element into a mapping of attributes and child elements.

    Attributes are merged into the same namespace as child elements, children
    without attributes or children of their own become strings, everything
    else becomes a nested mapping. Repeated child tags overwrite each other;
    callers that need every sibling iterate the element themselves.
    """
    out: XmlMapping = {}
    if element is None:
        return out

    out.update(element.attrib)
    for child in element:
        if _is_comment(child):
            continue
        out[child.tag] = _convert(child)
    return out


def _convert(element: ET.Element) -> XmlValue:
    if len(element) == 0 and not element.attrib:
        return element.text or ""
    return xml_to_mapping(element)


def inner_markup(element: ET.Element) -> str:
    """Text content of ``element`` with any child elements serialized back to markup."""
    parts = [element.text or ""]
    for child in element:
        if _is_comment(child):
            parts.append(child.tail or "")
            continue
        # tostring carries the child's tail along
        parts.append(ET.tostring(child, encoding="unicode"))
    return "".join(parts)


def _is_comment(element: ET.Element) -> bool:
    # ElementTree marks comments with the Comment factory instead of a str tag
    return element.tag is ET.Comment or element.tag == "comment"


def find_path(element: ET.Element | None, *path: str) -> ET.Element | None:
    node = element
    for tag in path:
        if node is None:
            return None
        node = node.find(tag)
    return node

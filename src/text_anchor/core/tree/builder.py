"""Build document trees from HTML or XML markup.

lxml keeps character data on ``.text`` and ``.tail``; here every such run
becomes its own text leaf so that offsets and sibling indices follow the
DOM view of the document:

    <p>Hello <b>big</b> world</p>  ->  p["Hello ", b["big"], " world"]

Comments and processing instructions are kept as insignificant nodes.
"""

from lxml import etree, html

from text_anchor.models.node import (
    CommentNode,
    ElementNode,
    Node,
    ProcessingInstructionNode,
    TextNode,
)


def get_tag_name(elem: etree._Element) -> str:
    """Local tag name, without any namespace."""
    return etree.QName(elem).localname


def _convert_element(elem: etree._Element) -> ElementNode:
    attributes = {str(k): str(v) for k, v in elem.attrib.items()}
    node = ElementNode(get_tag_name(elem), attributes=attributes)

    if elem.text:
        node.append(TextNode(elem.text))

    for child in elem:
        converted = _convert_child(child)
        if converted is not None:
            node.append(converted)
        if child.tail:
            node.append(TextNode(child.tail))

    return node


def _convert_child(child: etree._Element) -> Node | None:
    if child.tag is etree.Comment:
        return CommentNode(child.text or "")
    if child.tag is etree.ProcessingInstruction:
        return ProcessingInstructionNode(child.target, child.text or "")
    if child.tag is etree.Entity:
        # Unresolved entity references carry no text of their own.
        return None
    return _convert_element(child)


def from_lxml(elem: etree._Element) -> ElementNode:
    """Convert an lxml element (and its subtree) into a document tree.

    The element's own tail is not part of its subtree and is dropped.
    """
    return _convert_element(elem)


def parse_html(markup: str) -> ElementNode:
    """Parse an HTML document or fragment.

    A fragment holding a single element yields that element; a full document
    yields its ``<html>`` element.
    """
    return from_lxml(html.fromstring(markup))


def parse_xml(markup: str | bytes) -> ElementNode:
    """Parse an XML document, keeping whitespace-only text as leaves."""
    if isinstance(markup, str):
        markup = markup.encode("utf-8")
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
    return from_lxml(etree.fromstring(markup, parser))

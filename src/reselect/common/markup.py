"""
Mise en forme du HTML capturé par debug().

Réindente un fragment outerHTML (2 espaces) pour une lecture humaine.
Sortie déterministe: même markup en entrée => même texte en sortie.

Les éléments de document (<html>, <head>, <body>) sont parsés comme un
document complet: le découpage en fragments les supprimerait, avec
leurs attributs.
"""

import re
from typing import List, Optional

from lxml import etree
from lxml import html as lxml_html

from reselect.common.logging import get_logger

logger = get_logger(__name__)

INDENT = "  "

DOCUMENT_TAG = re.compile(r"^(?:<!doctype[^>]*>\s*)?<(html|head|body)[\s>/]", re.IGNORECASE)


def _strip_blank_text(element) -> None:
    """Supprime les noeuds texte vides (indentation d'origine)."""
    for node in element.iter():
        if isinstance(node.tag, str) and node.text is not None and not node.text.strip():
            node.text = None
        if node is not element and node.tail is not None and not node.tail.strip():
            node.tail = None


def _serialize(element) -> str:
    _strip_blank_text(element)
    etree.indent(element, space=INDENT)
    return etree.tostring(element, method="html", encoding="unicode", with_tail=False).rstrip()


def _document_element(text: str, tag: str) -> Optional[etree._Element]:
    document = lxml_html.document_fromstring(text)
    if tag == "html":
        return document
    return document.find(tag)


def format_markup(markup: str) -> str:
    """
    Formate un fragment HTML.

    Args:
        markup: outerHTML brut (un ou plusieurs éléments, ou un élément
            de document: html, head, body)

    Returns:
        HTML indenté, ou le texte d'origine si lxml ne sait pas le parser
    """
    text = (markup or "").strip()
    if not text:
        return ""

    document_tag = DOCUMENT_TAG.match(text)
    if document_tag:
        try:
            element = _document_element(text, document_tag.group(1).lower())
        except (etree.ParserError, ValueError) as e:
            logger.debug(f"[Markup] Unparsable document, keeping raw markup: {e}")
            return text
        if element is None:
            return text
        return _serialize(element)

    try:
        fragments = lxml_html.fragments_fromstring(text)
    except (etree.ParserError, ValueError) as e:
        logger.debug(f"[Markup] Not a fragment, keeping raw markup: {e}")
        return text

    lines: List[str] = []
    for fragment in fragments:
        if isinstance(fragment, str):
            if fragment.strip():
                lines.append(fragment.strip())
            continue

        lines.append(_serialize(fragment))
        if fragment.tail and fragment.tail.strip():
            lines.append(fragment.tail.strip())

    return "\n".join(lines)

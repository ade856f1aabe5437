"""Small BeautifulSoup helpers for mutating the page markup."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from .errors import MissingElement

PARSER = "lxml"


def parse_page(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, PARSER)


def parse_fragment(html: str) -> list[Tag]:
    """Parse an HTML fragment into its top-level elements."""
    body = BeautifulSoup(html, PARSER).body
    if body is None:
        return []
    return [node.extract() for node in body.find_all(recursive=False)]


def require_element(soup: BeautifulSoup, element_id: str) -> Tag:
    """Find an element by id.

    Raises:
        MissingElement: If the page has no such element.
    """
    node = soup.find(id=element_id)
    if node is None:
        raise MissingElement(element_id)
    return node


def is_attached(soup: BeautifulSoup, tag: Tag) -> bool:
    """True while ``tag`` is still part of ``soup`` (not extracted or cleared)."""
    return any(parent is soup for parent in tag.parents)


def class_list(tag: Tag) -> list[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def has_class(tag: Tag, class_name: str) -> bool:
    return class_name in class_list(tag)


def toggle_class(tag: Tag, class_name: str, on: bool) -> None:
    classes = [c for c in class_list(tag) if c != class_name]
    if on:
        classes.append(class_name)
    tag["class"] = classes


def add_class(tag: Tag, class_name: str) -> None:
    if not has_class(tag, class_name):
        toggle_class(tag, class_name, True)


def set_text(soup: BeautifulSoup, element_id: str, value: str | None) -> bool:
    """Replace an element's text; empty values and missing elements are skipped."""
    if not value:
        return False
    node = soup.find(id=element_id)
    if node is None:
        return False
    node.string = value
    return True


def set_meta(soup: BeautifulSoup, selector: str, value: str | None) -> bool:
    """Set the ``content`` attribute of the first element matching ``selector``."""
    if not value:
        return False
    meta = soup.select_one(selector)
    if meta is None:
        return False
    meta["content"] = value
    return True

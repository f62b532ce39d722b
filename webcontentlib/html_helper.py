import logging
from typing import Dict, Iterable, List, Optional
from urllib.parse import unquote, urlparse

from bs4 import NavigableString, Tag
from bs4.element import PageElement

from . import ids
from .document import HtmlDocument
from .errors import ExternalLinksHaveToBeMarkedFirst
from .links import LinkTools
from .types import ExternalLinksMarked

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
TABLE_HEADER_MARKERS = ("Tabulka", "Table")
NO_SELF_ANCHOR_TAGS = ("a", "button", "table", "thead", "tbody", "tr")
INLINE_TAGS = ("a", "span", "strong", "b", "i", "em", "small", "sup", "sub", "code", "abbr")


class HtmlHelper:
    DATA_ORIGINAL_ID = "data-original-id"
    INVISIBLE_ID_CLASS = "invisible-id"
    EXTERNAL_URL_CLASS = "external-url"
    INTERNAL_URL_CLASS = "internal-url"
    DATA_HAS_MARKED_EXTERNAL_URLS = "data-has-marked-external-urls"
    HIDDEN_CLASS = "hidden"

    def __init__(self, current_host: Optional[str] = None):
        self.current_host = current_host.lower() if current_host else None

    @staticmethod
    def to_id(value: str) -> str:
        return ids.to_id(value)

    @staticmethod
    def turn_to_local_link(link: str) -> str:
        return LinkTools.turn_to_local_link(link)

    def make_drdplus_links_local(self, document: HtmlDocument) -> HtmlDocument:
        changed = 0
        for anchor in document.get_elements_by_tag_name("a"):
            href = anchor.get("href")
            if not href:
                continue
            local = self.turn_to_local_link(href)
            if local != href:
                anchor["href"] = local
                changed += 1
        for iframe in document.get_elements_by_tag_name("iframe"):
            src = iframe.get("src")
            if src:
                iframe["src"] = self.turn_to_local_link(src)
            iframe_id = iframe.get("id")
            if iframe_id:
                iframe["id"] = iframe_id.replace("drdplus.info", "drdplus.loc")
        logging.debug("Localized %d links", changed)
        return document

    def add_ids_to_tables_and_headings(self, document: HtmlDocument) -> HtmlDocument:
        for tag_name in HEADING_TAGS + ("th",):
            for element in document.get_elements_by_tag_name(tag_name):
                if element.get("id"):
                    continue
                text = self._first_direct_text(element)
                if not text:
                    continue
                if tag_name == "th" and not any(m in text for m in TABLE_HEADER_MARKERS):
                    continue
                element["id"] = text
        return document

    @staticmethod
    def _first_direct_text(element: Tag) -> Optional[str]:
        for child in element.children:
            if isinstance(child, NavigableString) and child.strip():
                return child.strip()
        return None

    def replace_diacritics_from_ids(self, document: HtmlDocument) -> HtmlDocument:
        for element in document.root.find_all(id=True):
            if document.has_class(element, self.INVISIBLE_ID_CLASS):
                continue
            original_id = element["id"]
            if not original_id or ids.is_plain_id(original_id):
                continue
            constant_id = ids.to_constant_like_value(original_id)
            if not constant_id:
                logging.debug("Keeping id %r, nothing left after normalization", original_id)
                continue
            element[self.DATA_ORIGINAL_ID] = original_id
            element["id"] = constant_id
            element.append(
                document.create_element(
                    "span",
                    id=ids.sanitize_anchor_id(original_id),
                    class_=self.INVISIBLE_ID_CLASS,
                )
            )
        return document

    def replace_diacritics_from_anchor_hashes(self, document: HtmlDocument) -> HtmlDocument:
        for anchor in document.get_elements_by_tag_name("a"):
            href = anchor.get("href")
            if not href or "#" not in href:
                continue
            base, _, fragment = href.partition("#")
            fragment = unquote(fragment)
            if not fragment or ids.is_plain_id(fragment):
                continue
            constant_id = ids.to_constant_like_value(fragment)
            if constant_id:
                anchor["href"] = base + "#" + constant_id
        return document

    def add_anchors_to_ids(self, document: HtmlDocument) -> HtmlDocument:
        for element in document.root.find_all(id=True):
            if element.name in NO_SELF_ANCHOR_TAGS or not element.get("id"):
                continue
            if document.has_class(element, self.INVISIBLE_ID_CLASS):
                continue
            if element.find_parent("a") is not None:
                continue
            href = "#" + element["id"]
            if element.find("a", href=href, recursive=False) is not None:
                continue
            leading = self._leading_inline_nodes(element)
            if any(isinstance(n, Tag) and (n.name == "a" or n.find("a") is not None) for n in leading):
                continue
            anchor = document.create_element("a", href=href)
            for node in leading:
                anchor.append(node.extract())
            element.insert(0, anchor)
        return document

    @staticmethod
    def _leading_inline_nodes(element: Tag) -> List[PageElement]:
        """Children before the first block child, they go into the self-anchor."""
        leading = []
        for child in element.contents:
            if isinstance(child, Tag) and child.name not in INLINE_TAGS:
                break
            leading.append(child)
        return leading

    def mark_external_links_by_class(self, document: HtmlDocument) -> ExternalLinksMarked:
        marked = 0
        for anchor in document.get_elements_by_tag_name("a"):
            if document.has_class(anchor, self.INTERNAL_URL_CLASS):
                continue
            if LinkTools.is_external(anchor.get("href"), self.current_host):
                document.add_class(anchor, self.EXTERNAL_URL_CLASS)
                marked += 1
        if document.body is not None:
            document.body[self.DATA_HAS_MARKED_EXTERNAL_URLS] = "1"
        logging.debug("Marked %d external links", marked)
        return ExternalLinksMarked(document=document, external_count=marked)

    def external_links_target_to_blank(self, document: HtmlDocument) -> HtmlDocument:
        for anchor in document.get_elements_by_class_name(self.EXTERNAL_URL_CLASS):
            if not anchor.get("target"):
                anchor["target"] = "_blank"
        return document

    def find_tables_with_ids(
        self, document: HtmlDocument, wanted_ids: Optional[Iterable[str]] = None
    ) -> Dict[str, Tag]:
        tables: Dict[str, Tag] = {}
        for table in document.get_elements_by_tag_name("table"):
            table_id = (table.get("id") or "").strip()
            if not table_id:
                continue
            key = self.to_id(table_id)
            if not key:
                logging.debug("Skipping table with id %r, nothing left after normalization", table_id)
                continue
            tables.setdefault(key, table)
        requested = [w for w in (wanted_ids or []) if w]
        if not requested:
            return tables
        wanted = {self.to_id(w) for w in requested}
        return {key: table for key, table in tables.items() if key in wanted}

    def inject_iframes_with_remote_tables(
        self, document: HtmlDocument, marked: Optional[ExternalLinksMarked]
    ) -> HtmlDocument:
        if marked is None or not marked.belongs_to(document):
            raise ExternalLinksHaveToBeMarkedFirst(
                "External links have to be marked first, use mark_external_links_by_class for that"
            )
        tables_by_host: Dict[str, List[str]] = {}
        scheme_by_host: Dict[str, str] = {}
        for anchor in document.get_elements_by_class_name(self.EXTERNAL_URL_CLASS):
            href = anchor.get("href")
            remote = LinkTools.remote_table_link(href)
            if remote is None:
                continue
            host, table_id = remote
            scheme_by_host.setdefault(host, urlparse(href.strip()).scheme.lower() or "https")
            table_ids = tables_by_host.setdefault(host, [])
            if table_id not in table_ids:
                table_ids.append(table_id)
        root = document.root
        for host, table_ids in tables_by_host.items():
            if document.get_element_by_id(host) is not None:
                logging.debug("Iframe for %s already present", host)
                continue
            root.append(
                document.create_element(
                    "iframe",
                    id=host,
                    src="{}://{}/?tables={}".format(scheme_by_host[host], host, ",".join(table_ids)),
                    class_=self.HIDDEN_CLASS,
                )
            )
            logging.info("Injected iframe with %d remote tables from %s", len(table_ids), host)
        return document

    def process(self, document: HtmlDocument, local_links: bool = False) -> HtmlDocument:
        self.add_ids_to_tables_and_headings(document)
        self.replace_diacritics_from_ids(document)
        self.replace_diacritics_from_anchor_hashes(document)
        self.add_anchors_to_ids(document)
        marked = self.mark_external_links_by_class(document)
        self.external_links_target_to_blank(document)
        self.inject_iframes_with_remote_tables(document, marked)
        if local_links:
            self.make_drdplus_links_local(document)
        return document

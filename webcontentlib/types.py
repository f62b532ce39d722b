from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import HtmlDocument


@dataclass(frozen=True)
class ExternalLinksMarked:
    document: "HtmlDocument"
    external_count: int

    def belongs_to(self, document: "HtmlDocument") -> bool:
        return self.document is document

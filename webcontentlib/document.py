from typing import List, Optional

from bs4 import BeautifulSoup, Tag


class HtmlDocument:
    """Parsed HTML page, mutated in place by HtmlHelper."""

    def __init__(self, html: str) -> None:
        self.soup = BeautifulSoup(html, "html.parser")

    @property
    def body(self) -> Optional[Tag]:
        return self.soup.body

    @property
    def root(self) -> Tag:
        return self.soup.body or self.soup

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def get_elements_by_class_name(self, class_name: str) -> List[Tag]:
        return self.soup.find_all(class_=class_name)

    def get_elements_by_tag_name(self, tag_name: str) -> List[Tag]:
        return self.soup.find_all(tag_name)

    def create_element(self, tag_name: str, **attrs: str) -> Tag:
        class_name = attrs.pop("class_", None)
        element = self.soup.new_tag(tag_name, attrs=attrs)
        if class_name:
            element["class"] = class_name.split()
        return element

    def save_html(self) -> str:
        return str(self.soup)

    @staticmethod
    def has_class(element: Tag, class_name: str) -> bool:
        return class_name in element.get_attribute_list("class")

    @staticmethod
    def add_class(element: Tag, class_name: str) -> None:
        classes = [c for c in element.get_attribute_list("class") if c]
        if class_name not in classes:
            classes.append(class_name)
        element["class"] = classes

import re
from typing import Optional, Tuple
from urllib.parse import urljoin, urlparse

_PUBLIC_LINK = re.compile(r"^https?://((?:[^./?#\s]+\.)*)drdplus\.info(?=[:/?#]|$)", re.IGNORECASE)
_REMOTE_TABLE_LINK = re.compile(
    r"^(?:https?:)?//(?P<host>(?:[\w-]+\.)*drdplus\.(?:info|loc))(?::\d+)?(?:/[^#]*)?#(?P<table_id>[^#]+)$",
    re.IGNORECASE,
)
_NON_NAVIGATIONAL = ("mailto:", "javascript:", "tel:", "data:")


class LinkTools:
    @staticmethod
    def turn_to_local_link(link: str) -> str:
        return _PUBLIC_LINK.sub(r"http://\1drdplus.loc", link, count=1)

    @staticmethod
    def target_host(href: Optional[str], current_host: Optional[str] = None) -> Optional[str]:
        if not href:
            return None
        href = href.strip()
        if not href or href.startswith("#") or href.lower().startswith(_NON_NAVIGATIONAL):
            return None
        parsed = urlparse(href)
        if parsed.netloc:
            return parsed.hostname
        if parsed.scheme:
            return None
        if not current_host:
            return None
        return urlparse(urljoin("//" + current_host + "/", href)).hostname

    @staticmethod
    def is_external(href: Optional[str], current_host: Optional[str]) -> Optional[bool]:
        """None when the link has no resolvable target host."""
        host = LinkTools.target_host(href, current_host)
        if host is None:
            return None
        own_host = urlparse("//" + current_host).hostname if current_host else None
        return host != own_host

    @staticmethod
    def remote_table_link(href: Optional[str]) -> Optional[Tuple[str, str]]:
        if not href:
            return None
        match = _REMOTE_TABLE_LINK.match(href.strip())
        if not match:
            return None
        return match.group("host").lower(), match.group("table_id")

import re
import unicodedata

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")
_PLAIN_ID = re.compile(r"[A-Za-z0-9_-]+")


def remove_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _to_underscored(value: str) -> str:
    value = remove_diacritics(value)
    value = _CAMEL_BOUNDARY.sub("_", value)
    return _NON_ALNUM.sub("_", value).strip("_")


def to_id(value: str) -> str:
    """Lower snake-case, diacritics-free lookup key: 'Křížaly s mrkví' -> 'krizaly_s_mrkvi'."""
    return _to_underscored(value).lower()


def to_constant_like_value(value: str) -> str:
    """Upper snake-case, diacritics-free form used for element IDs."""
    return _to_underscored(value).upper()


def to_camel_case_id(value: str) -> str:
    parts = [p for p in to_id(value).split("_") if p]
    if not parts:
        return ""
    return parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])


def sanitize_anchor_id(value: str) -> str:
    return value.replace("#", "_")


def is_plain_id(value: str) -> bool:
    return bool(_PLAIN_ID.fullmatch(value))

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from .errors import InvalidSomeExpectedTableIds, MissingSomeExpectedTableIds

HAS_TABLES = "has_tables"
SOME_EXPECTED_TABLE_IDS = "some_expected_table_ids"
HAS_TABLE_OF_CONTENTS = "has_table_of_contents"


@dataclass(frozen=True)
class WebTestsConfiguration:
    """Which behaviors the web tests of a rules site should expect to observe."""

    has_tables: bool = True
    some_expected_table_ids: Tuple[str, ...] = ()
    has_table_of_contents: bool = True

    def __post_init__(self) -> None:
        ids = self.some_expected_table_ids
        if not isinstance(ids, (list, tuple)):
            raise MissingSomeExpectedTableIds(
                "Expected some '{}', got {!r}".format(SOME_EXPECTED_TABLE_IDS, ids)
            )
        if not all(isinstance(table_id, str) for table_id in ids):
            raise InvalidSomeExpectedTableIds(
                "Expected flat list of strings for '{}', got {!r}".format(SOME_EXPECTED_TABLE_IDS, ids)
            )
        if not self.has_tables and ids:
            raise InvalidSomeExpectedTableIds(
                "No '{}' can be expected when '{}' is false, got {!r}".format(
                    SOME_EXPECTED_TABLE_IDS, HAS_TABLES, ids
                )
            )
        object.__setattr__(self, "some_expected_table_ids", tuple(ids))

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> "WebTestsConfiguration":
        has_tables = _flag(values, HAS_TABLES)
        if has_tables:
            table_ids = values.get(SOME_EXPECTED_TABLE_IDS)
            if table_ids is None:
                raise MissingSomeExpectedTableIds(
                    "Expected some '{}', got nothing".format(SOME_EXPECTED_TABLE_IDS)
                )
        else:
            table_ids = ()
        return cls(
            has_tables=has_tables,
            some_expected_table_ids=table_ids,
            has_table_of_contents=_flag(values, HAS_TABLE_OF_CONTENTS),
        )


def _flag(values: Mapping[str, Any], key: str) -> bool:
    value = values.get(key)
    return True if value is None else bool(value)

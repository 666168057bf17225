"""Query resolution against the cache store.

One resolver serves every access pattern. Each pattern is an IndexSpec naming
the index, its key attribute and how values are matched:

- KEY: batched primary-key lookup; missing ids are omitted
- EXACT: one exact-match index query per value, results concatenated
- CONTAINS: one filtered scan requiring every ``key:value`` needle
- SUBTREE: OU depth discovery followed by a union over deeper OU levels

Every operation returns an OperationResult: SUCCESS with the matching entries
(tags unflattened), or the uniform empty result with status NOT_FOUND and the
message "No items found". Store failures raise CacheStoreError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus
from modules.org_directory import tag_codec
from modules.org_directory.errors import CodecError, QueryInputError
from modules.org_directory.models import (
    EMAIL_ATTRIBUTE,
    ID_ATTRIBUTE,
    MAX_OU_LEVELS,
    NAME_ATTRIBUTE,
    STATUS_ATTRIBUTE,
    TAGS_ATTRIBUTE,
    DirectoryEntry,
    ou_level_attribute,
)
from modules.org_directory.store import DirectoryStore

logger = get_module_logger()

NO_ITEMS_FOUND = "No items found"


class MatchMode(Enum):
    KEY = "key"
    EXACT = "exact"
    CONTAINS = "contains"
    SUBTREE = "subtree"


@dataclass(frozen=True)
class IndexSpec:
    """How one access pattern reaches the store."""

    name: Optional[str]
    attribute: str
    mode: MatchMode


ID_LOOKUP = IndexSpec(None, ID_ATTRIBUTE, MatchMode.KEY)
EMAIL_INDEX = IndexSpec("EmailIndex", EMAIL_ATTRIBUTE, MatchMode.EXACT)
STATUS_INDEX = IndexSpec("StatusIndex", STATUS_ATTRIBUTE, MatchMode.EXACT)
NAME_INDEX = IndexSpec("NameIndex", NAME_ATTRIBUTE, MatchMode.EXACT)
TAGS_INDEX = IndexSpec("TagsIndex", TAGS_ATTRIBUTE, MatchMode.CONTAINS)
OU_LEVEL_INDEXES = tuple(
    IndexSpec(f"OULevel{level}Index", ou_level_attribute(level), MatchMode.SUBTREE)
    for level in range(1, MAX_OU_LEVELS + 1)
)


def empty_result() -> OperationResult:
    """The single shape used for "nothing matched"."""
    return OperationResult.error(OperationStatus.NOT_FOUND, NO_ITEMS_FOUND, data=[])


def parse_csv_param(raw: Optional[str]) -> List[str]:
    """Split a comma-separated request parameter, dropping blanks.

    Raises:
        QueryInputError: no usable value was supplied
    """
    values = [part.strip() for part in (raw or "").split(",")]
    values = [v for v in values if v]
    if not values:
        raise QueryInputError("at least one non-empty value is required")
    return values


def parse_tags_param(raw: Optional[str]) -> Dict[str, str]:
    """Parse a ``key:value,key:value`` request parameter.

    Raises:
        QueryInputError: the parameter is empty or malformed
    """
    if not raw or not raw.strip():
        raise QueryInputError("at least one key:value tag is required")
    try:
        tags = tag_codec.unflatten(raw.strip())
    except CodecError as e:
        raise QueryInputError(str(e)) from e
    return tags


class QueryService:
    """Read-only resolver over the cache store.

    Args:
        store: DirectoryStore
        max_depth: Deepest OU level present in the cache
    """

    def __init__(self, store: DirectoryStore, max_depth: int = MAX_OU_LEVELS) -> None:
        self._store = store
        self._ou_indexes = OU_LEVEL_INDEXES[:max_depth]
        self._strategies: Dict[MatchMode, Callable[[IndexSpec, List[Any]], List[dict]]] = {
            MatchMode.KEY: self._lookup_keys,
            MatchMode.EXACT: self._lookup_exact,
            MatchMode.CONTAINS: self._lookup_contains,
            MatchMode.SUBTREE: self._lookup_subtree,
        }

    # Public access patterns

    def by_ids(self, ids: Sequence[str]) -> OperationResult:
        return self.resolve(ID_LOOKUP, ids)

    def by_emails(self, emails: Sequence[str]) -> OperationResult:
        return self.resolve(EMAIL_INDEX, emails)

    def by_status(self, status: str) -> OperationResult:
        return self.resolve(STATUS_INDEX, [status])

    def by_names(self, names: Sequence[str]) -> OperationResult:
        return self.resolve(NAME_INDEX, names)

    def by_ous(self, ou_ids: Sequence[str]) -> OperationResult:
        return self.resolve(self._ou_indexes[0], ou_ids)

    def by_tag(self, name: str, value: str) -> OperationResult:
        return self.by_tags({name: value})

    def by_tags(self, tags: Mapping[str, str]) -> OperationResult:
        """Entries carrying every requested tag.

        The scan matches ``key:value`` substrings; candidates are then checked
        against their parsed tags so ``env:prod`` never returns ``env:production``.
        """
        if not tags:
            raise QueryInputError("at least one tag is required")
        try:
            needles = [tag_codec.encode_pair(k, v) for k, v in tags.items()]
        except CodecError as e:
            raise QueryInputError(str(e)) from e

        wanted = dict(tags)

        def has_all_tags(entry: DirectoryEntry) -> bool:
            return all(entry.tags.get(k) == v for k, v in wanted.items())

        return self.resolve(TAGS_INDEX, needles, predicate=has_all_tags)

    # Resolver

    def resolve(
        self,
        spec: IndexSpec,
        values: Iterable[Any],
        predicate: Optional[Callable[[DirectoryEntry], bool]] = None,
    ) -> OperationResult:
        """Run one access pattern and shape the result.

        Raises:
            QueryInputError: no usable value was supplied
            CacheStoreError: the store call failed
            CodecError: a stored tag string could not be decoded
        """
        cleaned = self._clean_values(values)
        log = logger.bind(index=spec.name or "primary", mode=spec.mode.value)

        items = self._strategies[spec.mode](spec, cleaned)
        entries = [DirectoryEntry.from_item(item) for item in items]
        if predicate is not None:
            entries = [e for e in entries if predicate(e)]

        log.info("query_resolved", values=len(cleaned), matches=len(entries))
        if not entries:
            return empty_result()
        return OperationResult.success(
            data=[e.to_response() for e in entries],
            message=f"{len(entries)} items found",
        )

    @staticmethod
    def _clean_values(values: Iterable[Any]) -> List[Any]:
        if isinstance(values, str):
            values = [values]
        cleaned = []
        for value in values or []:
            if isinstance(value, str):
                value = value.strip()
            if value:
                cleaned.append(value)
        cleaned = list(dict.fromkeys(cleaned))
        if not cleaned:
            raise QueryInputError("at least one non-empty value is required")
        return cleaned

    def _lookup_keys(self, spec: IndexSpec, values: List[str]) -> List[dict]:
        return self._store.batch_get(values)

    def _lookup_exact(self, spec: IndexSpec, values: List[str]) -> List[dict]:
        items: List[dict] = []
        for value in values:
            items.extend(self._store.query_index(spec.name, spec.attribute, value))
        return items

    def _lookup_contains(self, spec: IndexSpec, values: List[str]) -> List[dict]:
        return self._store.scan_contains(spec.attribute, values)

    def _find_ou_depth(self, ou_id: str) -> Optional[int]:
        for level, index in enumerate(self._ou_indexes, start=1):
            if self._store.query_index(index.name, index.attribute, ou_id, limit=1):
                return level
        return None

    def _lookup_subtree(self, spec: IndexSpec, values: List[str]) -> List[dict]:
        # An entry below the OU at depth D stores that OU at ouLevelD, so
        # querying levels D..max for the same id gathers the whole subtree.
        seen: Dict[str, dict] = {}
        for ou_id in values:
            depth = self._find_ou_depth(ou_id)
            if depth is None:
                logger.info("ou_not_found", ou_id=ou_id)
                continue
            for index in self._ou_indexes[depth - 1 :]:
                for item in self._store.query_index(index.name, index.attribute, ou_id):
                    seen.setdefault(item[ID_ATTRIBUTE], item)
        return list(seen.values())

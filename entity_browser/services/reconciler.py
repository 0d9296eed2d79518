"""
Selection Reconciler.

Merges the references already attached to a field with the selection
reported by an entity browser. The browser always reports the editor's
complete selection, so items that are already attached keep their row
(and any description or weight typed into it) while new items are
appended in the order the browser reported them.

Wire format at the browser boundary is a single space-delimited string:

    >>> [v.target_id for v in reconcile([], "5 9 5 3")]
    ['5', '9', '3']

    >>> flatten("3 7 9")
    [{'target_id': '3'}, {'target_id': '7'}, {'target_id': '9'}]
"""
import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)

DELIMITER = ' '


@dataclass(frozen=True)
class ReferenceValue:
    """One selected entity plus the per-row metadata edited in the widget."""
    target_id: str
    weight: int = 0
    description: str = ''

    def __post_init__(self):
        # Identifiers compare as stripped strings whatever the host passed in
        object.__setattr__(self, 'target_id', _normalize_id(self.target_id))

    @classmethod
    def coerce(cls, value: Any) -> 'ReferenceValue':
        """
        Build a ReferenceValue from whatever the host hands us.

        Accepts ReferenceValue instances, dicts with a ``target_id`` key,
        objects with a ``target_id`` attribute (stored field items), model
        instances (their ``pk``) and bare identifiers.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(
                target_id=_normalize_id(value.get('target_id')),
                weight=_to_int(value.get('weight'), 0),
                description=value.get('description') or '',
            )
        if hasattr(value, 'target_id'):
            return cls(
                target_id=_normalize_id(value.target_id),
                weight=_to_int(getattr(value, 'weight', getattr(value, 'delta', 0)), 0),
                description=getattr(value, 'description', '') or '',
            )
        if hasattr(value, 'pk'):
            return cls(target_id=_normalize_id(value.pk))
        return cls(target_id=_normalize_id(value))


def _normalize_id(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def parse_selection(raw: Optional[str]) -> list[str]:
    """
    Split a browser selection string into identifier tokens.

    Empty tokens (stray or repeated delimiters) are dropped, so ``None``,
    ``""`` and whitespace-only input all parse to an empty list.
    """
    if not raw:
        return []
    return [token.strip() for token in str(raw).split(DELIMITER) if token.strip()]


def _incoming_tokens(incoming: Any) -> list[str]:
    if incoming is None or isinstance(incoming, str):
        return parse_selection(incoming)
    return [token for token in (_normalize_id(t) for t in incoming) if token]


def reconcile(current: Optional[Iterable[Any]], incoming: Any) -> list[ReferenceValue]:
    """
    Merge the attached references with the latest browser selection.

    Args:
        current: References currently attached to the field, in display
            order. Duplicates and empty identifiers are collapsed.
        incoming: Selection string from the browser, or an already parsed
            sequence of identifiers.

    Returns:
        All of ``current`` unchanged, followed by each identifier from
        ``incoming`` that was not yet present. New values get their
        output position as weight and an empty description.
    """
    result: list[ReferenceValue] = []
    seen: set[str] = set()

    for value in current or ():
        value = ReferenceValue.coerce(value)
        if not value.target_id or value.target_id in seen:
            continue
        seen.add(value.target_id)
        result.append(value)

    kept = len(result)
    for token in _incoming_tokens(incoming):
        if token in seen:
            continue
        seen.add(token)
        result.append(ReferenceValue(target_id=token, weight=len(result)))

    logger.debug(f"Reconciled selection: {kept} kept, {len(result) - kept} added")
    return result


def apply_row_weights(values: Iterable[ReferenceValue]) -> list[ReferenceValue]:
    """Re-linearize weights to the zero-based position of each row."""
    return [replace(value, weight=delta) for delta, value in enumerate(values)]


def sort_by_weight(values: Iterable[ReferenceValue]) -> list[ReferenceValue]:
    """Order resubmitted rows by their weight; equal weights keep their order."""
    return sorted(values, key=lambda value: value.weight)


def flatten(values: Any) -> list[dict]:
    """
    Project a reference set (or its raw selection string) to field records.

    Returns one ``{'target_id': ...}`` record per identifier, in order.
    """
    if values is None or isinstance(values, str):
        ids = parse_selection(values)
    else:
        ids = [v.target_id for v in (ReferenceValue.coerce(v) for v in values) if v.target_id]
    return [{'target_id': target_id} for target_id in ids]


def to_item_records(values: Iterable[Any]) -> list[dict]:
    """Records for the multi-value case, carrying weight and description."""
    return [
        {
            'target_id': value.target_id,
            'weight': value.weight,
            'description': value.description,
        }
        for value in (ReferenceValue.coerce(v) for v in values)
        if value.target_id
    ]


def serialize(values: Iterable[Any]) -> str:
    """Join identifiers back into the selection string the browser expects."""
    return DELIMITER.join(
        value.target_id
        for value in (ReferenceValue.coerce(v) for v in values)
        if value.target_id
    )

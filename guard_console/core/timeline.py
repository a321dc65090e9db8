"""
Event timeline: merge registry and hook event batches into one sequence.

Each batch arrives already in source order. The merge is a stable sort on
occurrence position (block number) only, so events that share a block keep
the order of the batches they came from.
"""

from typing import Any, Iterable, List, Mapping, Tuple, Union

from .types import EventKind, TimelineEvent

RawEvent = Tuple[Union[EventKind, str], int, Mapping[str, Any]]


def _coerce(event: Union[TimelineEvent, RawEvent]) -> TimelineEvent:
    if isinstance(event, TimelineEvent):
        return event
    kind, position, payload = event
    if not isinstance(kind, EventKind):
        kind = EventKind.from_name(kind)
    return TimelineEvent(kind=kind, occurrence_position=position, payload=payload)


def merge(batches: Iterable[Iterable[Union[TimelineEvent, RawEvent]]]) -> List[TimelineEvent]:
    """
    Merge event batches into ascending occurrence order.

    Args:
        batches: Sequence of per-source batches

    Returns:
        Ordered list of TimelineEvent; empty when every batch is empty
    """
    combined = [_coerce(event) for batch in batches for event in batch]
    return sorted(combined, key=lambda event: event.occurrence_position)


def normalize_log(kind: EventKind, log: Mapping[str, Any]) -> TimelineEvent:
    """
    Convert a decoded web3 log into a TimelineEvent.

    Only the decoded ``args`` become the payload; the block number is the
    occurrence position.
    """
    return TimelineEvent(
        kind=kind,
        occurrence_position=int(log["blockNumber"]),
        payload=dict(log.get("args") or {}),
    )

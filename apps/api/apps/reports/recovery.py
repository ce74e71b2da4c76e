"""
Per-item recovery for report loops (photos, annotations, signatures).
"""
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from apps.core.observability import metrics
from apps.core.observability.events import log_report_item_skipped

from .exceptions import RecoverableItemError


@dataclass(frozen=True)
class ItemFailure:
    element: str
    record_id: Optional[str]
    error_type: str
    reason: str


def _default_record_id(item):
    return getattr(item, 'record_id', None)


def recover_each(
    items: Iterable,
    render: Callable,
    *,
    report_kind: str,
    element: str,
    record_id: Callable = _default_record_id,
    fallback: Optional[Callable] = None,
) -> List[ItemFailure]:
    """
    Call render(item) for each item, absorbing recoverable failures.

    A failed item is logged, counted, and handed to fallback(item, error)
    when given. Anything that is not a RecoverableItemError propagates.
    """
    failures = []
    for item in items:
        try:
            render(item)
        except RecoverableItemError as exc:
            item_id = record_id(item)
            error_type = type(exc).__name__
            failures.append(ItemFailure(
                element=element,
                record_id=str(item_id) if item_id is not None else None,
                error_type=error_type,
                reason=str(exc),
            ))
            metrics.report_items_skipped_total.labels(element=element, reason=error_type).inc()
            log_report_item_skipped(report_kind, element, item_id, str(exc), error_type=error_type)
            if fallback is not None:
                fallback(item, exc)
    return failures

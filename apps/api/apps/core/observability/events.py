"""
Domain events logging helpers.

Provides structured event logging for case search and report operations.
"""
from typing import Dict, Optional
from .logging import get_sanitized_logger, sanitize_dict

logger = get_sanitized_logger(__name__)


def log_domain_event(
    event_name: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    entity_ids: Optional[Dict[str, str]] = None,
    result: str = 'success',
    **extra_fields
):
    """
    Log a domain event with structured data.

    Args:
        event_name: Name of the event (e.g., 'case_search_executed', 'report_generated')
        entity_type: Type of entity (e.g., 'Visit', 'Portfolio')
        entity_id: ID of primary entity
        entity_ids: Dictionary of related entity IDs
        result: Result of operation (success, failure, skipped, etc.)
        **extra_fields: Additional fields to log (will be sanitized)

    Example:
        log_domain_event(
            'report_generated',
            entity_type='Visit',
            entity_id=str(visit.id),
            result='success',
            page_count=4,
            skipped_items=1
        )
    """
    event_data = {
        'event': event_name,
        'result': result,
    }

    if entity_type:
        event_data['entity_type'] = entity_type

    if entity_id:
        event_data['entity_id'] = entity_id

    if entity_ids:
        event_data.update(entity_ids)

    # Sanitize extra fields
    sanitized_extra = sanitize_dict(extra_fields)
    event_data.update(sanitized_extra)

    # Log at appropriate level based on result
    if result in ['failure', 'error']:
        logger.error(f'Domain event: {event_name}', extra=event_data)
    elif result in ['warning', 'skipped', 'not_found']:
        logger.warning(f'Domain event: {event_name}', extra=event_data)
    else:
        logger.info(f'Domain event: {event_name}', extra=event_data)


def log_report_item_skipped(report_kind, element, record_id, reason, **extra):
    """Log a report element that was skipped after a recoverable failure."""
    log_domain_event(
        'report_item_skipped',
        entity_type=element,
        entity_id=str(record_id) if record_id else None,
        result='skipped',
        report_kind=report_kind,
        reason=reason,
        **extra
    )

# apps/audit/services.py

"""
Audit recorder

Commands call create_audit_log after their main write has committed.
Recording is best effort: a failure is logged and never reaches the
command's result.
"""

import logging

from django.db import transaction

from .models import AuditLog

logger = logging.getLogger(__name__)


def create_audit_log(context, entity_id, entity_type, entity_title, action):
    """
    Append an audit record for the acting user

    Runs in its own savepoint so a failed insert cannot poison an
    enclosing transaction.
    """
    try:
        with transaction.atomic():
            return AuditLog.objects.create(
                org_id=context.org_id,
                entity_id=str(entity_id),
                entity_type=entity_type,
                entity_title=entity_title,
                action=action,
                user_id=context.user_id,
                user_image=context.user_image,
                user_name=context.user_name,
            )
    except Exception:
        logger.exception(
            "Audit log failed: %s %s %s (org %s)",
            action, entity_type, entity_id, context.org_id
        )
        return None


def generate_log_message(log):
    """Human readable description, e.g. 'created list "Todo"'"""
    entity = log.entity_type.lower()

    verbs = {
        AuditLog.Action.CREATE: 'created',
        AuditLog.Action.UPDATE: 'updated',
        AuditLog.Action.DELETE: 'deleted',
    }
    verb = verbs.get(log.action)
    if verb is None:
        return f'unknown action {entity} "{log.entity_title}"'

    return f'{verb} {entity} "{log.entity_title}"'


def serialize_log(log):
    return {
        'id': log.id,
        'org_id': log.org_id,
        'action': log.action,
        'entity_id': log.entity_id,
        'entity_type': log.entity_type,
        'entity_title': log.entity_title,
        'user_id': log.user_id,
        'user_name': log.user_name,
        'user_image': log.user_image,
        'created_at': log.created_at.isoformat(),
        'message': generate_log_message(log),
    }

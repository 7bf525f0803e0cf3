# safety/audit.py

from .models import AuditLog


def record(action, actor=None, entity='', entity_id='', metadata=None):
    # The only write path into the audit log
    return AuditLog.objects.create(
        actor=actor,
        action=action,
        entity=entity,
        entity_id='' if entity_id is None else str(entity_id),
        metadata=metadata or {},
    )

import uuid, json
from sqlalchemy.orm import Session
from quickcourt.models.audit_log import AuditLog

def log_audit(db: Session, actor_user_id: str | None, action: str, entity_type: str, entity_id: str, details: dict | None = None):
    """Stage an audit row; it is committed with the caller's transaction."""
    db.add(AuditLog(
        id=str(uuid.uuid4()),
        actor_user_id=actor_user_id or "system",
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details_json=json.dumps(details or {}, ensure_ascii=False),
    ))

from sqlalchemy.orm import Session

from room_booking.models.audit_log import AuditLog


def _serialize(a: AuditLog) -> dict:
    return {
        "id":          a.id,
        "actor":       {"id": a.user.id, "name": a.user.name} if a.user else None,
        "action":      a.action,
        "entityType":  a.entityType,
        "entityId":    a.entityId,
        "description": a.description,
        "createdAt":   a.createdAt.isoformat() if a.createdAt else None,
    }


class AuditService:

    def list_logs(
        self, db: Session, page: int, limit: int,
        entity_type: str | None = None, entity_id: int | None = None, action: str | None = None,
    ) -> tuple[list[dict], int]:
        q = db.query(AuditLog)
        if entity_type:           q = q.filter(AuditLog.entityType == entity_type)
        if entity_id is not None: q = q.filter(AuditLog.entityId == entity_id)
        if action:                q = q.filter(AuditLog.action == action.upper())

        total = q.count()
        items = q.order_by(AuditLog.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return [_serialize(a) for a in items], total


audit_service = AuditService()

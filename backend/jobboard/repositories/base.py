"""Generic CRUD over one mapped class.

Every write commits immediately: the store gives no transaction spanning
several repository calls, so compound operations order their writes and
treat each one as durable once it returns.
"""
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.errors import ConflictError, InternalError, NoChangeError, NotFoundError
from jobboard.utils.ids import new_id, validate_id

logger = logging.getLogger(__name__)


class Repository:
    model = None
    label = "Entity"
    conflict_message = "Duplicate entry"

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("%s write rejected by unique index", self.label)
            raise ConflictError(self.conflict_message)
        except SQLAlchemyError:
            db.rollback()
            logger.exception("%s write failed", self.label)
            raise InternalError("Database error")

    def create(self, db: Session, **data):
        entity = self.model(id=new_id(), **data)
        db.add(entity)
        self._commit(db)
        return entity

    def get(self, db: Session, entity_id: str):
        entity_id = validate_id(entity_id, self.label.lower())
        entity = db.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    def find_one(self, db: Session, *criteria):
        return db.query(self.model).filter(*criteria).first()

    def find_by(self, db: Session, *criteria, order_by=None) -> list:
        query = db.query(self.model).filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def count(self, db: Session, *criteria) -> int:
        return db.query(func.count(self.model.id)).filter(*criteria).scalar()

    def update(self, db: Session, entity_id: str, patch: dict):
        entity = self.get(db, entity_id)
        changed = {k: v for k, v in patch.items() if getattr(entity, k) != v}
        if not changed:
            raise NoChangeError(f"No changes made to {self.label.lower()}")
        for key, value in changed.items():
            setattr(entity, key, value)
        self._commit(db)
        return entity

    def delete(self, db: Session, entity_id: str) -> None:
        entity = self.get(db, entity_id)
        db.delete(entity)
        self._commit(db)

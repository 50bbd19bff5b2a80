"""SQLAlchemy implementation of SecurityRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from brokerage.domain.models import Security
from brokerage.repositories.sqlalchemy.database import storage_errors
from brokerage.repositories.sqlalchemy.orm_models import SecurityORM


class SqlAlchemySecurityRepository:
    """SQLAlchemy-backed security master repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        with storage_errors(self._db, "create_security", security_id=security.security_id):
            orm_sec = SecurityORM(
                security_id=security.security_id,
                ticker=security.ticker,
                company_name=security.company_name,
                sector=security.sector,
                listed_in=security.listed_in,
                is_active=security.is_active,
            )
            self._db.add(orm_sec)
            self._db.commit()
            self._db.refresh(orm_sec)
            return self._to_domain(orm_sec)

    def get_by_id(self, security_id: str) -> Optional[Security]:
        """Retrieve security by ID."""
        with storage_errors(self._db, "get_security", security_id=security_id):
            orm_sec = self._db.query(SecurityORM).filter(
                SecurityORM.security_id == security_id
            ).first()
            return self._to_domain(orm_sec) if orm_sec else None

    def get_many(self, security_ids: list[str]) -> dict[str, Security]:
        """Retrieve securities keyed by ID."""
        if not security_ids:
            return {}
        with storage_errors(self._db, "get_securities", count=len(security_ids)):
            orm_secs = self._db.query(SecurityORM).filter(
                SecurityORM.security_id.in_(security_ids)
            ).all()
            return {s.security_id: self._to_domain(s) for s in orm_secs}

    def list_all(self, active_only: bool = False) -> list[Security]:
        """List securities ordered by ticker."""
        with storage_errors(self._db, "list_securities", active_only=active_only):
            query = self._db.query(SecurityORM)
            if active_only:
                query = query.filter(SecurityORM.is_active == True)  # noqa: E712
            return [self._to_domain(s) for s in query.order_by(SecurityORM.ticker).all()]

    @staticmethod
    def _to_domain(orm: SecurityORM) -> Security:
        """Convert ORM model to domain model."""
        return Security(
            security_id=orm.security_id,
            ticker=orm.ticker,
            company_name=orm.company_name or "",
            sector=orm.sector,
            listed_in=orm.listed_in,
            is_active=bool(orm.is_active),
        )

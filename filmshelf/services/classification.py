"""Lookup of classification (MPA rating) labels."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from filmshelf.core.exceptions import NotFoundError
from filmshelf.models import Classification
from filmshelf.services.models import ClassificationLabel


class ClassificationResolver:
    def resolve(self, session: Session, classification_id: int) -> ClassificationLabel:
        row = session.get(Classification, classification_id)
        if row is None:
            raise NotFoundError(f"classification {classification_id} not found")
        return ClassificationLabel(id=row.id, name=row.name)

    def list_all(self, session: Session) -> list[ClassificationLabel]:
        query = select(Classification).order_by(Classification.id)
        return [
            ClassificationLabel(id=row.id, name=row.name)
            for row in session.execute(query).scalars()
        ]

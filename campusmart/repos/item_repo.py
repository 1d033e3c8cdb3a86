# campusmart/repos/item_repo.py
from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from campusmart.data.models.item import ItemModel


class ItemRepo:
    """Odczyt katalogu, bez zapisu."""

    def __init__(self, db: Session):
        self.db = db

    def get_item(self, item_id: int) -> ItemModel | None:
        return self.db.get(ItemModel, item_id)

    def get_items(self, item_ids: Iterable[int]) -> Dict[int, ItemModel]:
        ids = set(item_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ItemModel).where(ItemModel.id.in_(ids))
        ).scalars().all()
        return {item.id: item for item in rows}

# campusmart/repos/cart_repo.py
from typing import Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from campusmart.data.models.cart_line import CartLineModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_line(self, user_id: int, item_id: int) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.user_id == user_id,
                CartLineModel.item_id == item_id,
            )
        ).scalar_one_or_none()

    def list_lines(self, user_id: int) -> List[CartLineModel]:
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.user_id == user_id)
                .order_by(CartLineModel.added_at.desc(), CartLineModel.id.desc())
            ).scalars().all()
        )

    def get_lines_by_ids(self, user_id: int, line_ids: Iterable[int]) -> List[CartLineModel]:
        # filtr po user_id: cudze pozycje po prostu nie wracaja
        ids = set(line_ids)
        if not ids:
            return []
        return list(
            self.db.execute(
                select(CartLineModel)
                .where(CartLineModel.user_id == user_id, CartLineModel.id.in_(ids))
                .order_by(CartLineModel.added_at.desc(), CartLineModel.id.desc())
            ).scalars().all()
        )

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.commit()
        self.db.refresh(line)
        return line

    def delete_line(self, line: CartLineModel) -> None:
        self.db.delete(line)
        self.db.commit()

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartLineModel).where(CartLineModel.user_id == user_id)
        )
        self.db.commit()
        return result.rowcount

    def commit(self):
        self.db.commit()

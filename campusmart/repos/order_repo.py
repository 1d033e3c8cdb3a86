# campusmart/repos/order_repo.py
from typing import Iterable, List

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from campusmart.data.models.cart_line import CartLineModel
from campusmart.data.models.order import OrderModel, OrderLineModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order_with_lines(
        self,
        order: OrderModel,
        lines: List[OrderLineModel],
        consumed_cart_line_ids: Iterable[int] = (),
    ) -> OrderModel:
        """
        Naglowek + pozycje (+ usuniecie skonsumowanych pozycji koszyka)
        w jednej transakcji. Blad na dowolnym insercie = rollback calosci.
        """
        try:
            self.db.add(order)
            self.db.flush()

            for line in lines:
                line.order_id = order.id
                self.db.add(line)
            self.db.flush()

            cart_ids = set(consumed_cart_line_ids)
            if cart_ids:
                result = self.db.execute(
                    delete(CartLineModel).where(CartLineModel.id.in_(cart_ids))
                )
                # pozycje skonsumowane w miedzyczasie przez inne zamowienie
                if result.rowcount != len(cart_ids):
                    raise StaleDataError(
                        f"Expected to delete {len(cart_ids)} cart line(s), deleted {result.rowcount}"
                    )

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        # bez refresh: expire_on_commit=False, stan po commicie jest w obiekcie
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_with_lines(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(
                selectinload(OrderModel.lines).joinedload(OrderLineModel.item),
                selectinload(OrderModel.buyer),
                selectinload(OrderModel.seller),
            )
            .where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def _newest_first(self, *criteria) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.buyer), selectinload(OrderModel.seller))
                .where(*criteria)
                .order_by(OrderModel.order_date.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def list_for_buyer(self, user_id: int) -> List[OrderModel]:
        return self._newest_first(OrderModel.buyer_id == user_id)

    def list_for_seller(self, user_id: int) -> List[OrderModel]:
        return self._newest_first(OrderModel.seller_id == user_id)

    def list_between(self, user_a: int, user_b: int) -> List[OrderModel]:
        return self._newest_first(
            or_(
                and_(OrderModel.buyer_id == user_a, OrderModel.seller_id == user_b),
                and_(OrderModel.buyer_id == user_b, OrderModel.seller_id == user_a),
            )
        )

    def update_order_status(self, order: OrderModel, status: str) -> OrderModel:
        try:
            order.status = status
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

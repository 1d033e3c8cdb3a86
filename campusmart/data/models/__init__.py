#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from campusmart.data.models.user import UserModel
from campusmart.data.models.item import ItemModel
from campusmart.data.models.cart_line import CartLineModel
from campusmart.data.models.order import OrderModel, OrderLineModel
from campusmart.data.models.message import MessageModel

__all__ = ["UserModel", "ItemModel", "CartLineModel", "OrderModel", "OrderLineModel", "MessageModel"]

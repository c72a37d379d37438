from market.models.user import User, UserRole, UserStatus
from market.models.category import Grade, Item, ItemCategory, Kind, KindGrade
from market.models.product import ImageType, Product, ProductImage
from market.models.order import Order, OrderProduct, OrderStatus

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "ItemCategory",
    "Item",
    "Kind",
    "Grade",
    "KindGrade",
    "Product",
    "ProductImage",
    "ImageType",
    "Order",
    "OrderProduct",
    "OrderStatus",
]

# provide dataclass models

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Role(str, Enum):
    GUEST = "GUEST"
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


class OrderStatus(str, Enum):
    # declaration order is the delivery progression
    PLACED = "Placed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    OUT_FOR_DELIVERY = "Out_for_Delivery"
    DELIVERED = "Delivered"


class SyncState(str, Enum):
    PENDING = "pending"  # recorded locally only
    CONFIRMED = "confirmed"  # acknowledged by (or fetched from) the backend


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    category: str
    description: str = ""
    image: str = ""
    rating: float = 0.0
    stock: int = 0
    features: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CartLine:
    product: Product
    quantity: int

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def price(self) -> float:
        return self.product.price

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class Order:
    id: str
    customer_name: str
    customer_email: str
    items: Tuple[CartLine, ...]
    total: float
    date: str
    status: OrderStatus = OrderStatus.PLACED
    sync: SyncState = SyncState.PENDING

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)


@dataclass(frozen=True)
class CustomerIdentity:
    name: str
    email: str


@dataclass(frozen=True)
class ChatTurn:
    role: str  # "user" or "model"
    text: str

"""Shopping cart kept in the visitor's browser session.

The cart is a list of (product snapshot, quantity) pairs. Every mutation
writes the whole list under ``CART_STORAGE_KEY`` in whatever mapping the
store was given (the Flask session in the app). Only the fields the cart
rules need (id, price, stock, quantity) are stored, since the session
lives in a size-limited cookie; names and images are filled back in from
the catalog with ``fill_details``. A store built without storage is
disabled: it is neither loaded nor persisted, which is how staff sessions
get a cart that never sticks.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, MutableMapping, Optional

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = 'fasttrack-cart'


def _coerce_price(value) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(price) or math.isinf(price) or price < 0:
        return 0.0
    return price


def _coerce_stock(value) -> int:
    if isinstance(value, bool):
        return 0
    try:
        stock = int(value)
    except (TypeError, ValueError):
        return 0
    return max(stock, 0)


@dataclass
class ProductSnapshot:
    """Copy of the product fields a cart needs.

    Price and stock are normalised here, so the rest of the cart can treat
    them as non-negative numbers.
    """

    id: int
    name: Optional[str] = None
    price: float = 0.0
    stock_quantity: int = 0
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProductSnapshot':
        if not isinstance(data, dict) or data.get('id') is None:
            raise ValueError('product snapshot needs an id')
        if isinstance(data['id'], bool):
            raise ValueError('product id must be an integer')
        return cls(
            id=int(data['id']),
            name=data.get('name'),
            price=_coerce_price(data.get('price')),
            stock_quantity=_coerce_stock(data.get('stock_quantity')),
            image_url=data.get('image_url'),
        )

    @classmethod
    def from_product(cls, product) -> 'ProductSnapshot':
        """Build a snapshot from a Product row, a product dict or a snapshot."""
        if isinstance(product, cls):
            return product
        if isinstance(product, dict):
            return cls.from_dict(product)
        return cls.from_dict({
            'id': product.id,
            'name': product.name,
            'price': product.price,
            'stock_quantity': product.stock_quantity,
            'image_url': product.image_url,
        })

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'stock_quantity': self.stock_quantity,
            'image_url': self.image_url,
        }

    def to_storage(self) -> Dict[str, Any]:
        """The fields kept in the session; name and image come from the catalog."""
        return {'id': self.id, 'price': self.price, 'stock_quantity': self.stock_quantity}


@dataclass
class CartItem:
    product: ProductSnapshot
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartItem':
        if not isinstance(data, dict):
            raise ValueError('cart line must be an object')
        quantity = data.get('quantity')
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValueError('cart quantity must be a positive integer')
        return cls(product=ProductSnapshot.from_dict(data.get('product')), quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {'product': self.product.to_dict(), 'quantity': self.quantity}

    def to_storage(self) -> Dict[str, Any]:
        return {'product': self.product.to_storage(), 'quantity': self.quantity}


def parse_cart(raw) -> List[CartItem]:
    """Parse a serialized cart (JSON text or an already decoded list).

    Lines for the same product are merged. Raises ValueError when the
    payload is not a well-formed cart.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f'cart is not valid JSON: {exc}') from exc
    if not isinstance(raw, list):
        raise ValueError('cart must be a list')

    merged: Dict[int, CartItem] = {}
    for entry in raw:
        item = CartItem.from_dict(entry)
        existing = merged.get(item.product.id)
        if existing:
            existing.quantity += item.quantity
        else:
            merged[item.product.id] = item
    return list(merged.values())


class CartStore:
    """The active session's cart."""

    def __init__(self, storage: Optional[MutableMapping] = None, items=None,
                 max_lines: Optional[int] = None):
        self._storage = storage
        self._items: List[CartItem] = list(items or [])
        self.max_lines = max_lines

    @classmethod
    def load(cls, storage: Optional[MutableMapping], max_lines: Optional[int] = None) -> 'CartStore':
        """Rehydrate from storage. A malformed snapshot yields an empty cart."""
        if storage is None:
            return cls(max_lines=max_lines)
        raw = storage.get(CART_STORAGE_KEY)
        if raw is None:
            return cls(storage, max_lines=max_lines)
        try:
            items = parse_cart(raw)
        except (TypeError, ValueError) as exc:
            logger.warning('Discarding malformed cart snapshot: %s', exc)
            storage.pop(CART_STORAGE_KEY, None)
            items = []
        return cls(storage, items, max_lines)

    @property
    def enabled(self) -> bool:
        return self._storage is not None

    @property
    def is_full(self) -> bool:
        """True when no further distinct product can be added."""
        return self.max_lines is not None and len(self._items) >= self.max_lines

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self):
        return len(self._items)

    def _index(self, product_id) -> Optional[int]:
        product_id = int(product_id)
        for index, item in enumerate(self._items):
            if item.product.id == product_id:
                return index
        return None

    def _flush(self):
        if self._storage is not None:
            self._storage[CART_STORAGE_KEY] = [item.to_storage() for item in self._items]

    def add(self, product) -> bool:
        """Add one unit, never going past the product's stock.

        ``product`` carries the current stock; its snapshot replaces the
        stored one. A new product is refused once the cart holds
        ``max_lines`` products. Returns True if the cart changed.
        """
        snapshot = ProductSnapshot.from_product(product)
        index = self._index(snapshot.id)
        if index is None:
            if snapshot.stock_quantity <= 0 or self.is_full:
                return False
            self._items.append(CartItem(product=snapshot, quantity=1))
            self._flush()
            return True

        item = self._items[index]
        item.product = snapshot
        quantity = min(item.quantity + 1, snapshot.stock_quantity)
        if quantity <= 0:
            del self._items[index]
        elif quantity == item.quantity:
            self._flush()
            return False
        else:
            item.quantity = quantity
        self._flush()
        return True

    def remove(self, product_id) -> bool:
        index = self._index(product_id)
        if index is None:
            return False
        del self._items[index]
        self._flush()
        return True

    def decrement(self, product_id) -> bool:
        index = self._index(product_id)
        if index is None:
            return False
        item = self._items[index]
        if item.quantity <= 1:
            del self._items[index]
        else:
            item.quantity -= 1
        self._flush()
        return True

    def set_quantity(self, product_id, quantity) -> bool:
        """Set a line's quantity, clamped to stock; zero or less removes it."""
        quantity = int(quantity)
        if quantity <= 0:
            return self.remove(product_id)
        index = self._index(product_id)
        if index is None:
            return False
        item = self._items[index]
        quantity = min(quantity, item.product.stock_quantity)
        if quantity <= 0:
            del self._items[index]
        elif quantity == item.quantity:
            return False
        else:
            item.quantity = quantity
        self._flush()
        return True

    def clear(self):
        """Empty the cart and erase the persisted snapshot."""
        self._items = []
        if self._storage is not None:
            self._storage.pop(CART_STORAGE_KEY, None)

    def product_ids(self) -> List[int]:
        return [item.product.id for item in self._items]

    def fill_details(self, products):
        """Copy name and image from catalog rows onto the matching lines.

        Price and stock stay as snapshotted; lines with no matching row
        keep whatever they had.
        """
        by_id = {product.id: product for product in products}
        for item in self._items:
            product = by_id.get(item.product.id)
            if product is not None:
                item.product.name = product.name
                item.product.image_url = product.image_url

    def quantity_of(self, product_id) -> int:
        index = self._index(product_id)
        return self._items[index].quantity if index is not None else 0

    def total(self) -> float:
        return sum(item.subtotal for item in self._items)

    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def to_list(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self._items]

    def to_json(self) -> str:
        return json.dumps(self.to_list())

    def __repr__(self):
        return f'<CartStore {self.item_count()} items>'

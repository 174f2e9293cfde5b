# cart.py
from typing import Any, Callable, Dict, List

from models import CartLine, Product


class OutOfStockError(ValueError):
    pass


class Cart:
    """
    Shopping cart: product_id -> CartLine, in the order lines were first added.

    Name/price are taken from the Product when a line is added or the cart is
    rebuilt from the session; only ids and quantities are persisted.
    """

    def __init__(self):
        self._lines: Dict[str, CartLine] = {}

    def add(self, product: Product, quantity: int = 1) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be >= 1.")
        if not product.in_stock:
            raise OutOfStockError(f"{product.name} is out of stock.")

        line = self._lines.get(product.id)
        if line is None:
            line = CartLine(
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=quantity,
                image_url=product.image_url,
            )
            self._lines[product.id] = line
        else:
            line.quantity += quantity
        return line

    def increase(self, product_id: str) -> None:
        if product_id in self._lines:
            self._lines[product_id].quantity += 1

    def decrease(self, product_id: str) -> None:
        """Drop one unit; the line disappears when it reaches zero."""
        line = self._lines.get(product_id)
        if line is None:
            return
        line.quantity -= 1
        if line.quantity <= 0:
            del self._lines[product_id]

    def remove(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def total_price(self) -> float:
        return round(sum(line.subtotal for line in self._lines.values()), 2)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [line.to_dict() for line in self.lines],
            "total_items": self.total_items,
            "total_price": self.total_price,
        }

    def to_session(self) -> List[List[Any]]:
        """Minimal form for the session cookie: [[product_id, quantity], ...]."""
        return [[line.product_id, line.quantity] for line in self.lines]

    @staticmethod
    def from_session(raw_lines: Any, get_product: Callable[[str], Product]) -> "Cart":
        """
        Rebuild a cart from to_session() output. Name, price and image come from
        `get_product`; malformed lines and products it cannot find are skipped.
        """
        cart = Cart()
        for raw_line in raw_lines or []:
            try:
                product_id, quantity = str(raw_line[0]), int(raw_line[1])
            except (IndexError, KeyError, TypeError, ValueError):
                continue
            if quantity < 1:
                continue
            try:
                product = get_product(product_id)
            except LookupError:
                continue
            cart._lines[product_id] = CartLine(
                product_id=product_id,
                name=product.name,
                price=product.price,
                quantity=quantity,
                image_url=product.image_url,
            )
        return cart

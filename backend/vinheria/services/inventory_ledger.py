import logging
from typing import Any, List, Optional
from sqlalchemy import case, delete, func, select, update
from sqlalchemy.orm import Session
from vinheria.core.exceptions import InvalidInput, NotFound
from vinheria.models.product import Product

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND_MESSAGE = "Product not found"

# Stock loaded into an empty ledger on first start
SEED_PRODUCTS = (
    ("Tinto Reserva", 12),
    ("Branco Seco", 8),
    ("Rosé Suave", 5),
)


# Largest value a signed 64-bit INTEGER column holds
MAX_QUANTITY = 2**63 - 1


def coerce_quantity(value: Any) -> int:
    """
    Turn form input into a starting quantity.

    Missing or non-numeric values become 0, fractions are truncated and
    negatives are clamped to 0. Values the quantity column cannot store
    raise InvalidInput.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        try:
            quantity = int(float(value))
        except OverflowError:
            raise InvalidInput("Quantity is too large")
        except (TypeError, ValueError):
            return 0
    if quantity > MAX_QUANTITY:
        raise InvalidInput("Quantity is too large")
    return max(quantity, 0)


class InventoryLedger:
    """Shared stock ledger.

    Every mutation is one UPDATE/INSERT/DELETE statement so concurrent
    requests on the same row cannot lose updates.
    """

    @staticmethod
    def list(db: Session) -> List[Product]:
        """All products in creation order"""
        return list(db.scalars(select(Product).order_by(Product.id)))

    @staticmethod
    def get(db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if product is None:
            raise NotFound(PRODUCT_NOT_FOUND_MESSAGE)
        return product

    @staticmethod
    def add(db: Session, name: Optional[str], quantity: Any = None) -> int:
        """Create a product and return its id"""
        clean_name = (name or "").strip()
        if not clean_name:
            raise InvalidInput("Product name is required")

        product = Product(name=clean_name, quantity=coerce_quantity(quantity))
        db.add(product)
        db.commit()
        db.refresh(product)
        logger.info(f"Added product {product.id} with quantity {product.quantity}")
        return product.id

    @staticmethod
    def increment(db: Session, product_id: int) -> None:
        result = db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(quantity=Product.quantity + 1)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        if result.rowcount == 0:
            raise NotFound(PRODUCT_NOT_FOUND_MESSAGE)

    @staticmethod
    def decrement(db: Session, product_id: int) -> None:
        # Floor at zero inside the statement; a row already at 0 still
        # matches, so only a missing id reports NotFound
        result = db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(quantity=case((Product.quantity > 0, Product.quantity - 1), else_=0))
            .execution_options(synchronize_session=False)
        )
        db.commit()
        if result.rowcount == 0:
            raise NotFound(PRODUCT_NOT_FOUND_MESSAGE)

    @staticmethod
    def delete(db: Session, product_id: int) -> None:
        """Remove a product; deleting a missing id does nothing"""
        result = db.execute(
            delete(Product)
            .where(Product.id == product_id)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        if result.rowcount:
            logger.info(f"Deleted product {product_id}")

    @staticmethod
    def seed_if_empty(db: Session) -> bool:
        """Load the starter stock when the table is empty. Returns True if it seeded."""
        count = db.scalar(select(func.count()).select_from(Product))
        if count:
            return False
        db.add_all(Product(name=name, quantity=quantity) for name, quantity in SEED_PRODUCTS)
        db.commit()
        logger.info(f"Seeded {len(SEED_PRODUCTS)} products into empty inventory")
        return True


inventory_ledger = InventoryLedger()

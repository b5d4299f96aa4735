from sqlalchemy import CheckConstraint, Column, Integer, String
from vinheria.core.database import Base


class Product(Base):
    """
    Product model representing one line of the shared stock ledger.

    Products are not owned by any user; every authenticated user sees and
    mutates the same rows.
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
    )

    # Autoincrement id doubles as creation order for listing
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=0, server_default="0")

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name!r}, quantity={self.quantity})>"

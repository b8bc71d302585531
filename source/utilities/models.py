"""SQLAlchemy ORM models for products, shops, couriers and orders."""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Date,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
)
from sqlalchemy.orm import declarative_base, relationship

from utilities.entities import OrderStatus

Base = declarative_base()


class ProductModel(Base):
    """
    Product row; the id is assigned by the user.
    """

    __tablename__ = "product"
    __table_args__ = (CheckConstraint("price > 0", name="ck_product_price"),)

    product_id = Column("id_product", Integer, primary_key=True, autoincrement=False)
    price = Column(Numeric(12, 2), nullable=False)

    # Relationship with shops
    shops = relationship("ShopModel", back_populates="product")

    def __repr__(self):
        return f"<Product(id={self.product_id}, price={self.price})>"


class ShopModel(Base):
    """
    Shop row referencing the product it sells; the id is assigned by the user.
    """

    __tablename__ = "shop"
    __table_args__ = (
        CheckConstraint("rate_shop >= 0 AND rate_shop <= 5", name="ck_shop_rate"),
    )

    shop_id = Column("id_shop", Integer, primary_key=True, autoincrement=False)
    rating = Column("rate_shop", Float, nullable=False)
    product_id = Column(
        "id_product", Integer, ForeignKey("product.id_product"), nullable=False
    )

    # Relationship with product and orders
    product = relationship("ProductModel", back_populates="shops")
    orders = relationship("OrderModel", back_populates="shop")

    def __repr__(self):
        return f"<Shop(id={self.shop_id}, rating={self.rating}, product_id={self.product_id})>"


class CourierModel(Base):
    """
    Courier row; the id is generated by the database.
    """

    __tablename__ = "courier"
    __table_args__ = (
        CheckConstraint(
            "rate_courier >= 0 AND rate_courier <= 5", name="ck_courier_rate"
        ),
    )

    courier_id = Column("id_courier", Integer, primary_key=True, autoincrement=True)
    rating = Column("rate_courier", Float, nullable=False)

    # Relationship with orders
    orders = relationship("OrderModel", back_populates="courier")

    def __repr__(self):
        return f"<Courier(id={self.courier_id}, rating={self.rating})>"


class OrderModel(Base):
    """
    Order row placed by a client at a shop and delivered by a courier.
    """

    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("summ_order > 0", name="ck_orders_summ"),
        CheckConstraint(
            "time_create >= 0 AND time_create <= 86400", name="ck_orders_time"
        ),
    )

    order_id = Column("id_order", Integer, primary_key=True, autoincrement=True)
    client_id = Column("id_client", Integer, nullable=False)
    shop_id = Column("id_shop", Integer, ForeignKey("shop.id_shop"), nullable=False)
    summ = Column("summ_order", BigInteger, nullable=False)
    status = Column(
        Enum(
            OrderStatus,
            native_enum=False,
            create_constraint=True,
            name="ck_orders_status",
            length=20,
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
    )
    created_date = Column("date_create_order", Date, nullable=False)
    created_time = Column("time_create", Integer, nullable=False)
    courier_id = Column(
        "id_courier", Integer, ForeignKey("courier.id_courier"), nullable=False
    )

    # Relationship with shop and courier
    shop = relationship("ShopModel", back_populates="orders")
    courier = relationship("CourierModel", back_populates="orders")

    def __repr__(self):
        return f"<Order(id={self.order_id}, shop_id={self.shop_id}, status='{self.status}')>"

from sqlalchemy import Column, Integer, String, Numeric, Text

from freshbulk.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    unit = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)

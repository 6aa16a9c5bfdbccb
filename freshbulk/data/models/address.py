from sqlalchemy import Column, Integer, String, Boolean, Text

from freshbulk.data.database import Base


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    # klucz wlasciciela to email, nie user_id (zamowienia gosci)
    customer_email = Column(String(254), nullable=False, index=True)
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(20), nullable=False)

    address_line = Column(Text, nullable=False)
    city = Column(String(100), nullable=False)
    postal_code = Column(String(12), nullable=False)

    is_default = Column(Boolean, nullable=False, default=False)

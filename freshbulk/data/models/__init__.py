#import wszystkich modeli zeby SQLAlchemy zarejestrowal je w Base.metadata

from freshbulk.data.models.product import ProductModel
from freshbulk.data.models.order import OrderModel
from freshbulk.data.models.address import AddressModel
from freshbulk.data.models.user import UserModel

__all__ = ["ProductModel", "OrderModel", "AddressModel", "UserModel"]

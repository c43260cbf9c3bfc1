from .storage import PosRecord
from .inventory import Product
from .sales import PaymentMethod, CartLine, SaleItem, Sale, ItemBreakdown, SalesBreakdown
from .shifts import Shift

__all__ = [
    'PosRecord',
    'Product',
    'PaymentMethod', 'CartLine', 'SaleItem', 'Sale', 'ItemBreakdown', 'SalesBreakdown',
    'Shift',
]

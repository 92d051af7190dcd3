from .dto import CustomerCreateIn, CustomerOut, CustomerUpdateIn
from .service import CustomerService

__all__ = ["CustomerService", "CustomerCreateIn", "CustomerUpdateIn", "CustomerOut"]

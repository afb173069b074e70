"""Commerce platform clients, GraphQL documents and response mappers."""
from .client import StorefrontClient
from .customer import CustomerAccountClient, SessionCustomer

__all__ = [
    "CustomerAccountClient",
    "SessionCustomer",
    "StorefrontClient",
]

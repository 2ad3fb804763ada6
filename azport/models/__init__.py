from azport.models.category import Category
from azport.models.job_opening import JobOpening
from azport.models.product import Product
from azport.models.user import User

__all__ = [
    "Category",
    "JobOpening",
    "Product",
    "User",
]

"""
Read-only projections returned by the query functions.

Each model lists exactly the columns its query selects.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ShoppingItem(BaseModel):
    name: str
    price: Decimal
    category: str


class ShoppingItemName(BaseModel):
    name: str


class RecentItem(BaseModel):
    name: str
    date_added: datetime


class CategoryTotal(BaseModel):
    """SUM(price) for one shopping list category"""

    category: str
    total: Decimal


class Product(BaseModel):
    product_id: int
    name: str
    price: Decimal
    category: str


class ProductWithImage(Product):
    image: str


class VideoViews(BaseModel):
    """View count for one (video_name, region) group"""

    video_name: str
    region: str
    views: int

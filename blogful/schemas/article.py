from datetime import datetime

from pydantic import BaseModel


class ArticleCreate(BaseModel):
    """Schema for creating an article"""

    title: str
    content: str | None = None
    date_published: datetime


class ArticleUpdate(BaseModel):
    """Schema for updating an article; unset fields are left untouched"""

    title: str | None = None
    content: str | None = None
    date_published: datetime | None = None


class Article(BaseModel):
    """A persisted row of blogful_articles"""

    id: int
    title: str
    content: str | None
    date_published: datetime

    class Config:
        from_attributes = True

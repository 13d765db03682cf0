from datetime import datetime

from pydantic import BaseModel, Field, field_validator

BLOG_STATUSES = ("draft", "scheduled", "published")


def split_terms(value) -> list[str]:
    """'a, b,,c' -> ['a', 'b', 'c']. Liste gelirse elemanlari temizlenir."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if str(v).strip()]


class BlogCreate(BaseModel):
    """
    Blog yazisi olusturma.
    action=draft ise yazi taslak kalir, publish ise yayinlanir
    (ileri bir tarih verilmisse zamanlanir).
    """
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    summary: str = Field(default="", max_length=1000)
    image: str | None = None
    tags: list[str] = []
    locations: list[str] = []
    publish_type: str = Field(default="automatic", pattern="^(automatic|setDate)$")
    publish_date: datetime | None = None
    action: str = Field(default="publish", pattern="^(draft|publish)$")

    @field_validator("tags", "locations", mode="before")
    @classmethod
    def _split(cls, v):
        return split_terms(v)


class BlogUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    summary: str | None = Field(default=None, max_length=1000)
    image: str | None = None
    tags: list[str] | None = None
    locations: list[str] | None = None
    publish_type: str | None = Field(default=None, pattern="^(automatic|setDate)$")
    publish_date: datetime | None = None
    action: str | None = Field(default=None, pattern="^(draft|publish)$")

    @field_validator("tags", "locations", mode="before")
    @classmethod
    def _split(cls, v):
        if v is None:
            return None
        return split_terms(v)


class BlogAuthor(BaseModel):
    id: str
    name: str
    email: str


class BlogResponse(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    summary: str = ""
    image: str | None = None
    tags: list[str] = []
    locations: list[str] = []
    publish_type: str
    publish_date: datetime | None = None
    status: str
    scheduled_publish: bool = False
    author: BlogAuthor
    views: int = 0
    created_at: datetime
    updated_at: datetime | None = None

import datetime
from typing import Annotated, Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from blogcore.utils import calculate_reading_time

DATE_FIELDS = ("publishDate", "updatedDate")

Tag = Annotated[str, StringConstraints(min_length=1)]


def parse_date(value: Any) -> datetime.date:
    """Coerce a frontmatter value into a calendar date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.date.fromisoformat(text)
        except ValueError:
            pass
        try:
            # "Z" suffix is only understood by fromisoformat from 3.11 on
            return datetime.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            raise ValueError(f"'{value}' is not a valid calendar date") from None
    raise ValueError(f"expected a date, got {type(value).__name__}")


class PostFrontmatter(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    publishDate: datetime.date
    updatedDate: Optional[datetime.date] = None
    tags: Tuple[Tag, ...] = ()
    draft: bool = False
    ogImage: Optional[str] = None
    coverImage: Optional[str] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("publishDate", "updatedDate", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        if value is None:
            return value
        return parse_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value):
        return tuple(dict.fromkeys(value))


class PostSummary(BaseModel):
    slug: str
    title: str
    description: str
    publishDate: datetime.date
    updatedDate: Optional[datetime.date] = None
    tags: List[str] = Field(default_factory=list)
    draft: bool = False
    ogImage: Optional[str] = None
    coverImage: Optional[str] = None
    readingTime: Optional[str] = None


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    frontmatter: PostFrontmatter
    body: str = ""  # raw Markdown/MDX without the frontmatter block
    source_path: Optional[str] = None

    @property
    def publish_date(self) -> datetime.date:
        return self.frontmatter.publishDate

    @property
    def draft(self) -> bool:
        return self.frontmatter.draft

    @property
    def tags(self) -> Tuple[str, ...]:
        return self.frontmatter.tags

    @property
    def reading_time(self) -> str:
        return calculate_reading_time(self.body)

    def has_tag(self, tag: str) -> bool:
        return tag in self.frontmatter.tags

    def to_summary(self) -> PostSummary:
        fm = self.frontmatter
        return PostSummary(
            slug=self.slug,
            title=fm.title,
            description=fm.description,
            publishDate=fm.publishDate,
            updatedDate=fm.updatedDate,
            tags=list(fm.tags),
            draft=fm.draft,
            ogImage=fm.ogImage,
            coverImage=fm.coverImage,
            readingTime=self.reading_time,
        )


class PostPage(BaseModel):
    """One page of a paginated post listing."""

    items: List[Post] = Field(default_factory=list)
    page: int
    per_page: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

"""
Post Query Engine: pure transformations over sequences of posts.

None of these functions mutate their input; each returns a new list.
"""

import math
from typing import Dict, Iterable, List, Optional, Sequence

from blogcore.schemas.post import Post, PostPage, PostSummary


def filter_published(posts: Iterable[Post]) -> List[Post]:
    """Drop every draft post."""
    return [post for post in posts if not post.draft]


def visible_posts(posts: Iterable[Post], include_drafts: bool = False) -> List[Post]:
    """
    Posts a listing may show. Drafts are only kept when the caller asks for
    them explicitly, e.g. for a preview deployment.
    """
    if include_drafts:
        return list(posts)
    return filter_published(posts)


def sort_by_date(posts: Iterable[Post], descending: bool = True) -> List[Post]:
    """Order by publishDate; posts published the same day are ordered by slug."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    # sorted() is stable, also with reverse=True
    return sorted(by_slug, key=lambda p: p.publish_date, reverse=descending)


def take(posts: Sequence[Post], n: int) -> List[Post]:
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    return list(posts[:n])


def filter_by_tag(posts: Iterable[Post], tag: str) -> List[Post]:
    return [post for post in posts if post.has_tag(tag)]


def group_by_tag(
    posts: Iterable[Post], include_drafts: bool = False
) -> Dict[str, List[Post]]:
    """Map each tag to the visible posts carrying it, in input order."""
    groups: Dict[str, List[Post]] = {}
    for post in visible_posts(posts, include_drafts):
        for tag in post.tags:
            groups.setdefault(tag, []).append(post)
    return groups


def tag_counts(posts: Iterable[Post], include_drafts: bool = False) -> Dict[str, int]:
    groups = group_by_tag(posts, include_drafts)
    return {tag: len(group) for tag, group in groups.items()}


def find_by_slug(posts: Iterable[Post], slug: str) -> Optional[Post]:
    return next((post for post in posts if post.slug == slug), None)


def paginate(posts: Sequence[Post], page: int, per_page: int) -> PostPage:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if per_page < 1:
        raise ValueError(f"per_page must be >= 1, got {per_page}")

    total = len(posts)
    total_pages = max(1, math.ceil(total / per_page))
    start = (page - 1) * per_page
    return PostPage(
        items=list(posts[start : start + per_page]),
        page=page,
        per_page=per_page,
        total_items=total,
        total_pages=total_pages,
    )


def summarize(posts: Iterable[Post]) -> List[PostSummary]:
    return [post.to_summary() for post in posts]

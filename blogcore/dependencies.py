from typing import Optional

from blogcore.db.couchdb import get_couch
from blogcore.repos.file_repo import FilesystemPostsRepo
from blogcore.repos.posts_repo import CouchPostsRepo
from blogcore.services.post_store import PostStore
from blogcore.settings import Settings, settings


def get_posts_repo(current_settings: Optional[Settings] = None):
    current_settings = current_settings or settings
    if current_settings.CONTENT_BACKEND == "couchdb":
        couch_db, parser = get_couch(current_settings)
        return CouchPostsRepo(
            couch_db,
            parser,
            prefix=current_settings.BLOG_PREFIX,
            timeout=current_settings.STORE_TIMEOUT_SECONDS,
        )
    return FilesystemPostsRepo(
        current_settings.CONTENT_DIR, current_settings.content_extensions
    )


def get_post_store(current_settings: Optional[Settings] = None) -> PostStore:
    current_settings = current_settings or settings
    return PostStore(
        get_posts_repo(current_settings), strict=current_settings.STRICT_LOAD
    )

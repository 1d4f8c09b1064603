import logging
from typing import BinaryIO

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.db_wait import ping
from core.errors import PersistenceError
from core.models.post import Post
from core.schemas import PostCreate
from core.storage import FileStore

logger = logging.getLogger("posts")


def _backend_unavailable(db: Session, e: SQLAlchemyError) -> bool:
    if isinstance(e, DBAPIError) and e.connection_invalidated:
        return True
    if not isinstance(e, OperationalError):
        return False
    # missing tables, locks and a full disk are OperationalErrors on a live backend
    try:
        ping(db.get_bind())
    except SQLAlchemyError:
        return True
    return False


def create_post(
    db: Session,
    store: FileStore,
    *,
    image: BinaryIO,
    filename: str | None,
    caption: str | None,
) -> Post:
    """
    Store the image, then insert a Post pointing at it.

    The two writes are not atomic: if the insert fails the stored file is
    left in place and logged as orphaned.
    """
    name = store.save(image, filename)
    data = PostCreate(caption=caption, image_url=store.url_for(name))

    post = Post(caption=data.caption, image_url=data.image_url)
    try:
        db.add(post)
        db.commit()
        db.refresh(post)
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Orphaned upload %s: post insert failed", store.path_for(name))
        raise PersistenceError(
            "Could not save post",
            unavailable=_backend_unavailable(db, e),
            details={"imageUrl": data.image_url},
        ) from e

    logger.info("Created post id=%s imageUrl=%s", post.id, post.image_url)
    return post


def list_posts(db: Session) -> list[Post]:
    try:
        return db.query(Post).order_by(Post.id.asc()).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(
            "Could not load posts",
            unavailable=_backend_unavailable(db, e),
        ) from e

from core.models.post import Post

__all__ = ["Post"]

from .base import Base
from .session import engine


def init_db(bind=None, drop: bool = False):
    """Create every table declared in backoffice.models."""
    import backoffice.models  # noqa: F401  register tables on Base.metadata

    bind = bind or engine
    if drop:
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)


__all__ = ["Base", "engine", "init_db"]

"""Ordered service-category reference data, loaded once per application."""
import logging
import threading
from typing import List, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.errors import PersistenceError
from models.category import Category

logger = logging.getLogger(__name__)


class CategoryCatalog:
    def __init__(self):
        self._categories: Optional[Tuple[dict, ...]] = None
        self._lock = threading.Lock()

    def list(self) -> List[dict]:
        """All categories by ascending display order."""
        cached = self._categories
        if cached is None:
            with self._lock:
                if self._categories is None:
                    loaded = self._load()
                    # an empty table means seeding has not run yet; retry next call
                    if loaded:
                        self._categories = loaded
                    cached = loaded
                else:
                    cached = self._categories
        return [dict(c) for c in cached]

    def invalidate(self) -> None:
        with self._lock:
            self._categories = None

    @staticmethod
    def _load() -> Tuple[dict, ...]:
        try:
            rows = Category.query.order_by(
                Category.display_order.asc(), Category.name.asc()
            ).all()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to load categories") from e
        logger.info("Loaded %d categories", len(rows))
        return tuple(c.to_dict() for c in rows)


def init_app(app):
    app.extensions["category_catalog"] = CategoryCatalog()


def get_catalog() -> CategoryCatalog:
    return current_app.extensions["category_catalog"]

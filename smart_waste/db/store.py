"""
Persistent store for waste items and categories.

WasteStore is constructed explicitly, opened when the application starts and
closed at shutdown. Request handlers receive it through FastAPI dependencies
(see api/deps.py) instead of reaching for a module-level connection.

Each operation runs in its own short-lived session. Any SQLAlchemy failure is
rolled back and re-raised as PersistenceError carrying a caller-facing message.
There is no locking or multi-statement transaction across requests; concurrent
writes to one row get only the atomicity the engine gives a single statement.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.errors import PersistenceError
from ..core.logger import get_logger
from ..models.schemas import Classification
from ..models.sql_models import Category, WasteItem
from .sqlalchemy import Base, build_engine, redact_url

logger = get_logger(__name__)

# (name, description, recycling_guidelines)
DEFAULT_CATEGORIES = (
    (
        "plastic",
        "Plastic waste materials",
        "Rinse containers before recycling. Check local guidelines for which plastics are accepted.",
    ),
    (
        "paper",
        "Paper and cardboard waste",
        "Keep paper dry and clean. Remove any non-paper components like plastic windows from envelopes.",
    ),
    (
        "metal",
        "Metal waste including aluminum and steel",
        "Rinse cans before recycling. Separate aluminum and steel if required by your local facility.",
    ),
    (
        "glass",
        "Glass bottles and jars",
        "Rinse containers and remove lids. Do not recycle broken glass or glassware in curbside bins.",
    ),
    (
        "organic",
        "Biodegradable waste like food scraps",
        "Compost fruit and vegetable scraps, eggshells, and coffee grounds. Avoid meat and dairy in home compost.",
    ),
)


# PUBLIC_INTERFACE
class WasteStore:
    """SQLAlchemy-backed access to the waste_items and categories tables."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Create the engine and session factory. Safe to call twice."""
        if self._engine is not None:
            return
        self._engine = build_engine(self.url, echo=self.echo)
        self._session_factory = sessionmaker(
            bind=self._engine, autocommit=False, autoflush=False, expire_on_commit=False, class_=Session
        )
        logger.info("Waste store opened.", extra={"url": redact_url(self.url), "echo": self.echo})

    def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Waste store closed.")

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise PersistenceError("Store is not open")
        return self._engine

    def create_schema(self) -> None:
        """Create both tables if they do not exist yet."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            logger.error("Schema creation failed", exc_info=exc)
            raise PersistenceError("Failed to initialize database") from exc

    def seed_categories(self) -> int:
        """Insert the fixed categories that are not present yet.

        Returns the number of rows inserted; 0 on every run after the first.
        """
        with self._session("Failed to seed categories") as db:
            existing = set(db.execute(select(Category.name)).scalars().all())
            missing = [
                Category(name=name, description=description, recycling_guidelines=guidelines)
                for name, description, guidelines in DEFAULT_CATEGORIES
                if name not in existing
            ]
            db.add_all(missing)
            db.commit()
        if missing:
            logger.info("Seeded categories", extra={"inserted": [c.name for c in missing]})
        return len(missing)

    def ping(self) -> None:
        """Run SELECT 1 to prove the database is reachable."""
        with self._session("Database unavailable") as db:
            db.execute(text("SELECT 1"))

    @contextmanager
    def _session(self, failure_message: str) -> Iterator[Session]:
        if self._session_factory is None:
            raise PersistenceError("Store is not open")
        db: Session = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Database error", exc_info=exc, extra={"failure": failure_message})
            raise PersistenceError(failure_message) from exc
        finally:
            db.close()

    # ------------------------------------------------------------------
    # Waste items
    # ------------------------------------------------------------------

    def list_waste_items(self) -> List[WasteItem]:
        with self._session("Failed to fetch waste items") as db:
            stmt = select(WasteItem).order_by(WasteItem.timestamp.desc(), WasteItem.id.desc())
            return list(db.execute(stmt).scalars().all())

    def get_waste_item(self, item_id: int) -> Optional[WasteItem]:
        with self._session("Failed to fetch waste item") as db:
            return db.get(WasteItem, item_id)

    def create_waste_item(self, image_path: str, classification: Classification) -> WasteItem:
        with self._session("Failed to save classification") as db:
            item = WasteItem(
                image_path=image_path,
                classification_result=classification.description,
                confidence=classification.confidence,
                category=classification.category,
            )
            db.add(item)
            db.commit()
            db.refresh(item)
            return item

    def update_waste_item(self, item_id: int, category: str, classification_result: str) -> int:
        """Update category and classification_result; return the number of matched rows."""
        with self._session("Failed to update waste item") as db:
            result = db.execute(
                update(WasteItem)
                .where(WasteItem.id == item_id)
                .values(category=category, classification_result=classification_result)
            )
            db.commit()
            return result.rowcount

    def delete_waste_item(self, item_id: int) -> int:
        with self._session("Failed to delete waste item") as db:
            result = db.execute(delete(WasteItem).where(WasteItem.id == item_id))
            db.commit()
            return result.rowcount

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self) -> List[Category]:
        with self._session("Failed to fetch categories") as db:
            return list(db.execute(select(Category).order_by(Category.id)).scalars().all())

    def create_category(
        self, name: str, description: Optional[str] = None, recycling_guidelines: Optional[str] = None
    ) -> Category:
        with self._session("Failed to create category") as db:
            category = Category(name=name, description=description, recycling_guidelines=recycling_guidelines)
            db.add(category)
            db.commit()
            db.refresh(category)
            return category

    def update_category(
        self,
        category_id: int,
        name: str,
        description: Optional[str] = None,
        recycling_guidelines: Optional[str] = None,
    ) -> int:
        with self._session("Failed to update category") as db:
            result = db.execute(
                update(Category)
                .where(Category.id == category_id)
                .values(name=name, description=description, recycling_guidelines=recycling_guidelines)
            )
            db.commit()
            return result.rowcount

    def delete_category(self, category_id: int) -> int:
        with self._session("Failed to delete category") as db:
            result = db.execute(delete(Category).where(Category.id == category_id))
            db.commit()
            return result.rowcount

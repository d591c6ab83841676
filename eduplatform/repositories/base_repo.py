from typing import TypeVar, Generic, Type, Optional, Any, Sequence

from sqlalchemy import select, delete, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eduplatform.model.base import Base

# Generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class with common CRUD operations.

    Usage:
        class BadgeRepository(BaseRepository[Badge]):
            def __init__(self, session: AsyncSession):
                super().__init__(Badge, session)
    """
    model: Type[ModelType]

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    # ==================== CREATE ====================

    async def create(self, obj_in: dict | ModelType, commit: bool = True) -> ModelType:
        """
        Create a new record.

        Args:
            obj_in: Dictionary or model instance with data to create
            commit: Commit immediately; otherwise only flush so the caller
                can finish its unit of work

        Returns:
            Created model instance
        """
        if isinstance(obj_in, dict):
            db_obj = self.model(**obj_in)
        else:
            db_obj = obj_in

        self.session.add(db_obj)
        if commit:
            await self.session.commit()
            await self.session.refresh(db_obj)
        else:
            await self.session.flush()
        return db_obj

    async def create_unique(self, obj_in: dict | ModelType) -> Optional[ModelType]:
        """
        Create and commit a record whose uniqueness is guarded by a database
        constraint.

        Args:
            obj_in: Dictionary or model instance with data to create

        Returns:
            Created model instance, or None if an integrity constraint rejected
            it (the transaction is rolled back in that case). Any constraint
            counts, so callers re-read to tell a duplicate from a missing parent.
        """
        try:
            return await self.create(obj_in)
        except IntegrityError:
            await self.session.rollback()
            return None

    # ==================== READ ====================

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """
        Get a single record by primary key.

        Args:
            id: Primary key

        Returns:
            Model instance or None if not found
        """
        query = select(self.model).where(self.model.id == id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_filters(
        self,
        filters: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> Sequence[ModelType]:
        """
        Get records matching multiple filter conditions.

        Args:
            filters: Dictionary of field-value pairs to filter by
            skip: Number of records to skip
            limit: Maximum number of records to return
            order_by: Field name to order by
            order_desc: Whether to order descending

        Returns:
            List of model instances
        """
        conditions = [getattr(self.model, field) == value for field, value in filters.items()]

        query = select(self.model)
        if conditions:
            query = query.where(and_(*conditions))

        if order_by:
            order_column = getattr(self.model, order_by)
            query = query.order_by(order_column.desc() if order_desc else order_column)

        query = query.offset(skip).limit(limit)

        result = await self.session.execute(query)
        return result.scalars().all()

    # ==================== DELETE ====================

    async def delete(self, db_obj: ModelType, commit: bool = True) -> None:
        """
        Permanently delete a loaded record.

        Args:
            db_obj: Model instance to delete
            commit: Commit immediately
        """
        await self.session.delete(db_obj)
        if commit:
            await self.session.commit()

    async def bulk_delete(self, filters: dict[str, Any], commit: bool = True) -> int:
        """
        Delete records matching filter conditions.

        Args:
            filters: Dictionary of field-value pairs to filter by
            commit: Commit immediately

        Returns:
            Number of records deleted
        """
        conditions = [getattr(self.model, field) == value for field, value in filters.items()]
        stmt = delete(self.model).where(and_(*conditions))

        result = await self.session.execute(stmt)
        if commit:
            await self.session.commit()
        return result.rowcount

    # ==================== UTILITY ====================

    async def refresh(self, db_obj: ModelType) -> ModelType:
        """
        Refresh a model instance from database.

        Args:
            db_obj: Model instance to refresh

        Returns:
            Refreshed model instance
        """
        await self.session.refresh(db_obj)
        return db_obj

    async def commit(self):
        """Commit the current transaction."""
        await self.session.commit()

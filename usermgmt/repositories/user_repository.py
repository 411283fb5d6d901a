"""Query interface over the users table."""

from uuid import UUID

from sqlalchemy import Select, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.models import User
from usermgmt.pagination import PageRequest, SortDirection


class UserRepository:
    """Thin async wrapper around a session for User queries.

    Methods never commit; the caller owns the transaction.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_id(self, user_id: UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        result = await self.db.execute(select(exists().where(User.username == username)))
        return bool(result.scalar())

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    async def find_all(self, page_request: PageRequest) -> tuple[list[User], int]:
        return await self._paginate(select(User), page_request)

    async def find_active(self, page_request: PageRequest) -> tuple[list[User], int]:
        base_query = select(User).where(User.active.is_(True))
        return await self._paginate(base_query, page_request)

    async def search_active(self, term: str, page_request: PageRequest) -> tuple[list[User], int]:
        """Case-insensitive substring match on username or email, active users only."""
        base_query = select(User).where(
            User.active.is_(True),
            or_(
                User.username.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
            ),
        )
        return await self._paginate(base_query, page_request)

    def add(self, user: User) -> None:
        self.db.add(user)

    async def delete(self, user: User) -> None:
        await self.db.delete(user)

    async def _paginate(
        self, base_query: Select[tuple[User]], page_request: PageRequest
    ) -> tuple[list[User], int]:
        count_query = select(func.count()).select_from(base_query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        sort_column = getattr(User, page_request.sort.field)
        if page_request.sort.direction is SortDirection.DESC:
            order = (sort_column.desc(), User.id.desc())
        else:
            order = (sort_column.asc(), User.id.asc())

        query = base_query.order_by(*order).limit(page_request.size).offset(page_request.offset)
        result = await self.db.execute(query)
        users = list(result.scalars().all())

        return users, total

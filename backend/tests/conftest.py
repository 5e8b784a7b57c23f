"""Shared test fixtures - uses async SQLite for isolated testing."""

import random
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from quotefeed.api.deps import get_rng
from quotefeed.config import settings
from quotefeed.db.database import Base, get_db
from quotefeed.db.redis import get_rate_limit_store
from quotefeed.models import Category, Subcategory, Quote, Interaction, User

# File-backed SQLite for tests (no Docker needed); NullPool keeps connections
# from outliving the event loop that opened them
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="quotefeed-tests-"))
TEST_DATABASE_URL = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'test.db'}"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


async def _override_get_db():
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


class InMemoryRedis:
    """Just enough of the redis.asyncio API for the rate limiter."""

    def __init__(self):
        self.values: dict[str, int] = {}
        self.ttls: dict[str, int] = {}

    def set(self, key: str, value: int, ex: int | None = None, nx: bool = False) -> bool:
        if nx and key in self.values:
            return False
        self.values[key] = int(value)
        if ex is not None:
            self.ttls[key] = ex
        return True

    def incr(self, key: str) -> int:
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]

    async def ttl(self, key: str) -> int:
        return self.ttls.get(key, -1)

    def pipeline(self, transaction: bool = True) -> "InMemoryPipeline":
        return InMemoryPipeline(self)


class InMemoryPipeline:
    """Queues commands and applies them together on execute()."""

    def __init__(self, store: InMemoryRedis):
        self.store = store
        self.commands: list = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.commands.clear()

    def set(self, *args, **kwargs):
        self.commands.append((self.store.set, args, kwargs))
        return self

    def incr(self, *args, **kwargs):
        self.commands.append((self.store.incr, args, kwargs))
        return self

    async def execute(self) -> list:
        results = [command(*args, **kwargs) for command, args, kwargs in self.commands]
        self.commands.clear()
        return results


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after."""
    # Import all models so Base.metadata knows about them
    import quotefeed.models  # noqa: F401

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db():
    """Direct async DB session for service-level tests."""
    async with test_session_factory() as session:
        yield session
        await session.commit()


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
async def client(fake_redis):
    """Async HTTP test client with test DB and redis overrides."""
    from quotefeed.main import app

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_rate_limit_store] = lambda: fake_redis
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_rng_client(client):
    """Same client, but every request draws from a seeded generator."""
    from quotefeed.main import app

    app.dependency_overrides[get_rng] = lambda: random.Random(42)
    return client


def make_token(actor_id: str, role: str = "user", secret: str | None = None, **claims) -> str:
    payload = {"id": actor_id, "role": role, **claims}
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# ---------------------------------------------------------------------------
# Row factories
# ---------------------------------------------------------------------------


class RowFactory:
    """Builds taxonomy, quotes and interactions through one session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._clock = BASE_TIME

    def _tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    async def category(self, name: str, subcategory: str | None = None) -> Subcategory:
        """Create a category with one subcategory and return the subcategory."""
        category = Category(name=name)
        self.session.add(category)
        await self.session.flush()
        sub = Subcategory(category_id=category.id, name=subcategory or f"{name} general")
        self.session.add(sub)
        await self.session.flush()
        return sub

    async def quote(
        self,
        sub: Subcategory,
        text: str | None = None,
        visibility: str | None = "public",
        deleted: bool = False,
        author: str | None = "Anon",
    ) -> Quote:
        created_at = self._tick()
        quote = Quote(
            text=text or f"quote {created_at.isoformat()}",
            author=author,
            subcategory_id=sub.id,
            visibility=visibility,
            created_at=created_at,
            updated_at=created_at,
            deleted_at=created_at if deleted else None,
        )
        self.session.add(quote)
        await self.session.flush()
        return quote

    async def quotes(self, sub: Subcategory, count: int, **kwargs) -> list[Quote]:
        return [await self.quote(sub, **kwargs) for _ in range(count)]

    async def user(self, user_id: str, role: str = "user") -> User:
        user = User(id=user_id, role=role)
        self.session.add(user)
        await self.session.flush()
        return user

    async def interact(self, user_id: str, quote: Quote, interaction_type: str) -> Interaction:
        interaction = Interaction(
            user_id=user_id,
            quote_id=quote.id,
            interaction_type=interaction_type,
            created_at=self._tick(),
        )
        self.session.add(interaction)
        await self.session.flush()
        return interaction


@pytest.fixture
def rows(db):
    return RowFactory(db)

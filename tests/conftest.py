"""Shared fixtures: a throwaway SQLite database and a small known passage catalog."""
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

# Must be set before the app modules build their engine
_TMP_DIR = tempfile.mkdtemp(prefix="human_or_ai_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_TMP_DIR) / 'test.db'}"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["DB_RETRY_ATTEMPTS"] = "1"
os.environ.pop("AUTH_POLICY", None)
os.environ.pop("EXCLUSION_SCOPE", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import AsyncSessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.category import Category  # noqa: E402
from app.models.passage import Passage, SourceType  # noqa: E402


@dataclass
class Catalog:
    fiction_id: int = 0
    news_id: int = 0
    empty_category_id: int = 0
    # passage id -> (source, rand_key)
    passages: dict[int, tuple[SourceType, float]] = field(default_factory=dict)

    def ids(self) -> set[int]:
        return set(self.passages)

    def id_with_key(self, key: float) -> int:
        return next(pid for pid, (_, k) in self.passages.items() if k == key)

    def source_of(self, passage_id: int) -> SourceType:
        return self.passages[passage_id][0]


@pytest.fixture(autouse=True)
async def reset_database():
    """Fresh tables for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


async def add_passage(db, category_id: int, source: SourceType, rand_key: float, text: str | None = None) -> int:
    passage = Passage(
        text=text or f"{source.value} passage at {rand_key}",
        category_id=category_id,
        source_type=source,
        rand_key=rand_key,
    )
    db.add(passage)
    await db.flush()
    return passage.id


@pytest.fixture
async def catalog() -> Catalog:
    """Two categories, four passages with evenly spaced keys, one empty category."""
    async with AsyncSessionLocal() as session:
        fiction = Category(name="Fiction", css_category="fiction", theme_tokens={"palette": {"accent": "#a855f7"}})
        news = Category(name="News", css_category="news", theme_tokens=None)
        empty = Category(name="Poetry", css_category="poetry")
        session.add_all([fiction, news, empty])
        await session.flush()

        result = Catalog(fiction_id=fiction.id, news_id=news.id, empty_category_id=empty.id)
        for category_id, source, key in [
            (fiction.id, SourceType.HUMAN, 0.1),
            (fiction.id, SourceType.AI, 0.35),
            (news.id, SourceType.HUMAN, 0.6),
            (news.id, SourceType.AI, 0.85),
        ]:
            pid = await add_passage(session, category_id, source, key)
            result.passages[pid] = (source, key)
        await session.commit()
    return result


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers

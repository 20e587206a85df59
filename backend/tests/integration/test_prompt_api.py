"""API tests for the prompt and utilization endpoints against in-memory SQLite."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from oda.domain.entities import PublicData
from oda.infrastructure.database.base import Base
from oda.infrastructure.database.repositories import SQLAlchemyPublicDataRepository
from oda.infrastructure.database.session import get_db_session
from oda.main import app


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        repo = SQLAlchemyPublicDataRepository(session)
        await repo.create(PublicData(
            file_data_name="서울특별시_교통량_20230101",
            title="서울 교통량",
            provider_agency="서울특별시",
            classification_system="교통및물류",
            keywords="교통",
        ))
        await repo.create(PublicData(
            file_data_name="서울특별시_대기질_20230101",
            title="서울 대기질",
            provider_agency="서울특별시",
            classification_system="환경",
        ))
        await session.commit()

    async def override_session() -> AsyncIterator[AsyncSession]:
        async with factory() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.mark.asyncio
async def test_prompt_search(client):
    response = await client.post("/api/v1/prompt", json={"prompt": "서울 교통 데이터 3개"})

    assert response.status_code == 200
    assert response.json()["results"] == ["서울특별시_교통량_20230101"]


@pytest.mark.asyncio
async def test_prompt_detail(client):
    response = await client.post("/api/v1/prompt", json={"prompt": "서울특별시_교통량_20230101 상세정보"})

    assert response.status_code == 200
    [detail] = response.json()["results"]
    assert "🏢 제공기관: 서울특별시" in detail


@pytest.mark.asyncio
async def test_prompt_rejects_empty_body(client):
    response = await client.post("/api/v1/prompt", json={"prompt": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_details_endpoint(client):
    response = await client.post("/api/v1/prompt/details", json={"fileDataName": "서울특별시_대기질"})

    assert response.status_code == 200
    assert "📄 파일명: 서울특별시_대기질_20230101" in response.json()["results"][0]


@pytest.mark.asyncio
async def test_full_utilization_unknown_file_is_404(client):
    response = await client.post("/api/v1/data-utilization/full", json={"dataInfo": {"fileName": "없음"}})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_text_utilization(client):
    response = await client.get("/api/v1/data-utilization/서울특별시_대기질_20230101")

    assert response.status_code == 200
    body = response.json()
    assert body["file_data_name"] == "서울특별시_대기질_20230101"
    assert body["recommendations"].startswith("💡 데이터 활용 추천")

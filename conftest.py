import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from api import create_app
from config import Settings
from library import Library


@pytest.fixture
def settings(tmp_path, request):
    # Create a unique database file for each test
    db_file = str(tmp_path / f"test_{request.node.name}.db")
    return Settings(database_file=db_file, api_port=3000)


@pytest_asyncio.fixture
async def lib(settings):
    library = Library(settings.database_file)
    await library.open()
    yield library
    await library.close()


@pytest.fixture
def client(settings):
    # The context manager runs the app lifespan, which opens and closes the Library
    with TestClient(create_app(settings)) as test_client:
        yield test_client

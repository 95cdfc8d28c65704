import pytest

from hr.domain import User
from hr.repos.memory import MemoryDocumentStore
from hr.repos.minio import MinioDocumentStore
from hr.tests.fake_minio import FakeMinioClient
from hr.usecase import HRManagementUseCase, UserManagementUseCase


@pytest.fixture
def user_store() -> MemoryDocumentStore[User]:
    """Provide an empty in-memory user store."""
    return MemoryDocumentStore(User)


@pytest.fixture
def fake_minio_client() -> FakeMinioClient:
    """Create a fresh fake Minio client for each test."""
    return FakeMinioClient()


@pytest.fixture
def minio_user_store(
    fake_minio_client: FakeMinioClient,
) -> MinioDocumentStore[User]:
    """Provide a Minio user store backed by the fake client."""
    return MinioDocumentStore(
        fake_minio_client, User, bucket_name="hr-users", prefix="users"
    )


@pytest.fixture
def hr_use_case(
    user_store: MemoryDocumentStore[User],
) -> HRManagementUseCase:
    return HRManagementUseCase(user_store)


@pytest.fixture
def user_use_case(
    user_store: MemoryDocumentStore[User],
) -> UserManagementUseCase:
    return UserManagementUseCase(user_store)

"""
Tests for UserManagementUseCase: personal documents and login.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from hr.domain import (
    LoginEntry,
    PersonalDocumentEntry,
    PersonalDocumentUpdate,
    User,
    UserEntry,
)
from hr.errors import (
    PersonalDocumentNotFoundError,
    StorageFailureError,
    UserNotFoundError,
)
from hr.repositories import DocumentStore, StoreFailureError
from hr.repos.memory import MemoryDocumentStore
from hr.tests.factories import (
    PersonalDocumentEntryFactory,
    PersonalDocumentFactory,
    UserFactory,
)
from hr.usecase import HRManagementUseCase, UserManagementUseCase


@pytest.fixture
async def stored_user(user_store: MemoryDocumentStore[User]) -> User:
    user = UserFactory.build()
    await user_store.create(user.id, user)
    return user


class TestAddPersonalDocument:
    @pytest.mark.asyncio
    async def test_document_appended_with_new_id(
        self,
        user_use_case: UserManagementUseCase,
        user_store: MemoryDocumentStore[User],
        stored_user: User,
    ) -> None:
        entry = PersonalDocumentEntry(name="contract.pdf", content="signed")

        document = await user_use_case.add_personal_document(
            stored_user.id, entry
        )

        assert document.id
        assert document.name == "contract.pdf"
        assert document.content == "signed"
        stored = await user_store.find(stored_user.id)
        assert stored.personal_document == [document]

    @pytest.mark.asyncio
    async def test_documents_keep_insertion_order_and_unique_ids(
        self,
        user_use_case: UserManagementUseCase,
        user_store: MemoryDocumentStore[User],
    ) -> None:
        prior = PersonalDocumentFactory.build_batch(2)
        user = UserFactory.build(personal_document=prior)
        await user_store.create(user.id, user)

        added = await user_use_case.add_personal_document(
            user.id, PersonalDocumentEntryFactory.build()
        )

        stored = await user_store.find(user.id)
        assert [d.id for d in stored.personal_document] == [
            prior[0].id,
            prior[1].id,
            added.id,
        ]
        assert added.id not in {d.id for d in prior}

    @pytest.mark.asyncio
    async def test_add_to_unknown_user(
        self,
        user_use_case: UserManagementUseCase,
        user_store: MemoryDocumentStore[User],
    ) -> None:
        with pytest.raises(UserNotFoundError):
            await user_use_case.add_personal_document(
                "missing", PersonalDocumentEntryFactory.build()
            )

        assert await user_store.list_all() == []

    @pytest.mark.asyncio
    async def test_write_back_failure(self) -> None:
        store = AsyncMock(spec=DocumentStore)
        store.find.return_value = UserFactory.build(id="u-1")
        store.update.side_effect = StoreFailureError("down")

        with pytest.raises(StorageFailureError):
            await UserManagementUseCase(store).add_personal_document(
                "u-1", PersonalDocumentEntryFactory.build()
            )


class TestUpdatePersonalDocument:
    @pytest.mark.asyncio
    async def test_overwrites_name_and_content_in_place(
        self,
        user_use_case: UserManagementUseCase,
        user_store: MemoryDocumentStore[User],
    ) -> None:
        documents = PersonalDocumentFactory.build_batch(3)
        user = UserFactory.build(personal_document=documents)
        await user_store.create(user.id, user)
        target = documents[1]

        updated = await user_use_case.update_personal_document(
            user.id,
            PersonalDocumentUpdate(id=target.id, name="new", content="body"),
        )

        assert updated.id == target.id
        assert updated.name == "new"
        assert updated.content == "body"
        stored = await user_store.find(user.id)
        assert stored.personal_document[0] == documents[0]
        assert stored.personal_document[1] == updated
        assert stored.personal_document[2] == documents[2]

    @pytest.mark.asyncio
    async def test_unknown_document_leaves_user_unchanged(
        self,
        user_use_case: UserManagementUseCase,
        user_store: MemoryDocumentStore[User],
    ) -> None:
        user = UserFactory.build(
            personal_document=PersonalDocumentFactory.build_batch(1)
        )
        await user_store.create(user.id, user)

        with pytest.raises(PersonalDocumentNotFoundError):
            await user_use_case.update_personal_document(
                user.id,
                PersonalDocumentUpdate(id="nope", name="x", content="y"),
            )

        assert await user_store.find(user.id) == user

    @pytest.mark.asyncio
    async def test_unknown_user_is_user_not_found(
        self, user_use_case: UserManagementUseCase
    ) -> None:
        with pytest.raises(UserNotFoundError):
            await user_use_case.update_personal_document(
                "missing",
                PersonalDocumentUpdate(id="doc", name="x", content="y"),
            )

    @pytest.mark.asyncio
    async def test_no_write_when_document_missing(self) -> None:
        store = AsyncMock(spec=DocumentStore)
        store.find.return_value = UserFactory.build(id="u-1")

        with pytest.raises(PersonalDocumentNotFoundError):
            await UserManagementUseCase(store).update_personal_document(
                "u-1", PersonalDocumentUpdate(id="doc", name="x")
            )

        store.update.assert_not_awaited()


class TestRoundTrip:
    @pytest.mark.asyncio
    async def test_create_add_two_update_first_then_fetch(
        self,
        hr_use_case: HRManagementUseCase,
        user_use_case: UserManagementUseCase,
    ) -> None:
        created = await hr_use_case.create_user(
            UserEntry(
                name="Alice", role="Nurse", email="a@x.com", department="ER"
            )
        )
        user_id = created[0].id

        first = await user_use_case.add_personal_document(
            user_id, PersonalDocumentEntry(name="one", content="1")
        )
        second = await user_use_case.add_personal_document(
            user_id, PersonalDocumentEntry(name="two", content="2")
        )
        await user_use_case.update_personal_document(
            user_id,
            PersonalDocumentUpdate(id=first.id, name="uno", content="I"),
        )

        user = await hr_use_case.get_user(user_id)

        assert len(user.personal_document) == 2
        assert user.personal_document[0].id == first.id
        assert user.personal_document[0].name == "uno"
        assert user.personal_document[0].content == "I"
        assert user.personal_document[1] == second


class TestLostUpdate:
    @pytest.mark.asyncio
    async def test_concurrent_adds_to_same_user_lose_one_write(
        self,
    ) -> None:
        """Same-user read-modify-write has no isolation: last write wins."""

        class InterleavingStore(MemoryDocumentStore[User]):
            async def find(self, key: str) -> User:
                record = await super().find(key)
                await asyncio.sleep(0.01)
                return record

        store = InterleavingStore(User)
        user = UserFactory.build()
        await store.create(user.id, user)
        use_case = UserManagementUseCase(store)

        await asyncio.gather(
            use_case.add_personal_document(
                user.id, PersonalDocumentEntry(name="a")
            ),
            use_case.add_personal_document(
                user.id, PersonalDocumentEntry(name="b")
            ),
        )

        stored = await store.find(user.id)
        assert len(stored.personal_document) == 1


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_full_record(
        self,
        user_use_case: UserManagementUseCase,
        user_store: MemoryDocumentStore[User],
    ) -> None:
        user = UserFactory.build(
            email="a@x.com",
            personal_document=PersonalDocumentFactory.build_batch(1),
        )
        await user_store.create(user.id, user)

        found = await user_use_case.login_user(LoginEntry(email="a@x.com"))

        assert found == user

    @pytest.mark.asyncio
    async def test_login_unknown_email(
        self, user_use_case: UserManagementUseCase
    ) -> None:
        with pytest.raises(UserNotFoundError):
            await user_use_case.login_user(LoginEntry(email="x@x.com"))

    @pytest.mark.asyncio
    async def test_login_storage_failure(self) -> None:
        store = AsyncMock(spec=DocumentStore)
        store.find_by_secondary_key.side_effect = StoreFailureError("down")

        with pytest.raises(StorageFailureError):
            await UserManagementUseCase(store).login_user(
                LoginEntry(email="a@x.com")
            )

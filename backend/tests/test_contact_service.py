"""
Contact API — Contact Service Unit Tests
==========================================

What:  Tests for ContactService business logic (create, list, get, photo, delete).
How:   Uses mock DB sessions and a mock PhotoStore (no real DB or disk).

What we test:
    ✅ Create assigns a fresh id and ignores a client-supplied one
    ✅ Contact not found raises NotFoundError
    ✅ List pagination metadata (empty and populated)
    ✅ Update photo: store → set photoURL → flush, and nothing stored on 404
    ✅ SQLAlchemy failures surface as DatabaseError with the cause chained
    ✅ Row update failing after the photo write keeps the new file
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from contact_api.exceptions import DatabaseError, NotFoundError, StorageError
from contact_api.models.contact import Contact
from contact_api.schemas.contact import ContactCreate
from contact_api.services.contact_service import ContactService


def make_contact(**fields) -> Contact:
    fields.setdefault("id", str(uuid4()))
    return Contact(**fields)


def result_returning(contact):
    result = MagicMock()
    result.scalar_one_or_none.return_value = contact
    return result


class TestContactServiceCreate:

    def setup_method(self):
        self.photo_store = MagicMock()
        self.service = ContactService(self.photo_store)

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_flushes(self, mock_db_session, sample_contact_data):
        payload = ContactCreate(**sample_contact_data)

        result = await self.service.create_contact(mock_db_session, payload)

        assert result.id
        assert result.name == "Ann Example"
        mock_db_session.add.assert_called_once()
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_ignores_client_supplied_id(self, mock_db_session):
        payload = ContactCreate.model_validate({"id": "client-chosen", "name": "Ann"})

        result = await self.service.create_contact(mock_db_session, payload)

        assert result.id != "client-chosen"
        added = mock_db_session.add.call_args.args[0]
        assert added.id == result.id

    @pytest.mark.asyncio
    async def test_create_generates_distinct_ids(self, mock_db_session):
        first = await self.service.create_contact(mock_db_session, ContactCreate(name="A"))
        second = await self.service.create_contact(mock_db_session, ContactCreate(name="A"))

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_wraps_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_contact(mock_db_session, ContactCreate(name="A"))

        assert isinstance(exc_info.value.__cause__, OperationalError)


class TestContactServiceGet:

    def setup_method(self):
        self.service = ContactService(MagicMock())

    @pytest.mark.asyncio
    async def test_get_contact_found(self, mock_db_session):
        contact = make_contact(name="Ann", email="ann@example.com")
        mock_db_session.execute.return_value = result_returning(contact)

        result = await self.service.get_contact(mock_db_session, contact.id)

        assert result.id == contact.id
        assert result.name == "Ann"
        assert result.phone is None

    @pytest.mark.asyncio
    async def test_get_contact_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_returning(None)

        with pytest.raises(NotFoundError):
            await self.service.get_contact(mock_db_session, "missing")

    @pytest.mark.asyncio
    async def test_get_contact_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

        with pytest.raises(DatabaseError):
            await self.service.get_contact(mock_db_session, "any")


class TestContactServiceList:

    def setup_method(self):
        self.service = ContactService(MagicMock())

    @pytest.mark.asyncio
    async def test_list_contacts_empty(self, mock_db_session):
        page_result = MagicMock()
        page_result.scalars.return_value.all.return_value = []
        count_result = MagicMock()
        count_result.scalar.return_value = 0
        mock_db_session.execute = AsyncMock(side_effect=[page_result, count_result])

        result = await self.service.list_contacts(mock_db_session, page=0, size=10)

        assert result.content == []
        assert result.total_elements == 0
        assert result.total_pages == 0
        assert result.number_of_elements == 0
        assert result.first is True
        assert result.last is True

    @pytest.mark.asyncio
    async def test_list_contacts_middle_page(self, mock_db_session):
        contacts = [make_contact(name=f"Name {i}") for i in range(2)]
        page_result = MagicMock()
        page_result.scalars.return_value.all.return_value = contacts
        count_result = MagicMock()
        count_result.scalar.return_value = 7
        mock_db_session.execute = AsyncMock(side_effect=[page_result, count_result])

        result = await self.service.list_contacts(mock_db_session, page=1, size=2)

        assert [c.name for c in result.content] == ["Name 0", "Name 1"]
        assert result.total_elements == 7
        assert result.total_pages == 4
        assert result.page == 1
        assert result.first is False
        assert result.last is False


class TestContactServiceUpdatePhoto:

    def setup_method(self):
        self.photo_store = MagicMock()
        self.photo_store.store = AsyncMock(return_value="http://test/contacts/images/c1.png")
        self.service = ContactService(self.photo_store)

    @pytest.mark.asyncio
    async def test_update_photo_stores_and_records_url(self, mock_db_session):
        contact = make_contact(id="c1", name="Ann")
        mock_db_session.execute.return_value = result_returning(contact)

        url = await self.service.update_photo(
            mock_db_session, "c1", b"bytes", "ann.png", "http://test/"
        )

        assert url == "http://test/contacts/images/c1.png"
        assert contact.photo_url == url
        self.photo_store.store.assert_awaited_once_with(
            contact_id="c1",
            content=b"bytes",
            original_filename="ann.png",
            base_url="http://test/",
        )
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_photo_unknown_contact_writes_nothing(self, mock_db_session):
        mock_db_session.execute.return_value = result_returning(None)

        with pytest.raises(NotFoundError):
            await self.service.update_photo(
                mock_db_session, "missing", b"bytes", "ann.png", "http://test/"
            )

        self.photo_store.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_photo_storage_failure_leaves_row_untouched(self, mock_db_session):
        contact = make_contact(id="c1", photo_url="http://old/contacts/images/c1.jpg")
        mock_db_session.execute.return_value = result_returning(contact)
        self.photo_store.store = AsyncMock(side_effect=StorageError())

        with pytest.raises(StorageError):
            await self.service.update_photo(
                mock_db_session, "c1", b"bytes", "ann.png", "http://test/"
            )

        assert contact.photo_url == "http://old/contacts/images/c1.jpg"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_photo_flush_failure_raises_database_error_file_kept(self, mock_db_session):
        contact = make_contact(id="c1", name="Ann")
        mock_db_session.execute.return_value = result_returning(contact)
        mock_db_session.flush = AsyncMock(side_effect=SQLAlchemyError("UPDATE failed"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.update_photo(
                mock_db_session, "c1", b"bytes", "ann.png", "http://test/"
            )

        # The file write already happened; nothing removes it
        self.photo_store.store.assert_awaited_once()
        assert exc_info.value.context["photo_url"] == "http://test/contacts/images/c1.png"
        assert isinstance(exc_info.value.__cause__, SQLAlchemyError)

    @pytest.mark.asyncio
    async def test_update_photo_flush_failure_leaves_new_file_on_disk(
        self, mock_db_session, photo_store, photo_dir
    ):
        service = ContactService(photo_store)
        mock_db_session.execute.return_value = result_returning(make_contact(id="c1"))
        mock_db_session.flush = AsyncMock(side_effect=SQLAlchemyError("UPDATE failed"))

        with pytest.raises(DatabaseError):
            await service.update_photo(mock_db_session, "c1", b"new", "ann.png", "http://test/")

        assert (photo_dir / "c1.png").read_bytes() == b"new"


class TestContactServiceDelete:

    def setup_method(self):
        self.service = ContactService(MagicMock())

    @pytest.mark.asyncio
    async def test_delete_contact(self, mock_db_session):
        contact = make_contact(name="Ann")
        mock_db_session.execute.return_value = result_returning(contact)

        await self.service.delete_contact(mock_db_session, contact.id)

        mock_db_session.delete.assert_awaited_once_with(contact)

    @pytest.mark.asyncio
    async def test_delete_contact_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_returning(None)

        with pytest.raises(NotFoundError):
            await self.service.delete_contact(mock_db_session, "missing")

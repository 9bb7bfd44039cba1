"""
PetSoft Backend — Pet Service Tests
=====================================

What:  addPet / editPet / checkoutPet and the dashboard reads.
How:   Pipeline ordering and failure mapping use a mock session; persistence
       and cache behavior run against SQLite.

What we test:
    ✅ Invalid input never reaches storage
    ✅ Guard failures come back as "Pet not found." / "Unauthorized."
    ✅ Storage failures roll back and map to "could not <verb> pet."
    ✅ Successful writes persist and invalidate cached /app views
    ✅ Listing: owner scoping, ordering, search, total
    ✅ A write that lands during a listing read is not masked by the cache
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from petsoft.exceptions import DatabaseError
from petsoft.models.pet import Pet
from petsoft.results import ActionError
from petsoft.schemas.auth import SessionUser
from petsoft.schemas.pet import DEFAULT_PET_IMAGE
from petsoft.services.pet_service import PetService
from petsoft.services.view_cache import view_cache


def _db_error():
    return OperationalError("statement", {}, Exception("connection lost"))


def _returning(mock_db_session, pet):
    result = MagicMock()
    result.scalar_one_or_none.return_value = pet
    mock_db_session.execute.return_value = result


class TestAddPet:

    def setup_method(self):
        self.service = PetService()

    @pytest.mark.asyncio
    async def test_add_pet_success(self, mock_db_session, session_user, pet_form_data):
        view_cache.set("/app/pets/someone", [])

        result = await self.service.add_pet(mock_db_session, session_user, pet_form_data)

        assert result is None
        added = mock_db_session.add.call_args.args[0]
        assert isinstance(added, Pet)
        assert added.user_id == session_user.user_id
        assert added.image_url == DEFAULT_PET_IMAGE
        mock_db_session.commit.assert_awaited_once()
        assert view_cache.get("/app/pets/someone") is None

    @pytest.mark.asyncio
    async def test_add_pet_invalid_data(self, mock_db_session, session_user, pet_form_data):
        result = await self.service.add_pet(
            mock_db_session, session_user, dict(pet_form_data, age=0)
        )

        assert result == ActionError(message="Invalid pet data.")
        assert result.model_dump() == {"message": "Invalid pet data."}
        mock_db_session.add.assert_not_called()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_pet_commit_failure(self, mock_db_session, session_user, pet_form_data):
        view_cache.set("/app/pets/someone", [])
        mock_db_session.commit.side_effect = _db_error()

        result = await self.service.add_pet(mock_db_session, session_user, pet_form_data)

        assert result.message == "could not add pet."
        assert result.status_code == DatabaseError.status_code
        mock_db_session.rollback.assert_awaited_once()
        assert view_cache.get("/app/pets/someone") == []


class TestEditPet:

    def setup_method(self):
        self.service = PetService()

    @pytest.mark.asyncio
    async def test_edit_pet_success(self, mock_db_session, session_user, pet_form_data):
        pet = MagicMock(id=uuid4(), user_id=session_user.user_id)
        _returning(mock_db_session, pet)

        result = await self.service.edit_pet(
            mock_db_session, session_user, str(pet.id), dict(pet_form_data, name="Max")
        )

        assert result is None
        assert pet.name == "Max"
        assert pet.owner_name == "Alex"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_edit_pet_invalid_id_skips_lookup(self, mock_db_session, session_user, pet_form_data):
        result = await self.service.edit_pet(mock_db_session, session_user, "nope", pet_form_data)

        assert result.message == "Invalid pet data."
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_pet_invalid_form_skips_lookup(self, mock_db_session, session_user):
        result = await self.service.edit_pet(mock_db_session, session_user, str(uuid4()), {"name": ""})

        assert result.message == "Invalid pet data."
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_pet_not_found(self, mock_db_session, session_user, pet_form_data):
        _returning(mock_db_session, None)

        result = await self.service.edit_pet(mock_db_session, session_user, str(uuid4()), pet_form_data)

        assert result.message == "Pet not found."
        assert result.status_code == 404
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_pet_not_owner(self, mock_db_session, session_user, pet_form_data):
        pet = MagicMock(id=uuid4(), user_id=uuid4())
        pet.name = "Fido"
        _returning(mock_db_session, pet)

        result = await self.service.edit_pet(mock_db_session, session_user, str(pet.id), pet_form_data)

        assert result.message == "Unauthorized."
        assert result.status_code == 403
        assert pet.name == "Fido"
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_pet_lookup_failure(self, mock_db_session, session_user, pet_form_data):
        mock_db_session.execute.side_effect = _db_error()

        result = await self.service.edit_pet(mock_db_session, session_user, str(uuid4()), pet_form_data)

        assert result.message == "could not edit pet."


class TestCheckoutPet:

    def setup_method(self):
        self.service = PetService()

    @pytest.mark.asyncio
    async def test_checkout_success(self, mock_db_session, session_user):
        pet = MagicMock(id=uuid4(), user_id=session_user.user_id)
        _returning(mock_db_session, pet)

        result = await self.service.checkout_pet(mock_db_session, session_user, str(pet.id))

        assert result is None
        mock_db_session.delete.assert_awaited_once_with(pet)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_checkout_not_owner(self, mock_db_session, session_user):
        _returning(mock_db_session, MagicMock(id=uuid4(), user_id=uuid4()))

        result = await self.service.checkout_pet(mock_db_session, session_user, str(uuid4()))

        assert result.message == "Unauthorized."
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_checkout_delete_failure(self, mock_db_session, session_user):
        pet = MagicMock(id=uuid4(), user_id=session_user.user_id)
        _returning(mock_db_session, pet)
        mock_db_session.commit.side_effect = _db_error()

        result = await self.service.checkout_pet(mock_db_session, session_user, str(pet.id))

        assert result.message == "could not checkout pet."
        mock_db_session.rollback.assert_awaited_once()


class TestListingCache:
    """Cached dashboard listings and writes that overlap a read."""

    def setup_method(self):
        self.service = PetService()

    @staticmethod
    def _empty_result():
        result = MagicMock()
        result.scalars.return_value.all.return_value = []
        return result

    @pytest.mark.asyncio
    async def test_listing_served_from_cache(self, mock_db_session, session_user):
        mock_db_session.execute.return_value = self._empty_result()

        await self.service.list_pets(mock_db_session, session_user)
        await self.service.list_pets(mock_db_session, session_user)

        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_during_listing_read_is_not_masked(self, session_user, pet_form_data):
        query_started = asyncio.Event()
        release_query = asyncio.Event()

        async def slow_execute(*args, **kwargs):
            query_started.set()
            await release_query.wait()
            return self._empty_result()

        read_db = AsyncMock()
        read_db.execute = AsyncMock(side_effect=slow_execute)
        write_db = AsyncMock()
        write_db.add = MagicMock()

        listing = asyncio.create_task(self.service.list_pets(read_db, session_user))
        await query_started.wait()
        assert await self.service.add_pet(write_db, session_user, pet_form_data) is None
        release_query.set()
        snapshot = await listing

        assert snapshot.pets == []
        assert view_cache.get(f"/app/pets/{session_user.user_id}") is None


class TestPetServiceWithDatabase:
    """Round trips through SQLite."""

    def setup_method(self):
        self.service = PetService()

    @pytest.mark.asyncio
    async def test_add_then_list(self, db_session, create_user, pet_form_data):
        user = await create_user()
        session = SessionUser(user_id=user.id, email=user.email)

        await self.service.add_pet(db_session, session, pet_form_data)
        await self.service.add_pet(db_session, session, dict(pet_form_data, name="Bella"))

        listing = await self.service.list_pets(db_session, session)

        assert listing.total == 2
        assert [pet.name for pet in listing.pets] == ["Rex", "Bella"]
        assert listing.pets[0].image_url == DEFAULT_PET_IMAGE

    @pytest.mark.asyncio
    async def test_listing_is_scoped_to_owner(self, db_session, create_user, pet_form_data):
        alice = await create_user("alice@example.com")
        bob = await create_user("bob@example.com")
        alice_session = SessionUser(user_id=alice.id, email=alice.email)
        bob_session = SessionUser(user_id=bob.id, email=bob.email)

        await self.service.add_pet(db_session, alice_session, pet_form_data)

        listing = await self.service.list_pets(db_session, bob_session)
        assert listing.total == 0
        assert listing.pets == []

    @pytest.mark.asyncio
    async def test_search_filters_but_total_counts_all(self, db_session, create_user, pet_form_data):
        user = await create_user()
        session = SessionUser(user_id=user.id, email=user.email)
        for name in ("Rex", "Rexy", "Bella"):
            await self.service.add_pet(db_session, session, dict(pet_form_data, name=name))

        listing = await self.service.list_pets(db_session, session, search="  rEx ")

        assert listing.total == 3
        assert [pet.name for pet in listing.pets] == ["Rex", "Rexy"]

    @pytest.mark.asyncio
    async def test_edit_persists_and_refreshes_listing(self, db_session, create_user, pet_form_data):
        user = await create_user()
        session = SessionUser(user_id=user.id, email=user.email)
        await self.service.add_pet(db_session, session, pet_form_data)
        pet = (await self.service.list_pets(db_session, session)).pets[0]

        result = await self.service.edit_pet(
            db_session, session, str(pet.id), dict(pet_form_data, age="7", notes="")
        )

        assert result is None
        listing = await self.service.list_pets(db_session, session)
        assert listing.pets[0].age == 7
        assert listing.pets[0].notes == ""

    @pytest.mark.asyncio
    async def test_checkout_removes_exactly_one_pet(self, db_session, create_user, pet_form_data):
        user = await create_user()
        session = SessionUser(user_id=user.id, email=user.email)
        await self.service.add_pet(db_session, session, pet_form_data)
        await self.service.add_pet(db_session, session, dict(pet_form_data, name="Bella"))
        rex = (await self.service.list_pets(db_session, session)).pets[0]

        result = await self.service.checkout_pet(db_session, session, str(rex.id))

        assert result is None
        count = await db_session.scalar(select(func.count()).select_from(Pet))
        assert count == 1
        listing = await self.service.list_pets(db_session, session)
        assert [pet.name for pet in listing.pets] == ["Bella"]

    @pytest.mark.asyncio
    async def test_checkout_twice(self, db_session, create_user, pet_form_data):
        user = await create_user()
        session = SessionUser(user_id=user.id, email=user.email)
        await self.service.add_pet(db_session, session, pet_form_data)
        pet = (await self.service.list_pets(db_session, session)).pets[0]

        assert await self.service.checkout_pet(db_session, session, str(pet.id)) is None
        second = await self.service.checkout_pet(db_session, session, str(pet.id))

        assert second.message == "Pet not found."

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, db_session, create_user, pet_form_data):
        alice = await create_user("alice@example.com")
        bob = await create_user("bob@example.com")
        alice_session = SessionUser(user_id=alice.id, email=alice.email)
        bob_session = SessionUser(user_id=bob.id, email=bob.email)
        await self.service.add_pet(db_session, alice_session, pet_form_data)
        pet = (await self.service.list_pets(db_session, alice_session)).pets[0]

        result = await self.service.edit_pet(
            db_session, bob_session, str(pet.id), dict(pet_form_data, name="Stolen")
        )

        assert result.message == "Unauthorized."
        fetched = await self.service.get_pet(db_session, alice_session, str(pet.id))
        assert fetched.name == "Rex"

    @pytest.mark.asyncio
    async def test_get_pet(self, db_session, create_user, pet_form_data):
        user = await create_user()
        session = SessionUser(user_id=user.id, email=user.email)
        await self.service.add_pet(db_session, session, pet_form_data)
        pet = (await self.service.list_pets(db_session, session)).pets[0]

        fetched = await self.service.get_pet(db_session, session, str(pet.id))

        assert fetched.id == pet.id
        assert fetched.owner_name == "Alex"

    @pytest.mark.asyncio
    async def test_list_pets_database_error(self, mock_db_session, session_user):
        mock_db_session.execute.side_effect = _db_error()

        with pytest.raises(DatabaseError):
            await self.service.list_pets(mock_db_session, session_user)

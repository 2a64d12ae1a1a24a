"""
Shop API Backend: User Service Unit Tests
==========================================
"""

import pytest

from shop_api.exceptions import DatabaseError
from shop_api.services.user_service import UserService


class TestUserService:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_list_users_selects_all(self, mock_database):
        mock_database.execute.return_value = [
            {"id": 1, "name": "John Doe", "username": "johnnn",
             "email": "john.doe@example.com", "password": "password123",
             "picture": "profile.jpg"},
        ]

        rows = await self.service.list_users(mock_database)

        mock_database.execute.assert_awaited_once_with("SELECT * FROM users")
        # Plaintext password is part of the existing contract
        assert rows[0]["password"] == "password123"

    @pytest.mark.asyncio
    async def test_find_by_credentials_binds_email_and_password(self, mock_database):
        mock_database.call_procedure.return_value = [{"id": 1, "email": "john.doe@example.com"}]

        rows = await self.service.find_by_credentials(
            mock_database, email="john.doe@example.com", password="password123"
        )

        assert rows == [{"id": 1, "email": "john.doe@example.com"}]
        mock_database.call_procedure.assert_awaited_once_with(
            "login_sp", {"email": "john.doe@example.com", "password": "password123"}
        )

    @pytest.mark.asyncio
    async def test_find_by_credentials_no_match_is_empty(self, mock_database):
        mock_database.call_procedure.return_value = []

        rows = await self.service.find_by_credentials(
            mock_database, email="nobody@example.com", password="wrong"
        )

        assert rows == []

    @pytest.mark.asyncio
    async def test_register_passes_all_fields(self, mock_database):
        mock_database.call_procedure.return_value = [{"id": 9}]

        rows = await self.service.register(
            mock_database,
            username="johnnn",
            email="john.doe@example.com",
            password="password123",
            first_name="John",
            last_name="Doe",
        )

        assert rows == [{"id": 9}]
        mock_database.call_procedure.assert_awaited_once_with(
            "register_sp",
            {
                "Username": "johnnn",
                "Email": "john.doe@example.com",
                "Password": "password123",
                "first_name": "John",
                "last_name": "Doe",
            },
        )

    @pytest.mark.asyncio
    async def test_register_error_propagates(self, mock_database):
        mock_database.call_procedure.side_effect = DatabaseError("Email already exists")
        with pytest.raises(DatabaseError, match="already exists"):
            await self.service.register(
                mock_database, username="a", email="b", password="c",
                first_name=None, last_name=None,
            )

"""
Shop API Backend: User Service
===============================

What:  List users, look a user up by credentials, register a user.
Who:   Called by the /api/users route handlers.

Procedures consumed:
    login_sp     @email, @password
    register_sp  @Username, @Email, @Password, @first_name, @last_name

Passwords are stored and returned in plaintext and compared by login_sp.
This mirrors the existing database contract; see DESIGN.md.
"""

import logging
from typing import List, Optional

from shop_api.database import Database, Row

logger = logging.getLogger(__name__)

LIST_USERS = "SELECT * FROM users"
LOGIN = "login_sp"
REGISTER = "register_sp"


class UserService:

    async def list_users(self, db: Database) -> List[Row]:
        return await db.execute(LIST_USERS)

    async def find_by_credentials(self, db: Database, email: str, password: str) -> List[Row]:
        """
        Rows returned by login_sp for this email/password pair.

        An empty list means no match; it is not an error.
        """
        rows = await db.call_procedure(LOGIN, {"email": email, "password": password})
        logger.info("Credential lookup returned %d row(s)", len(rows))
        return rows

    async def register(
        self,
        db: Database,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
    ) -> List[Row]:
        rows = await db.call_procedure(
            REGISTER,
            {
                "Username": username,
                "Email": email,
                "Password": password,
                "first_name": first_name,
                "last_name": last_name,
            },
        )
        logger.info("User %r registered", username)
        return rows


user_service = UserService()

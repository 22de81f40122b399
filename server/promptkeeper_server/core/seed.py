"""Demo data seeding.

Creates a fixed set of Clerk test users, wipes the prompts table and
re-inserts a fixed list of prompts handed out to those users in contiguous
blocks. Running it twice yields the same prompt contents, owned by the new
users of the second run.

The job is not safe to run concurrently against the same database, and
users created in Clerk are not removed if a later step fails.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

import httpx
from sqlalchemy import delete, insert
from sqlalchemy.engine import Engine

from ..config import Settings
from .database import create_db_engine, get_connection, prompts_table
from .exceptions import ConfigurationError, ExternalServiceFailure

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 3

SEED_USERS: list[dict[str, Any]] = [
    {"emails": ["user1+clerk_test@example.com"], "first_name": "Test", "last_name": "User1"},
    {"emails": ["user2+clerk_test@example.com"], "first_name": "Test", "last_name": "User2"},
    {"emails": ["user3+clerk_test@example.com"], "first_name": "Test", "last_name": "User3"},
]

BASE_PROMPTS: list[dict[str, str]] = [
    {
        "name": "Code Explainer",
        "description": "Explains code in simple terms",
        "content": "Please explain this code in simple terms, as if you're teaching a beginner programmer:",
    },
    {
        "name": "Bug Finder",
        "description": "Helps identify bugs in code",
        "content": "Review this code and identify potential bugs, performance issues, or security vulnerabilities:",
    },
    {
        "name": "Feature Planner",
        "description": "Helps plan new features",
        "content": "Help me plan the implementation of this feature. Consider edge cases, potential challenges, and best practices:",
    },
    {
        "name": "SQL Query Helper",
        "description": "Assists with SQL queries",
        "content": "Help me write an efficient SQL query to accomplish the following task:",
    },
    {
        "name": "API Documentation",
        "description": "Generates API documentation",
        "content": "Generate clear and comprehensive documentation for this API endpoint, including parameters, responses, and examples:",
    },
    {
        "name": "Code Refactorer",
        "description": "Suggests code improvements",
        "content": "Review this code and suggest improvements for better readability, maintainability, and performance:",
    },
    {
        "name": "Test Case Generator",
        "description": "Creates test cases",
        "content": "Generate comprehensive test cases for this function, including edge cases and error scenarios:",
    },
    {
        "name": "UI/UX Reviewer",
        "description": "Reviews UI/UX design",
        "content": "Review this UI design and provide feedback on usability, accessibility, and user experience:",
    },
    {
        "name": "Git Command Helper",
        "description": "Helps with Git commands",
        "content": "What Git commands should I use to accomplish the following task:",
    },
]


class UserProvisioner(Protocol):
    """Anything that can create a user in the identity service."""

    async def create_user(
        self,
        emails: Sequence[str],
        password: str,
        first_name: str,
        last_name: str,
    ) -> str:
        ...


class ClerkUserClient:
    """Minimal Clerk Backend API client for creating users.

    Owns an httpx.AsyncClient; use it as an async context manager (or call
    aclose()) so the connection pool is released on every exit path.
    """

    def __init__(
        self,
        secret_key: str,
        api_url: str = "https://api.clerk.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=api_url,
            headers={
                "Authorization": f"Bearer {secret_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClerkUserClient":
        """Build a client from settings.

        Raises:
            ConfigurationError: If CLERK_SECRET_KEY is not configured
        """
        if not settings.clerk_secret_key:
            raise ConfigurationError("CLERK_SECRET_KEY is required")
        return cls(settings.clerk_secret_key, api_url=settings.clerk_api_url)

    async def create_user(
        self,
        emails: Sequence[str],
        password: str,
        first_name: str,
        last_name: str,
    ) -> str:
        """Create a user and return its Clerk id.

        Raises:
            ExternalServiceFailure: If Clerk is unreachable or rejects the request
        """
        try:
            response = await self._client.post(
                "/users",
                json={
                    "email_address": list(emails),
                    "password": password,
                    "first_name": first_name,
                    "last_name": last_name,
                },
            )
        except httpx.HTTPError as e:
            raise ExternalServiceFailure(f"Clerk API request failed: {e}") from e

        if response.status_code not in (200, 201):
            error_detail = response.text[:500]
            logger.error(
                "Clerk API error creating user",
                extra={"status_code": response.status_code, "response": error_detail},
            )
            raise ExternalServiceFailure(
                f"Failed to create Clerk user: {error_detail}",
                status_code=response.status_code,
            )

        user_id = response.json().get("id")
        if not user_id:
            raise ExternalServiceFailure("Clerk API response is missing the user id")
        return user_id

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ClerkUserClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


@dataclass
class SeedResult:
    """Outcome of a seed run."""

    user_ids: list[str] = field(default_factory=list)
    prompts_cleared: int = 0
    prompts_inserted: int = 0


def required_user_count(template_count: int, block_size: int) -> int:
    """Number of users needed to own template_count templates in blocks."""
    if block_size < 1:
        raise ValueError(f"block_size must be at least 1, got {block_size}")
    return -(-template_count // block_size)


def assign_owners(
    templates: Sequence[dict[str, str]],
    user_ids: Sequence[str],
    block_size: int = DEFAULT_BLOCK_SIZE,
) -> list[dict[str, str]]:
    """Hand out templates to users in contiguous blocks.

    The template at position i goes to user_ids[i // block_size].

    Raises:
        ValueError: If block_size < 1 or there are too few users
    """
    needed = required_user_count(len(templates), block_size)
    if needed > len(user_ids):
        raise ValueError(
            f"{len(templates)} templates in blocks of {block_size} need {needed} users, got {len(user_ids)}"
        )

    return [
        {**template, "owner_id": user_ids[index // block_size]}
        for index, template in enumerate(templates)
    ]


async def provision_users(
    clerk: UserProvisioner,
    users: Sequence[dict[str, Any]],
    password: str,
) -> list[str]:
    """Create every user concurrently and return their ids in input order.

    Raises:
        The first error hit by any creation. Users created by the other calls
        are left in place and logged.
    """
    results = await asyncio.gather(
        *(
            clerk.create_user(
                emails=user["emails"],
                password=password,
                first_name=user["first_name"],
                last_name=user["last_name"],
            )
            for user in users
        ),
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        created = [r for r in results if not isinstance(r, BaseException)]
        if created:
            logger.warning(
                "Users created before the failure were not removed",
                extra={"user_ids": created},
            )
        raise failures[0]

    return list(results)


async def run_seed(
    engine: Engine,
    clerk: UserProvisioner,
    users: Sequence[dict[str, Any]] = SEED_USERS,
    templates: Sequence[dict[str, str]] = BASE_PROMPTS,
    block_size: int = DEFAULT_BLOCK_SIZE,
    password: str = "testPassword123!",
) -> SeedResult:
    """Provision demo users and replace all prompts with the seed set.

    Args:
        engine: Database engine to write to
        clerk: Identity service client used to create the users
        users: Users to create
        templates: Prompt templates (name, description, content)
        block_size: Consecutive templates given to each user
        password: Password for every demo user

    Returns:
        SeedResult with the new user ids and row counts

    Raises:
        ValueError: If the users cannot cover the templates
        ExternalServiceFailure: If a user cannot be created
        sqlalchemy.exc.SQLAlchemyError: If the prompt rewrite fails
    """
    needed = required_user_count(len(templates), block_size)
    if needed > len(users):
        raise ValueError(
            f"{len(templates)} templates in blocks of {block_size} need {needed} users, got {len(users)}"
        )

    logger.info("Starting seeding...")
    try:
        user_ids = await provision_users(clerk, users, password)
        logger.info("Created test users", extra={"user_ids": user_ids})

        rows = assign_owners(templates, user_ids, block_size)

        # Clear and insert together so readers never see an empty table
        with get_connection(engine) as conn:
            cleared = conn.execute(delete(prompts_table)).rowcount
            if rows:
                conn.execute(insert(prompts_table), rows)

        logger.info(
            "Seeding completed successfully",
            extra={"prompts_cleared": cleared, "prompts_inserted": len(rows)},
        )
    except Exception:
        logger.error("Error seeding database", exc_info=True)
        raise

    return SeedResult(user_ids=user_ids, prompts_cleared=cleared, prompts_inserted=len(rows))


async def seed_from_settings(settings: Settings, block_size: Optional[int] = None) -> SeedResult:
    """Run the seed job with a client and engine built from settings.

    Both are released when the run ends, whether it succeeds or not.

    Raises:
        ConfigurationError: If CLERK_SECRET_KEY is not configured
    """
    async with ClerkUserClient.from_settings(settings) as clerk:
        engine = create_db_engine(settings.database_url)
        try:
            return await run_seed(
                engine,
                clerk,
                block_size=settings.seed_block_size if block_size is None else block_size,
                password=settings.seed_password,
            )
        finally:
            engine.dispose()

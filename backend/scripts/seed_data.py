"""Seed script to populate the local dev database with default roles and users.

Every seeded user has the password "secret".

Usage:
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate
    PYTHONPATH=backend/src python backend/scripts/seed_data.py populate --force
    PYTHONPATH=backend/src python backend/scripts/seed_data.py clear
"""

import argparse
import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.security import hash_password
from db.session import create_engine, create_session_factory
from models import Role, User

SEED_PASSWORD = 'secret'

ROLES = [
    {'name': 'Admin', 'auth_level': 3},
    {'name': 'Editor', 'auth_level': 2},
    {'name': 'User', 'auth_level': 1},
]

# Each seeded user gets the role with the matching name
USERS = [
    {'username': 'admin', 'email': 'admin@example.com', 'role': 'Admin'},
    {'username': 'editor', 'email': 'editor@example.com', 'role': 'Editor'},
    {'username': 'user', 'email': 'user@example.com', 'role': 'User'},
]

SEED_EMAILS = [data['email'] for data in USERS]
SEED_ROLE_NAMES = [data['name'] for data in ROLES]


async def create_roles(session: AsyncSession) -> dict[str, Role]:
    """Create seed roles, keyed by name."""
    role_map = {}
    for data in ROLES:
        role = Role(name=data['name'], auth_level=data['auth_level'])
        session.add(role)
        role_map[role.name] = role
    await session.flush()
    print(f'  Created {len(role_map)} roles')
    return role_map


async def create_users(session: AsyncSession, role_map: dict[str, Role]) -> None:
    """Create seed users and attach their roles."""
    password_hash = await asyncio.to_thread(hash_password, SEED_PASSWORD)
    for data in USERS:
        role = role_map.get(data['role'])
        if role is None:
            raise ValueError(f'user "{data["email"]}" references unknown role "{data["role"]}"')
        session.add(User(
            username=data['username'],
            email=data['email'],
            password=password_hash,
            roles=[role],
        ))
    await session.flush()
    print(f'  Created {len(USERS)} users')


async def clear_data(session: AsyncSession) -> None:
    """Delete the seeded users and roles. Role assignments and todos go by cascade."""
    user_result = await session.execute(delete(User).where(User.email.in_(SEED_EMAILS)))
    role_result = await session.execute(delete(Role).where(Role.name.in_(SEED_ROLE_NAMES)))
    await session.flush()
    print(f'  Deleted {user_result.rowcount} users, {role_result.rowcount} roles')
    print('Clear complete.')


async def populate(force: bool = False) -> None:
    """Populate the database with seed data in one transaction."""
    settings = get_settings()
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        try:
            user_count = (await session.execute(
                select(func.count()).select_from(User).where(User.email.in_(SEED_EMAILS))
            )).scalar()

            if user_count and user_count > 0:
                if force:
                    print('Existing data found, clearing first (--force)...')
                    await clear_data(session)
                else:
                    print(
                        f'Data already exists ({user_count} seed users). '
                        f'Use --force to clear and re-seed.'
                    )
                    return

            print('Populating seed data...')
            role_map = await create_roles(session)
            await create_users(session, role_map)
            await session.commit()
            print('Seed data created successfully.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Clear the seeded users and roles."""
    settings = get_settings()
    engine = create_engine(settings)
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        try:
            await clear_data(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    if settings.env == 'production':
        print(
            'ERROR: Seed script refuses to run with ENV=production.\n'
            'It writes well-known credentials and must only run against a local dev database.'
        )
        raise SystemExit(1)

    parser = argparse.ArgumentParser(description='Seed the dev database with roles and users.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Create default roles and users')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing seed data before populating',
    )

    subparsers.add_parser('clear', help='Remove the seeded roles and users')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()

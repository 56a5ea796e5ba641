# manage.py
"""
Operational commands.

     python manage.py init-db         create missing tables
     python manage.py seed            create the default superadmin and test agent
     python manage.py purge-orphans   delete tasks whose property is gone
     python manage.py realign-tasks   reassign tasks to their property's owner
"""
import argparse
import logging
import os
import sys

from sqlalchemy import select

import config
from database import Database
from models import Role, User
from services import AuthService, TaskService

logger = logging.getLogger("manage")

SEED_USERS = (
    {
        "name": "Super Admin",
        "email": os.getenv("SEED_SUPERADMIN_EMAIL", "superadmin@inmobiliaria.com"),
        "password": os.getenv("SEED_SUPERADMIN_PASSWORD", "superadminpassword123"),
        "role": Role.SUPERADMIN,
    },
    {
        "name": "Agente de Prueba",
        "email": os.getenv("SEED_AGENT_EMAIL", "agente.prueba@inmobiliaria.com"),
        "password": os.getenv("SEED_AGENT_PASSWORD", "agentepassword123"),
        "role": Role.AGENT,
    },
)


def init_db(database: Database) -> None:
    database.create_all()
    logger.info("Tables created")


def seed(database: Database) -> int:
    """Create the seed users that do not exist yet. Returns how many were created."""
    created = 0
    with database.session_scope() as db:
        for seed_user in SEED_USERS:
            email = seed_user["email"].strip().lower()
            if db.scalars(select(User).where(User.email == email)).first() is not None:
                logger.info("User %s already exists, skipping", email)
                continue
            AuthService.create_by_admin(db, seed_user["name"], email, seed_user["password"], seed_user["role"])
            logger.info("Created %s %s", seed_user["role"].value, email)
            created += 1
    return created


def purge_orphans(database: Database) -> int:
    with database.session_scope() as db:
        removed = TaskService.purge_orphaned_tasks(db)
    logger.info("%s orphaned task(s) removed", removed)
    return removed


def realign_tasks(database: Database) -> int:
    with database.session_scope() as db:
        realigned = TaskService.realign_assignments(db)
    logger.info("%s task(s) realigned", realigned)
    return realigned


COMMANDS = {
    "init-db": init_db,
    "seed": seed,
    "purge-orphans": purge_orphans,
    "realign-tasks": realign_tasks,
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Real estate back office maintenance commands")
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument("--database-url", default=config.DATABASE_URL)
    args = parser.parse_args(argv)

    config.configure_logging()
    database = Database(args.database_url, echo=config.SQL_ECHO)
    database.init()
    try:
        COMMANDS[args.command](database)
    finally:
        database.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

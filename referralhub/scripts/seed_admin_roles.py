"""
Seed Admin Roles Script
This script populates the admin_roles table using the role matrix config.
Run with: python -m referralhub.scripts.seed_admin_roles
"""

import sys
import logging

from referralhub.config.admin_roles_config import ROLE_MATRIX
from referralhub.database.supabase_client import get_service_supabase
from supabase import Client

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_admin_roles(supabase: Client, roles=None):
    """Upsert admin roles by name. Returns (created, updated)."""
    logger.info("Seeding admin roles...")

    roles = ROLE_MATRIX if roles is None else roles
    created_count = 0
    updated_count = 0

    for role in roles:
        try:
            existing = supabase.table("admin_roles")\
                .select("id")\
                .eq("name", role["name"])\
                .execute()

            if existing.data:
                supabase.table("admin_roles")\
                    .update({
                        "display_name": role["display_name"],
                        "description": role["description"],
                        "permissions": role["permissions"],
                    })\
                    .eq("name", role["name"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated admin role: {role['name']}")
            else:
                supabase.table("admin_roles").insert(role).execute()
                created_count += 1
                logger.debug(f"Created admin role: {role['name']}")
        except Exception as e:
            logger.error(f"Error processing admin role {role['name']}: {e}")

    logger.info(f"Admin roles seeded: {created_count} created, {updated_count} updated")
    return created_count, updated_count


def main():
    try:
        supabase = get_service_supabase()
        seed_admin_roles(supabase)
        logger.info("Seeding completed successfully!")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

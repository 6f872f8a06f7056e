import asyncio
import logging
from typing import List, Optional
from referralhub.config import settings
from referralhub.core.utils import utcnow
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.pools.service import PoolService
from supabase import Client

logger = logging.getLogger(__name__)


async def check_expired_pools(supabase: Optional[Client] = None) -> List[str]:
    """Run check_pool_progression for every user whose active pool timer has run out.
    Returns the user ids that were checked."""
    checked: List[str] = []
    try:
        supabase = supabase or get_service_supabase()
        service = PoolService(supabase)
        result = supabase.table("pool_progress")\
            .select("user_id, pool_number, timer_end")\
            .eq("status", "active")\
            .lte("timer_end", utcnow().isoformat())\
            .execute()
        user_ids = list(dict.fromkeys(row["user_id"] for row in result.data or []))
        if not user_ids:
            logger.debug("No expired pools found")
            return checked
        logger.info(f"Found {len(user_ids)} user(s) with expired pool timers")
        for user_id in user_ids:
            try:
                service.check_progression(user_id)
                checked.append(user_id)
            except Exception as e:
                logger.error(f"Error checking pool progression for {user_id}: {str(e)}")
    except Exception as e:
        logger.error(f"Error in pool scheduler: {str(e)}")
    return checked


async def pool_scheduler_loop():
    """Background task that periodically settles expired pools"""
    while True:
        try:
            await check_expired_pools()
        except Exception as e:
            logger.error(f"Error in pool scheduler loop: {str(e)}")

        await asyncio.sleep(settings.pool_scheduler_interval_seconds)

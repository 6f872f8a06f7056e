from supabase import Client
from referralhub.core.reporting import to_csv
from referralhub.core.utils import utcnow
from referralhub.modules.admin_logs.models import CSV_HEADERS, LOG_COLUMNS, MAX_LOGS
from referralhub.modules.admin_logs.schemas import ActivityLog, ActivityLogFilters, ActivityLogList
from fastapi import HTTPException
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def to_activity_log(row: Dict[str, Any]) -> ActivityLog:
    data = {k: v for k, v in row.items() if k != "admin_users"}
    data["details"] = data.get("details") or {}
    admin = row.get("admin_users") or {}
    return ActivityLog(**data, admin_username=admin.get("username") or "Unknown")


def filter_logs(logs: List[ActivityLog], filters: ActivityLogFilters) -> List[ActivityLog]:
    filtered = logs
    if filters.search:
        needle = filters.search.lower()
        filtered = [
            log for log in filtered
            if needle in log.action.lower()
            or needle in log.admin_username.lower()
            or needle in (log.resource_type or "").lower()
            or needle in (log.resource_id or "").lower()
        ]
    if filters.action != "all":
        filtered = [log for log in filtered if log.action == filters.action]
    if filters.resource_type != "all":
        filtered = [log for log in filtered if log.resource_type == filters.resource_type]
    return filtered


class AdminLogService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def load_logs(self, days: int, now: Optional[datetime] = None) -> List[ActivityLog]:
        """The newest MAX_LOGS entries from the last `days` days"""
        since = (now or utcnow()) - timedelta(days=days)
        try:
            result = self.supabase.table("admin_activity_logs")\
                .select(LOG_COLUMNS)\
                .gte("created_at", since.isoformat())\
                .order("created_at", desc=True)\
                .limit(MAX_LOGS)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading admin activity logs: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load activity logs: {str(e)}")
        return [to_activity_log(row) for row in result.data or []]

    def list_logs(self, filters: ActivityLogFilters, now: Optional[datetime] = None) -> ActivityLogList:
        logs = self.load_logs(filters.days, now)
        filtered = filter_logs(logs, filters)
        return ActivityLogList(
            logs=filtered,
            total=len(filtered),
            # filter options come from the whole window, not the filtered page
            actions=sorted({log.action for log in logs}),
            resource_types=sorted({log.resource_type for log in logs if log.resource_type}),
        )

    def export_csv(self, filters: ActivityLogFilters, now: Optional[datetime] = None) -> str:
        logs = filter_logs(self.load_logs(filters.days, now), filters)
        rows = [
            [
                log.created_at.isoformat() if log.created_at else "",
                log.admin_username,
                log.action,
                log.resource_type or "",
                log.resource_id or "",
                log.ip_address or "",
            ]
            for log in logs
        ]
        return to_csv(CSV_HEADERS, rows)

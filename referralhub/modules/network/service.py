from supabase import Client
from referralhub.config import settings
from referralhub.core.utils import parse_timestamp, start_of_month, sum_field, utcnow
from referralhub.modules.network.models import PROFILE_PAGE_SIZE, REFERRAL_CODE_BATCH
from referralhub.modules.network.schemas import NetworkMember, NetworkStats, ReferralLink
from fastapi import HTTPException
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

MEMBER_COLUMNS = (
    "id, username, rank, account_status, activation_date, created_at, "
    "referral_code, referred_by, total_direct_referrals"
)


class NetworkService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def walk_downline(self, profile: Dict[str, Any], max_depth: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Breadth-first walk of the caller's downline following referred_by -> referral_code.
        Returns member rows annotated with level, sponsor_id and team_size; every
        profile appears at most once, so cyclic sponsor data cannot loop.
        """
        max_depth = max_depth or settings.network_max_depth
        if not profile.get("referral_code"):
            return []
        visited = {profile["id"]}
        code_owner = {profile.get("referral_code"): profile["id"]}
        members: List[Dict[str, Any]] = []
        frontier = [profile.get("referral_code")]
        level = 1
        while frontier and level <= max_depth:
            next_frontier = []
            for row in self._children_of(frontier):
                if row["id"] in visited:
                    continue
                visited.add(row["id"])
                member = dict(row)
                member["level"] = level
                member["sponsor_id"] = code_owner.get(row.get("referred_by"))
                member["team_size"] = 0
                members.append(member)
                if row.get("referral_code"):
                    code_owner[row["referral_code"]] = row["id"]
                    next_frontier.append(row["referral_code"])
            frontier = next_frontier
            level += 1

        # deepest members first so each sponsor sees its children's totals
        by_id = {m["id"]: m for m in members}
        for member in sorted(members, key=lambda m: m["level"], reverse=True):
            sponsor = by_id.get(member["sponsor_id"])
            if sponsor is not None:
                sponsor["team_size"] += 1 + member["team_size"]
        return members

    def _children_of(self, codes: List[str]) -> List[Dict[str, Any]]:
        """Profiles sponsored by any of codes, fetched in code batches and row pages"""
        rows: List[Dict[str, Any]] = []
        for start in range(0, len(codes), REFERRAL_CODE_BATCH):
            batch = codes[start:start + REFERRAL_CODE_BATCH]
            offset = 0
            while True:
                result = self.supabase.table("profiles")\
                    .select(MEMBER_COLUMNS)\
                    .in_("referred_by", batch)\
                    .order("id")\
                    .range(offset, offset + PROFILE_PAGE_SIZE - 1)\
                    .execute()
                page = result.data or []
                rows.extend(page)
                if len(page) < PROFILE_PAGE_SIZE:
                    break
                offset += PROFILE_PAGE_SIZE
        return rows

    def _earnings_by_member(self, user_id: str) -> Tuple[Dict[str, float], float]:
        """(amount earned per downline member, total earned) from the caller's bonuses"""
        result = self.supabase.table("referral_bonuses")\
            .select("reference_id, amount")\
            .eq("user_id", user_id)\
            .execute()
        earned: Dict[str, float] = {}
        for bonus in result.data or []:
            ref = bonus.get("reference_id")
            if ref:
                earned[ref] = earned.get(ref, 0.0) + float(bonus.get("amount") or 0)
        return earned, sum_field(result.data or [], "amount")

    def _to_members(self, rows: List[Dict[str, Any]], earned: Dict[str, float]) -> List[NetworkMember]:
        return [
            NetworkMember(
                id=row["id"],
                username=row.get("username"),
                rank=row.get("rank"),
                account_status=row.get("account_status"),
                activation_date=row.get("activation_date"),
                created_at=row.get("created_at"),
                level=row["level"],
                sponsor_id=row.get("sponsor_id"),
                total_earned_from=earned.get(row["id"], 0.0),
                direct_referrals_count=row.get("total_direct_referrals") or 0,
                team_size=row["team_size"],
            )
            for row in rows
        ]

    def list_members(
        self,
        profile: Dict[str, Any],
        search: Optional[str] = None,
        level: Optional[int] = None,
        status: Optional[str] = None,
    ) -> List[NetworkMember]:
        """Downline members, optionally filtered by username substring, level and status"""
        try:
            earned, _ = self._earnings_by_member(profile["id"])
            members = self._to_members(self.walk_downline(profile), earned)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to load network for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if search:
            needle = search.lower()
            members = [m for m in members if needle in (m.username or "").lower()]
        if level is not None:
            members = [m for m in members if m.level == level]
        if status and status != "all":
            members = [m for m in members if m.account_status == status]
        return members

    def get_stats(self, profile: Dict[str, Any], now: Optional[datetime] = None) -> NetworkStats:
        now = now or utcnow()
        try:
            earned, total_volume = self._earnings_by_member(profile["id"])
            members = self._to_members(self.walk_downline(profile), earned)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to load network stats for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        month_start = start_of_month(now)
        direct = [m for m in members if m.level == 1]
        top = sorted(members, key=lambda m: m.total_earned_from, reverse=True)[:5]
        return NetworkStats(
            total_network_size=len(members),
            direct_referrals=len(direct),
            active_members=len([m for m in direct if m.account_status == "active"]),
            total_volume=total_volume,
            this_month_growth=len([
                m for m in direct
                if m.created_at and parse_timestamp(m.created_at) >= month_start
            ]),
            levels_deep=max((m.level for m in members), default=0),
            top_performers=top,
        )

    def get_referral_link(self, profile: Dict[str, Any]) -> ReferralLink:
        code = profile.get("referral_code")
        if not code:
            raise HTTPException(status_code=404, detail="Referral code not found")
        return ReferralLink(
            referral_code=code,
            link=f"{settings.frontend_url.rstrip('/')}/register?ref={code}",
            share_title="Join My Network",
            share_text=f"Join me on this amazing platform and start earning! Use my referral code: {code}",
        )

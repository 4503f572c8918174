"""
Directory listing: recency window, role/name ordering and grouping by small group.

All functions are pure and recompute from the full member and group lists on
every call; the lists are small (tens of records).
"""

import unicodedata
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Set, Tuple

from prayerboard.modules.members.schemas import (
    DirectoryEntry, DirectoryGroup, DirectoryResponse, MemberResponse, MemberRole, ROLE_PRIORITY
)
from prayerboard.modules.small_groups.schemas import SmallGroupResponse

RECENT_WINDOW = timedelta(days=14)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from the store are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _script_class(char: str) -> int:
    category = unicodedata.category(char)
    if not category.startswith(("L", "N")):
        return 0
    if category.startswith("N"):
        return 1
    if "\u1100" <= char <= "\u11ff":
        return 2
    if "\u4e00" <= char <= "\u9fff":
        return 3
    return 4


def korean_collation_key(text: str) -> Tuple[Tuple[Tuple[int, str], ...], str]:
    """Sort key approximating Korean-locale collation.

    NFKD splits precomposed Hangul syllables into conjoining jamo and maps
    compatibility jamo (ㄱ) onto them; Unicode allocates conjoining jamo in
    dictionary order (initial < medial < final). Each character is prefixed
    with its script class so symbols < digits < Hangul < Han < Latin and other
    letters, as in the ko locale. Letters compare case- and accent-insensitively
    first; remaining ties put lowercase before uppercase.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    primary = tuple(
        (_script_class(char), char.casefold())
        for char in decomposed
        if not unicodedata.category(char).startswith("M")
    )
    return primary, decomposed.swapcase()


def role_priority(role: MemberRole) -> int:
    return ROLE_PRIORITY[MemberRole(role)]


def compute_recent(
    members: Iterable[MemberResponse],
    now: Optional[datetime] = None,
    window: timedelta = RECENT_WINDOW,
) -> List[MemberResponse]:
    """Members updated within `window` of `now` (inclusive), most recent first."""
    now = _as_utc(now or datetime.now(timezone.utc))
    cutoff = now - window
    recent = [m for m in members if _as_utc(m.updated_at) >= cutoff]
    return sorted(recent, key=lambda m: _as_utc(m.updated_at), reverse=True)


def recent_ids(recent: Iterable[MemberResponse]) -> Set[str]:
    return {m.id for m in recent}


def is_recent_id(member: MemberResponse, recent_set: Set[str]) -> bool:
    return member.id in recent_set


def sort_members(members: Iterable[MemberResponse]) -> List[MemberResponse]:
    """Pastor, then leader, then sub-leader; names in Korean order within a role."""
    return sorted(members, key=lambda m: (role_priority(m.role), korean_collation_key(m.name)))


def sort_groups(groups: Iterable[SmallGroupResponse]) -> List[SmallGroupResponse]:
    return sorted(groups, key=lambda g: korean_collation_key(g.name))


def _sections(
    members: Iterable[MemberResponse],
    groups: Iterable[SmallGroupResponse],
) -> List[Tuple[SmallGroupResponse, List[MemberResponse]]]:
    members = list(members)
    return [
        (group, sort_members(m for m in members if m.small_group_id == group.id))
        for group in sort_groups(groups)
    ]


def group_by_group(
    members: Iterable[MemberResponse],
    groups: Iterable[SmallGroupResponse],
) -> Dict[str, List[MemberResponse]]:
    """Map group name -> sorted members, groups in Korean name order.

    Every group gets an entry even when empty. Members pointing at an unknown
    group are left out.
    """
    return {group.name: bucket for group, bucket in _sections(members, groups)}


def build_directory(
    members: Iterable[MemberResponse],
    groups: Iterable[SmallGroupResponse],
    now: Optional[datetime] = None,
    window: timedelta = RECENT_WINDOW,
) -> DirectoryResponse:
    now = _as_utc(now or datetime.now(timezone.utc))
    members = list(members)
    recent = compute_recent(members, now, window)
    recent_set = recent_ids(recent)

    # One section per group id; groups sharing a name stay separate here
    sections = [
        DirectoryGroup(
            group=group,
            members=[DirectoryEntry(member=m, is_recent=is_recent_id(m, recent_set)) for m in bucket],
        )
        for group, bucket in _sections(members, groups)
    ]
    return DirectoryResponse(generated_at=now, recent=recent, groups=sections)

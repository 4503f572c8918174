"""In-memory stand-in for the parts of the supabase-py client the services call."""

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional


def _parse(value):
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.action = "select"
        self.payload: Optional[Dict[str, Any]] = None
        self.columns = "*"
        self.filters: List = []
        self.ordering: Optional[tuple] = None
        self.single_mode: Optional[str] = None

    def select(self, columns: str = "*"):
        self.columns = columns
        return self

    def insert(self, payload: Dict[str, Any]):
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload: Dict[str, Any]):
        self.action = "update"
        self.payload = payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: _parse(row.get(column)) >= _parse(value))
        return self

    def order(self, column, desc: bool = False):
        self.ordering = (column, desc)
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def _matching(self) -> List[Dict[str, Any]]:
        rows = self.db.tables[self.table]
        return [row for row in rows if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.calls.append((self.table, self.action))
        if self.db.fail_next:
            self.db.fail_next = False
            raise RuntimeError("connection refused")
        if (self.table, self.action) in self.db.fail_actions:
            raise RuntimeError(f"{self.action} on {self.table} failed")
        if self.action == "insert":
            return FakeResponse([self.db.insert(self.table, self.payload)])
        if self.action == "update":
            return FakeResponse([self.db.update(self.table, row, self.payload) for row in self._matching()])
        if self.action == "delete":
            return FakeResponse([self.db.delete(self.table, row) for row in list(self._matching())])

        rows = [self.db.expand(self.table, row, self.columns) for row in self._matching()]
        if self.ordering:
            column, desc = self.ordering
            rows.sort(key=lambda r: _parse(r[column]), reverse=desc)
        if self.single_mode:
            if not rows:
                return None if self.single_mode == "maybe" else FakeResponse(None)
            return FakeResponse(rows[0])
        return FakeResponse(rows)


class FakeBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.db.storage_fail:
            raise RuntimeError("storage unavailable")
        self.db.files[path] = file
        return {"path": path}

    def remove(self, paths):
        for path in paths:
            self.db.files.pop(path, None)
        return [{"name": p} for p in paths]

    def download(self, path):
        if path not in self.db.files:
            raise RuntimeError("Object not found")
        return self.db.files[path]

    def create_signed_url(self, path, expires_in):
        self.db.signed_requests.append(path)
        return {"signedURL": f"https://storage.test/{self.name}/{path}?token=t{len(self.db.signed_requests)}"}


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self.db, bucket)


class FakeSupabase:
    EMBED = re.compile(r"(\w+):(\w+)\(\*\)|(\w+)\(\*\)")

    def __init__(self, now: Optional[datetime] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            "small_groups": [],
            "members": [],
            "prayer_requests": [],
        }
        self.files: Dict[str, bytes] = {}
        self.signed_requests: List[str] = []
        self.calls: List[tuple] = []
        self.now = now or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        self.fail_next = False
        self.fail_actions = set()
        self.storage_fail = False
        self.storage = FakeStorage(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def tick(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def _stamp(self) -> str:
        return self.now.isoformat()

    def insert(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        row = {"id": str(uuid.uuid4()), "created_at": self._stamp(), "updated_at": self._stamp()}
        row.update(payload)
        self.tables[table].append(row)
        self._touch_member(table, row)
        return dict(row)

    def update(self, table: str, row: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        row.update(payload)
        row["updated_at"] = self._stamp()
        self._touch_member(table, row)
        return dict(row)

    def delete(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        self.tables[table].remove(row)
        if table == "small_groups":
            for member in [m for m in self.tables["members"] if m["small_group_id"] == row["id"]]:
                self.delete("members", member)
        elif table == "members":
            for request in [r for r in self.tables["prayer_requests"] if r["member_id"] == row["id"]]:
                self.tables["prayer_requests"].remove(request)
        else:
            self._touch_member(table, row)
        return dict(row)

    def _touch_member(self, table: str, row: Dict[str, Any]) -> None:
        if table != "prayer_requests":
            return
        for member in self.tables["members"]:
            if member["id"] == row["member_id"]:
                member["updated_at"] = self._stamp()

    def expand(self, table: str, row: Dict[str, Any], columns: str) -> Dict[str, Any]:
        out = dict(row)
        for alias, target, plain in self.EMBED.findall(columns):
            if alias:
                out[alias] = next(
                    (dict(g) for g in self.tables[target] if g["id"] == row.get("small_group_id")), None
                )
            elif plain == "prayer_requests":
                out[plain] = [dict(r) for r in self.tables[plain] if r["member_id"] == row["id"]]
        return out

    # Seeding helpers for tests
    def add_group(self, name: str, **extra) -> Dict[str, Any]:
        return self.insert("small_groups", {"name": name, **extra})

    def add_member(self, group_id: str, name: str, role: str = "sub_leader", **extra) -> Dict[str, Any]:
        payload = {
            "small_group_id": group_id,
            "name": name,
            "role": role,
            "photo_url": None,
            "photo_position": {"x": 50, "y": 50, "zoom": 1},
        }
        payload.update(extra)
        return self.insert("members", payload)

    def add_request(self, member_id: str, content: str) -> Dict[str, Any]:
        return self.insert("prayer_requests", {"member_id": member_id, "content": content})

"""
Pytest configuration and fixtures for Campus Portal tests

FakeSupabase는 서비스가 사용하는 Supabase 쿼리 빌더 일부를 메모리로 흉내낸다.
테이블별 유니크 키를 선언하면 insert 시 중복을 거부한다 (DB 제약 재현).
"""

import copy
import re
import sys
import uuid
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeAPIError(Exception):
    """postgrest APIError 대용"""


def _ilike(value: Any, pattern: str) -> bool:
    """% 와일드카드만 처리하는 대소문자 무시 LIKE"""
    if value is None:
        return False
    regex = ".*".join(re.escape(part) for part in pattern.split("%"))
    return re.fullmatch(regex, str(value), re.IGNORECASE | re.DOTALL) is not None


class FakeResponse:
    def __init__(self, data: Any = None, count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    """table() 체인"""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns: Optional[List[str]] = None
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.ignore_duplicates = False
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.order_by: Optional[Tuple[str, bool]] = None
        self.row_limit: Optional[int] = None
        self.count_mode: Optional[str] = None
        self.head = False
        self.single_row = False

    # ---- 동작 ----

    def select(self, *columns: str, count: Optional[str] = None, head: Optional[bool] = None):
        self.op = "select"
        joined = ",".join(columns) if columns else "*"
        if joined.strip() != "*":
            self.columns = [c.strip() for c in joined.split(",") if c.strip()]
        self.count_mode = count
        self.head = bool(head)
        return self

    def insert(self, data):
        self.op = "insert"
        self.payload = data
        return self

    def upsert(self, data, on_conflict: Optional[str] = None, ignore_duplicates: bool = False):
        self.op = "upsert"
        self.payload = data
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def delete(self):
        self.op = "delete"
        return self

    # ---- 필터 ----

    def eq(self, column: str, value: Any):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def or_(self, filters: str):
        """ilike 조건 OR만 지원 (title.ilike.%x%,description.ilike.%x%)"""
        clauses = []
        for clause in filters.split(","):
            column, op, value = clause.split(".", 2)
            assert op == "ilike", f"unsupported or_ operator: {op}"
            clauses.append((column, value))
        self.filters.append(
            lambda row: any(_ilike(row.get(c), v) for c, v in clauses)
        )
        return self

    def in_(self, column: str, values: List[Any]):
        allowed = list(values)
        self.filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, n: int):
        self.row_limit = n
        return self

    def single(self):
        self.single_row = True
        return self

    # ---- 실행 ----

    def _matches(self) -> List[Dict[str, Any]]:
        rows = self.db.tables.setdefault(self.table, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if self.columns is None:
            return copy.deepcopy(row)
        return {c: copy.deepcopy(row.get(c)) for c in self.columns}

    def execute(self) -> FakeResponse:
        self.db.check_failure(self.table, self.op)
        handler = getattr(self, f"_execute_{self.op}")
        return handler()

    def _execute_select(self) -> FakeResponse:
        rows = self._matches()
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(
                rows,
                key=lambda r: (r.get(column) is None, r.get(column) or ""),
                reverse=desc
            )
        if self.row_limit is not None:
            rows = rows[:self.row_limit]

        count = len(rows) if self.count_mode == "exact" else None
        if self.head:
            return FakeResponse(data=[], count=count)

        data = [self._project(r) for r in rows]
        if self.single_row:
            if len(data) != 1:
                raise FakeAPIError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(data=data[0], count=count)
        return FakeResponse(data=data, count=count)

    def _new_rows(self) -> List[Dict[str, Any]]:
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        rows = []
        for item in payload:
            row = dict(self.db.defaults.get(self.table, {}))
            row.update(copy.deepcopy(item))
            row.setdefault("id", str(uuid.uuid4()))
            rows.append(row)
        return rows

    def _check_unique(self, row: Dict[str, Any], ignore: Optional[Dict[str, Any]] = None):
        key_cols = self.db.unique.get(self.table)
        if not key_cols:
            return
        key = tuple(row.get(c) for c in key_cols)
        for existing in self.db.tables.setdefault(self.table, []):
            if existing is ignore:
                continue
            if tuple(existing.get(c) for c in key_cols) == key:
                raise FakeAPIError(
                    f'duplicate key value violates unique constraint "{self.table}_{"_".join(key_cols)}_key"'
                )

    def _execute_insert(self) -> FakeResponse:
        rows = self._new_rows()
        table = self.db.tables.setdefault(self.table, [])
        for row in rows:
            self._check_unique(row)
            table.append(row)
        return FakeResponse(data=copy.deepcopy(rows))

    def _execute_upsert(self) -> FakeResponse:
        conflict_cols = [c.strip() for c in (self.on_conflict or "id").split(",")]
        table = self.db.tables.setdefault(self.table, [])
        result = []
        for item in (self.payload if isinstance(self.payload, list) else [self.payload]):
            existing = next(
                (r for r in table if all(r.get(c) == item.get(c) for c in conflict_cols)),
                None
            )
            if existing is not None:
                # ON CONFLICT DO NOTHING: 기존 행 유지, 결과에서 제외
                if self.ignore_duplicates:
                    continue
                existing.update(copy.deepcopy(item))
                result.append(copy.deepcopy(existing))
            else:
                row = dict(self.db.defaults.get(self.table, {}))
                row.update(copy.deepcopy(item))
                row.setdefault("id", str(uuid.uuid4()))
                self._check_unique(row)
                table.append(row)
                result.append(copy.deepcopy(row))
        return FakeResponse(data=result)

    def _execute_update(self) -> FakeResponse:
        rows = self._matches()
        for row in rows:
            row.update(copy.deepcopy(self.payload))
        return FakeResponse(data=copy.deepcopy(rows))

    def _execute_delete(self) -> FakeResponse:
        rows = self._matches()
        table = self.db.tables[self.table]
        self.db.tables[self.table] = [r for r in table if not any(r is m for m in rows)]
        return FakeResponse(data=copy.deepcopy(rows))


class FakeRPC:
    def __init__(self, db: "FakeSupabase", name: str, params: Optional[Dict[str, Any]]):
        self.db = db
        self.name = name
        self.params = params or {}

    def execute(self) -> FakeResponse:
        self.db.rpc_calls.append((self.name, self.params))
        self.db.check_failure("rpc", self.name)
        handler = self.db.rpc_handlers.get(self.name)
        if handler is None:
            raise FakeAPIError(f"Could not find the function public.{self.name}")
        return FakeResponse(data=handler(self.params))


class FakeAuth:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def get_user(self, token: str):
        user_id = self.db.tokens.get(token)
        if user_id is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=SimpleNamespace(id=user_id))


class FakeBucket:
    def __init__(self, db: "FakeSupabase", bucket: str):
        self.db = db
        self.bucket = bucket

    def create_signed_url(self, path: str, expires_in: int):
        if path not in self.db.files.get(self.bucket, set()):
            raise FakeAPIError("Object not found")
        return {"signedURL": f"https://storage.test/{self.bucket}/{path}?token=signed&expires_in={expires_in}"}

    def remove(self, paths: List[str]):
        self.db.check_failure(f"storage:{self.bucket}", "remove")
        files = self.db.files.setdefault(self.bucket, set())
        removed = [p for p in paths if p in files]
        files.difference_update(removed)
        return [{"name": p} for p in removed]


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self.db, bucket)


class FakeSupabase:
    """메모리 Supabase 클라이언트"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.unique: Dict[str, Tuple[str, ...]] = {
            "club_subscriptions": ("club_id", "user_id"),
            "post_likes": ("post_id", "user_id"),
            "event_registrations": ("event_id", "user_id"),
        }
        self.defaults: Dict[str, Dict[str, Any]] = {
            "club_subscriptions": {"is_active": True, "subscribed_at": "2026-03-02T09:00:00+00:00"},
        }
        self.rpc_handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {}
        self.rpc_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.tokens: Dict[str, str] = {}
        self.files: Dict[str, set] = {}
        self.failures: set = set()
        self.auth = FakeAuth(self)
        self.storage = FakeStorage(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> FakeRPC:
        return FakeRPC(self, name, params)

    # ---- 테스트 헬퍼 ----

    def fail(self, table: str, op: str):
        """다음부터 (table, op) 호출을 실패시킴"""
        self.failures.add((table, op))

    def check_failure(self, table: str, op: str):
        if (table, op) in self.failures:
            raise FakeAPIError(f"simulated failure: {table}.{op}")

    def seed(self, table: str, *rows: Dict[str, Any]):
        self.tables.setdefault(table, []).extend(copy.deepcopy(list(rows)))

    def add_user(self, user_id: str, role: str = "student", **fields) -> str:
        """users 행 + 토큰 등록, Authorization 헤더 값 반환"""
        row = {
            "id": user_id,
            "email": f"{user_id}@campus.test",
            "full_name": f"User {user_id}",
            "role": role,
            "user_status": "active",
            "is_active": True,
            "club_admin": None,
        }
        row.update(fields)
        self.seed("users", row)
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return f"Bearer {token}"


@pytest.fixture
def fake_db():
    """빈 메모리 DB"""
    return FakeSupabase()


@pytest.fixture
def clubs_seeded(fake_db):
    """동아리 3개"""
    fake_db.seed(
        "clubs",
        {"id": "club-robotics-0001", "name": "Robotics Club", "description": "Build robots",
         "club_image_url": None, "club_logo_url": None, "category": "Technology", "status": "active"},
        {"id": "club-drama-000002", "name": "Drama Society", "description": "Stage plays",
         "club_image_url": None, "club_logo_url": None, "category": "Arts", "status": "active"},
        {"id": "club-chess-0000003", "name": "Chess Club", "description": "Play chess",
         "club_image_url": None, "club_logo_url": None, "category": "Games", "status": "active"},
    )
    return fake_db


@pytest.fixture
def client(fake_db):
    """FakeSupabase를 주입한 TestClient"""
    from fastapi.testclient import TestClient
    from app.server import app
    from database.supabase_client import get_db

    app.dependency_overrides[get_db] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

"""
Club Admin Service Tests - 동아리 관리 RPC 테스트
"""
from datetime import date

import pytest

from app.club.admin import ClubAdminService, _club_rpc_params
from app.club.models import ClubCreate, ClubStatus

CLUB_ROWS = [
    {"id": "club-1", "name": "Robotics Club", "description": "Build robots", "category": "Technology",
     "status": "active", "is_public": True, "members_count": 12},
    {"id": "club-2", "name": "Drama Society", "description": "Stage plays", "category": "Arts",
     "status": "pending", "is_public": True},
]


@pytest.fixture
def admin_db(fake_db):
    fake_db.rpc_handlers.update({
        "get_all_clubs_admin": lambda params: CLUB_ROWS,
        "get_active_clubs": lambda params: [r for r in CLUB_ROWS if r["status"] == "active"],
        "create_club_admin": lambda params: "club-new",
        "update_club_admin": lambda params: True,
        "approve_club_admin": lambda params: True,
        "update_club_status_admin": lambda params: True,
        "delete_club_admin": lambda params: True,
    })
    return fake_db


class TestRpcParams:
    """ClubCreate → RPC 파라미터"""

    def test_optional_fields_sent_as_null(self):
        params = _club_rpc_params(ClubCreate(
            name="Robotics Club",
            description="Build robots",
            category="Technology",
            location="",
            panel_members=[],
        ))

        assert params["_name"] == "Robotics Club"
        assert params["_location"] is None
        assert params["_panel_members"] is None
        assert params["_founded_date"] is None
        assert params["_is_public"] is True

    def test_values_passed_through(self):
        params = _club_rpc_params(ClubCreate(
            name="Chess Club",
            description="Play chess",
            category="Games",
            max_members=30,
            founded_date=date(2019, 9, 1),
            social_media={"instagram": "@chess"},
            is_public=False,
        ))

        assert params["_max_members"] == 30
        assert params["_founded_date"] == "2019-09-01"
        assert params["_social_media"] == {"instagram": "@chess"}
        assert params["_is_public"] is False


@pytest.mark.asyncio
class TestClubAdminService:
    """동아리 관리"""

    async def test_fetch_clubs(self, admin_db):
        service = ClubAdminService("admin-1", admin_db)

        clubs = await service.fetch_clubs()

        assert [c.id for c in clubs] == ["club-1", "club-2"]
        assert clubs[1].status == ClubStatus.pending
        assert service.error is None

    async def test_fetch_active_clubs(self, admin_db):
        service = ClubAdminService("user-1", admin_db)
        clubs = await service.fetch_active_clubs()
        assert [c.name for c in clubs] == ["Robotics Club"]

    async def test_create_club_refetches(self, admin_db):
        service = ClubAdminService("admin-1", admin_db)

        club_id = await service.create_club(ClubCreate(
            name="Chess Club", description="Play chess", category="Games"
        ))

        assert club_id == "club-new"
        name, params = admin_db.rpc_calls[0]
        assert name == "create_club_admin"
        assert params["_created_by"] == "admin-1"
        assert admin_db.rpc_calls[-1][0] == "get_all_clubs_admin"
        assert len(service.clubs) == 2

    async def test_update_club_with_status(self, admin_db):
        service = ClubAdminService("admin-1", admin_db)

        ok = await service.update_club(
            "club-2",
            ClubCreate(name="Drama Society", description="Plays", category="Arts"),
            ClubStatus.active
        )

        assert ok is True
        _, params = admin_db.rpc_calls[0]
        assert params["_club_id"] == "club-2"
        assert params["_user_id"] == "admin-1"
        assert params["_status"] == "active"

    async def test_approve_status_delete(self, admin_db):
        service = ClubAdminService("admin-1", admin_db)

        assert await service.approve_club("club-2") is True
        assert await service.update_club_status("club-1", ClubStatus.suspended) is True
        assert await service.delete_club("club-1") is True

        called = [(name, params) for name, params in admin_db.rpc_calls if name != "get_all_clubs_admin"]
        assert called == [
            ("approve_club_admin", {"_club_id": "club-2", "_admin_id": "admin-1"}),
            ("update_club_status_admin", {"_club_id": "club-1", "_status": "suspended", "_admin_id": "admin-1"}),
            ("delete_club_admin", {"_club_id": "club-1", "_user_id": "admin-1"}),
        ]

    async def test_rpc_returns_false(self, admin_db):
        """RPC가 false를 돌려주면 실패"""
        admin_db.rpc_handlers["delete_club_admin"] = lambda params: False
        service = ClubAdminService("admin-1", admin_db)

        assert await service.delete_club("club-1") is False
        assert service.error

    async def test_rpc_error(self, admin_db):
        admin_db.fail("rpc", "approve_club_admin")
        service = ClubAdminService("admin-1", admin_db)

        assert await service.approve_club("club-1") is False
        # 실패 시 목록을 다시 읽지 않음
        assert [name for name, _ in admin_db.rpc_calls] == ["approve_club_admin"]

    async def test_fetch_clubs_error(self, admin_db):
        admin_db.fail("rpc", "get_all_clubs_admin")
        service = ClubAdminService("admin-1", admin_db)

        assert await service.fetch_clubs() == []
        assert service.error == "Failed to fetch clubs"

"""
Membership Service Tests - 멤버십 조회 / 가입 신청 테스트
"""
import pytest

from app.club.memberships import MembershipService
from app.club.models import ApplicationCreate, ApplicationStatus

ROBOTICS = "club-robotics-0001"
DRAMA = "club-drama-000002"
CHESS = "club-chess-0000003"


def approved_application(app_id, club_id, user_id, date):
    return {
        "id": app_id,
        "club_id": club_id,
        "applicant_id": user_id,
        "motivation": "I like it",
        "availability": "Weekends",
        "status": "approved",
        "application_date": date,
        "agreed_to_terms": True,
        "created_at": date,
    }


@pytest.mark.asyncio
class TestMembershipReconciliation:
    """club_memberships → 승인된 신청서 fallback"""

    async def test_synthesized_from_single_approved_application(self, clubs_seeded):
        """멤버십 0건 + 승인 신청 1건 → 합성 멤버십 1건 (role=Member)"""
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
        )
        service = MembershipService(clubs_seeded)

        memberships = await service.get_user_memberships("user-1")

        assert len(memberships) == 1
        m = memberships[0]
        assert m.club_id == DRAMA
        assert m.role == "Member"
        assert m.detailed_role == "Active Member"
        assert m.status == "active"
        assert m.user_id == "user-1"
        assert m.id == "app-1"
        assert m.club.name == "Drama Society"

    async def test_synthesized_rows_not_persisted(self, clubs_seeded):
        """합성 멤버십은 DB에 기록되지 않음"""
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
        )
        service = MembershipService(clubs_seeded)
        await service.get_user_memberships("user-1")

        assert clubs_seeded.tables.get("club_memberships", []) == []

    async def test_explicit_memberships_take_precedence(self, clubs_seeded):
        """멤버십이 있으면 신청서는 보지 않음"""
        clubs_seeded.seed(
            "club_memberships",
            {"id": "m1", "club_id": ROBOTICS, "user_id": "user-1", "role": "President",
             "detailed_role": None, "joined_at": "2025-09-01T00:00:00+00:00", "status": "active"},
            {"id": "m2", "club_id": CHESS, "user_id": "user-1", "role": "Member",
             "detailed_role": None, "joined_at": "2025-10-01T00:00:00+00:00", "status": "active"},
            {"id": "m3", "club_id": DRAMA, "user_id": "user-1", "role": "Member",
             "detailed_role": None, "joined_at": "2025-11-01T00:00:00+00:00", "status": "inactive"},
        )
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
        )
        service = MembershipService(clubs_seeded)

        memberships = await service.get_user_memberships("user-1")

        # joined_at 최신순
        assert [m.id for m in memberships] == ["m2", "m1"]
        assert memberships[1].role == "President"
        assert memberships[1].club.name == "Robotics Club"

    async def test_only_approved_applications(self, clubs_seeded):
        pending = approved_application("app-2", CHESS, "user-1", "2026-03-01T00:00:00+00:00")
        pending["status"] = "pending"
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
            approved_application("app-3", ROBOTICS, "user-2", "2026-02-11T12:00:00+00:00"),
            pending,
        )
        service = MembershipService(clubs_seeded)

        memberships = await service.get_user_memberships("user-1")

        assert [m.club_id for m in memberships] == [DRAMA]

    async def test_unknown_club_placeholder(self, fake_db):
        """clubs에 없는 동아리는 Unknown Club"""
        fake_db.seed(
            "club_membership_application",
            approved_application("app-1", "club-gone", "user-1", "2026-02-10T12:00:00+00:00"),
        )
        service = MembershipService(fake_db)

        memberships = await service.get_user_memberships("user-1")

        assert memberships[0].club.name == "Unknown Club"
        assert memberships[0].club.id == "club-gone"

    async def test_clubs_lookup_failure_keeps_memberships(self, clubs_seeded):
        """동아리 정보 조회가 실패해도 멤버십은 반환 (동아리는 Unknown Club)"""
        clubs_seeded.seed(
            "club_memberships",
            {"id": "m1", "club_id": ROBOTICS, "user_id": "user-1", "role": "President",
             "detailed_role": None, "joined_at": "2025-09-01T00:00:00+00:00", "status": "active"},
        )
        clubs_seeded.fail("clubs", "select")
        service = MembershipService(clubs_seeded)

        memberships = await service.get_user_memberships("user-1")

        assert [m.id for m in memberships] == ["m1"]
        assert memberships[0].role == "President"
        assert memberships[0].club.name == "Unknown Club"
        assert service.error is None

    async def test_clubs_lookup_failure_keeps_synthesized(self, clubs_seeded):
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
        )
        clubs_seeded.fail("clubs", "select")
        service = MembershipService(clubs_seeded)

        memberships = await service.get_user_memberships("user-1")

        assert [m.club_id for m in memberships] == [DRAMA]
        assert memberships[0].club.id == DRAMA

    async def test_no_memberships_no_applications(self, clubs_seeded):
        service = MembershipService(clubs_seeded)
        assert await service.get_user_memberships("user-1") == []

    async def test_failure_returns_empty(self, clubs_seeded):
        clubs_seeded.fail("club_memberships", "select")
        service = MembershipService(clubs_seeded)

        assert await service.get_user_memberships("user-1") == []
        assert service.error is not None


@pytest.mark.asyncio
class TestApplications:
    """가입 신청"""

    def form(self, **overrides):
        data = {
            "motivation": "Want to build robots",
            "availability": "Tuesday evenings",
            "experience": "",
            "agreed_to_terms": True,
        }
        data.update(overrides)
        return ApplicationCreate(**data)

    async def test_submit_application(self, clubs_seeded):
        service = MembershipService(clubs_seeded)

        created = await service.submit_application(ROBOTICS, "user-1", self.form())

        assert created["status"] == "pending"
        assert created["applicant_id"] == "user-1"
        # 빈 문자열은 null
        assert created["experience"] is None
        assert created["application_date"]

    async def test_submit_duplicate_rejected(self, clubs_seeded):
        service = MembershipService(clubs_seeded)
        await service.submit_application(ROBOTICS, "user-1", self.form())

        with pytest.raises(ValueError, match="pending"):
            await service.submit_application(ROBOTICS, "user-1", self.form())

    async def test_submit_requires_fields(self, clubs_seeded):
        service = MembershipService(clubs_seeded)

        with pytest.raises(ValueError):
            await service.submit_application(ROBOTICS, "user-1", self.form(motivation="   "))

        with pytest.raises(ValueError):
            await service.submit_application(ROBOTICS, "user-1", self.form(agreed_to_terms=False))

        assert clubs_seeded.tables.get("club_membership_application", []) == []

    async def test_submit_insert_failure(self, clubs_seeded):
        clubs_seeded.fail("club_membership_application", "insert")
        service = MembershipService(clubs_seeded)

        assert await service.submit_application(ROBOTICS, "user-1", self.form()) is None

    async def test_user_applications_with_club_names(self, clubs_seeded):
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
            approved_application("app-2", "club-unlisted-xyz", "user-1", "2026-03-10T12:00:00+00:00"),
        )
        service = MembershipService(clubs_seeded)

        applications = await service.get_user_applications("user-1")

        # created_at 최신순
        assert [a.id for a in applications] == ["app-2", "app-1"]
        assert applications[0].club_name == "Club club-unl..."
        assert applications[1].club_name == "Drama Society"
        assert applications[1].status == ApplicationStatus.approved

    async def test_user_applications_club_lookup_failure(self, clubs_seeded):
        """동아리 이름 조회 실패해도 신청서는 반환"""
        clubs_seeded.seed(
            "club_membership_application",
            approved_application("app-1", DRAMA, "user-1", "2026-02-10T12:00:00+00:00"),
        )
        clubs_seeded.fail("clubs", "select")
        service = MembershipService(clubs_seeded)

        applications = await service.get_user_applications("user-1")

        assert applications[0].club_name == "Club club-dra..."

    async def test_user_applications_legacy_null_fields(self, clubs_seeded):
        """예전 신청서의 null 필드는 오류 없이 반환"""
        clubs_seeded.seed("club_membership_application", {
            "id": "app-old", "club_id": DRAMA, "applicant_id": "user-1",
            "motivation": None, "availability": None, "status": None,
            "agreed_to_terms": None, "created_at": "2024-01-01T00:00:00+00:00",
        })
        service = MembershipService(clubs_seeded)

        applications = await service.get_user_applications("user-1")

        assert len(applications) == 1
        assert applications[0].motivation is None
        assert applications[0].status == ApplicationStatus.pending
        assert applications[0].agreed_to_terms is False

    async def test_withdraw_pending_only(self, clubs_seeded):
        service = MembershipService(clubs_seeded)
        created = await service.submit_application(ROBOTICS, "user-1", self.form())

        # 다른 사용자는 철회 불가
        assert await service.withdraw_application(created["id"], "user-2") is False
        assert await service.withdraw_application(created["id"], "user-1") is True
        # 이미 철회됨
        assert await service.withdraw_application(created["id"], "user-1") is False

        row = clubs_seeded.tables["club_membership_application"][0]
        assert row["status"] == "withdrawn"


@pytest.mark.asyncio
class TestJoinClub:
    """join_club RPC"""

    async def test_join_club(self, fake_db):
        fake_db.rpc_handlers["join_club"] = lambda params: "membership-123"
        service = MembershipService(fake_db)

        assert await service.join_club(ROBOTICS, "user-1", "") == "membership-123"
        assert fake_db.rpc_calls == [
            ("join_club", {"_club_id": ROBOTICS, "_user_id": "user-1", "_notes": None})
        ]

    async def test_join_club_failure(self, fake_db):
        fake_db.fail("rpc", "join_club")
        service = MembershipService(fake_db)

        assert await service.join_club(ROBOTICS, "user-1") is None

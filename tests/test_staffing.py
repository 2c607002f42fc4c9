"""Tests for staff hiring, firing, reassignment and the lobby queues."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.tower_bench import TowerBench
from simlibrary.config import EngineConfig
from simlibrary.core.enums import Domain, ErrorCode, FloorStatus
from simlibrary.systems import lobby


# ---------------------------------------------------------------------------
# Standard staff
# ---------------------------------------------------------------------------

class TestHireStaff:
    def test_hiring_a_later_slot_is_category_locked(self):
        bench = TowerBench()
        starter = bench.starter()
        result = bench.session.hire_staff(starter.id, "clerk")
        assert not result.success
        assert result.error == ErrorCode.CATEGORY_LOCKED
        assert bench.state.stars == 1000
        assert bench.state.tower_bucks == 5
        assert starter.staff == []

    def test_hires_fill_slots_in_order(self):
        bench = TowerBench()
        starter = bench.starter()

        first = bench.session.hire_staff(starter.id)
        assert first.success
        assert first.data["category_unlocked"] == 0
        assert first.data["staff"]["type_id"] == "page"
        assert bench.state.stars == 950
        assert starter.is_unlocked(0)
        assert not starter.is_unlocked(1)

        assert bench.session.hire_staff(starter.id, "page").error == ErrorCode.SLOT_OCCUPIED
        assert bench.session.hire_staff(starter.id, "clerk").success
        assert bench.session.hire_staff(starter.id).success
        assert [m.type_id for m in starter.members()] == ["page", "clerk", "librarian"]
        assert bench.state.stars == 1000 - 50 - 100 - 150

        assert bench.session.hire_staff(starter.id).error == ErrorCode.FULLY_STAFFED
        assert bench.state.stats["total_staff_hired"] == 3

    def test_hired_member_points_at_floor(self):
        bench = TowerBench()
        starter = bench.starter()
        bench.session.hire_staff(starter.id)
        member = starter.members()[0]
        assert member.assigned_floor == starter.id
        assert 1 <= member.skill <= 5

    def test_building_floor_is_wrong_state(self):
        bench = TowerBench()
        floor_id = bench.session.build_floor("fiction").data["floor_id"]
        assert bench.state.floor(floor_id).status == FloorStatus.BUILDING
        assert bench.session.hire_staff(floor_id).error == ErrorCode.WRONG_STATE

    def test_insufficient_funds(self):
        bench = TowerBench()
        bench.state.stars = 10
        assert bench.session.hire_staff(bench.starter().id).error == ErrorCode.INSUFFICIENT_FUNDS
        assert bench.starter().staff == []

    def test_utility_floor_rejects_standard_hire(self):
        bench = TowerBench()
        assert bench.session.hire_staff(bench.basement().id).error == ErrorCode.INVALID_TYPE


class TestUtilityStaff:
    def test_role_slots(self):
        bench = TowerBench()
        basement = bench.basement()
        result = bench.session.hire_utility_staff(basement.id, "janitor")
        assert result.success
        assert result.data["slot"] == 0
        assert bench.state.stars == 880
        assert basement.staff[0].type_id == "janitor"
        assert basement.staff[1] is None

        assert bench.session.hire_utility_staff(basement.id, "janitor").error == ErrorCode.SLOT_OCCUPIED
        assert bench.session.hire_utility_staff(basement.id, "security").data["slot"] == 2

    def test_wrong_role(self):
        bench = TowerBench()
        basement = bench.basement()
        assert bench.session.hire_utility_staff(basement.id, "page").error == ErrorCode.INVALID_TYPE
        assert bench.session.hire_utility_staff(basement.id, "attendant").error == ErrorCode.INVALID_TYPE

    def test_standard_floor_rejects_utility_hire(self):
        bench = TowerBench()
        assert bench.session.hire_utility_staff(bench.starter().id, "janitor").error == ErrorCode.INVALID_TYPE


class TestFireAndReassign:
    def test_fire_compacts_slots(self):
        bench = TowerBench()
        starter = bench.starter()
        page = bench.seat(starter, "page")
        clerk = bench.seat(starter, "clerk")

        assert bench.session.fire_staff(starter.id, page.id).success
        assert starter.members() == [clerk]
        assert starter.is_unlocked(0)
        assert not starter.is_unlocked(1)

    def test_fire_requires_matching_floor(self):
        bench = TowerBench()
        starter = bench.starter()
        page = bench.seat(starter, "page")
        assert bench.session.fire_staff(bench.basement().id, page.id).error == ErrorCode.NOT_FOUND
        assert bench.session.fire_staff(starter.id, "s999").error == ErrorCode.NOT_FOUND

    def test_fire_from_pool(self):
        bench = TowerBench()
        fiction = bench.ready_floor("fiction", staff=1)
        member_id = fiction.members()[0].id
        bench.session.delete_floor(fiction.id)
        assert bench.session.fire_staff(None, member_id).success
        assert bench.state.unassigned_staff == []

    def test_reassign_to_another_floor(self):
        bench = TowerBench()
        starter = bench.starter()
        page = bench.seat(starter, "page")
        fiction = bench.ready_floor("fiction")

        result = bench.session.reassign_staff(page.id, fiction.id)
        assert result.success
        assert starter.members() == []
        assert fiction.members() == [page]
        assert page.assigned_floor == fiction.id

    def test_reassign_onto_full_floor(self):
        bench = TowerBench()
        page = bench.seat(bench.starter(), "page")
        fiction = bench.ready_floor("fiction", staff=3)
        assert bench.session.reassign_staff(page.id, fiction.id).error == ErrorCode.FULLY_STAFFED

    def test_reassign_to_same_floor(self):
        bench = TowerBench()
        starter = bench.starter()
        page = bench.seat(starter, "page")
        assert bench.session.reassign_staff(page.id, starter.id).error == ErrorCode.WRONG_STATE


# ---------------------------------------------------------------------------
# Lobby
# ---------------------------------------------------------------------------

class TestLobby:
    def test_capacity_is_shared(self):
        bench = TowerBench()
        ctx = bench.ctx
        assert lobby.add_applicant(ctx, bench.now) is not None
        assert lobby.add_vip_guest(ctx, bench.now) is not None
        assert lobby.add_applicant(ctx, bench.now) is not None
        assert lobby.add_applicant(ctx, bench.now) is None
        assert lobby.add_vip_guest(ctx, bench.now) is None
        assert bench.state.lobby_occupancy == 3

    def test_lobby_never_exceeds_capacity_over_time(self):
        bench = TowerBench()
        for _ in range(120):
            bench.advance_seconds(15)
            assert bench.state.lobby_occupancy <= 3

    def test_entries_expire(self):
        bench = TowerBench()
        applicant = lobby.add_applicant(bench.ctx, bench.now)
        assert applicant.expires_at == bench.now + 120_000
        assert lobby.expire_lobby(bench.ctx, applicant.expires_at) == 1
        assert bench.state.applicants == []

    def test_arrival_notifies(self):
        bench = TowerBench()
        applicant = lobby.add_applicant(bench.ctx, bench.now)
        pending = bench.session.consume_notifications()
        assert pending["applicant_arrived"]["id"] == applicant.id
        assert bench.session.consume_notifications() == {}

    def test_hire_applicant_into_pool_at_half_price(self):
        bench = TowerBench()
        applicant = lobby.add_applicant(bench.ctx, bench.now)
        cost = bench.catalog.staff_types[applicant.staff_type].hire_cost // 2

        result = bench.session.hire_applicant(applicant.id)
        assert result.success
        assert result.data["cost"] == cost
        assert bench.state.stars == 1000 - cost
        assert bench.state.applicants == []
        member = bench.state.unassigned_staff[0]
        assert member.skill == applicant.skill
        assert member.assigned_floor is None

    def test_dismiss_applicant(self):
        bench = TowerBench()
        applicant = lobby.add_applicant(bench.ctx, bench.now)
        assert bench.session.dismiss_applicant(applicant.id).success
        assert bench.session.dismiss_applicant(applicant.id).error == ErrorCode.NOT_FOUND

    def test_welcome_vip_without_stock_keeps_guest(self):
        bench = TowerBench()
        guest = lobby.add_vip_guest(bench.ctx, bench.now)
        result = bench.session.welcome_vip(guest.id)
        assert result.error == ErrorCode.NO_ELIGIBLE_FLOOR
        assert bench.state.lobby_vips == [guest]

    def test_welcome_vip_sends_reader_up(self):
        bench = TowerBench()
        starter = bench.starter()
        bench.seat(starter, "page")
        bench.stock(starter)
        guest = lobby.add_vip_guest(bench.ctx, bench.now)

        result = bench.session.welcome_vip(guest.id)
        assert result.success
        reader = bench.state.readers[0]
        assert reader.is_vip
        assert reader.vip_type == guest.vip_type
        assert reader.name == guest.name
        assert bench.state.lobby_vips == []

    def test_custom_capacity(self):
        bench = TowerBench(config=EngineConfig(lobby_capacity=1))
        bench.rng.push(Domain.LOBBY, 0.0)
        assert lobby.add_applicant(bench.ctx, bench.now) is not None
        assert lobby.add_applicant(bench.ctx, bench.now) is None

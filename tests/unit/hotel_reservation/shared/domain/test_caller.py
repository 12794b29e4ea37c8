import pytest

from hotel_reservation.shared.domain import Caller, Role, UserId


class TestCaller:
    @pytest.mark.parametrize(
        "role, waives",
        [(Role.GUEST, False), (Role.MANAGER, True), (Role.ADMIN, True)],
    )
    def test_booking_limit_waiver_follows_role(self, role, waives):
        caller = Caller(user_id=UserId(value="u-1"), role=role)
        assert caller.waives_booking_limits is waives

    def test_only_admin_can_manage_any_booking(self):
        assert Caller(UserId(value="u-1"), Role.ADMIN).can_manage_any_booking
        assert not Caller(UserId(value="u-1"), Role.MANAGER).can_manage_any_booking

    def test_owns_matching_user(self):
        caller = Caller(user_id=UserId(value="u-1"))
        assert caller.owns(UserId(value="u-1"))
        assert not caller.owns(UserId(value="u-2"))
        assert not caller.owns(None)

    def test_anonymous_caller(self):
        caller = Caller.anonymous()
        assert not caller.is_authenticated
        assert not caller.owns(None)

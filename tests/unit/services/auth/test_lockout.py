from datetime import timedelta

import pytest

from sellerauth.domain.services.auth import AccountLockPolicy
from tests.factories.user import create_fake_user


@pytest.fixture
def policy(clock):
    return AccountLockPolicy(max_attempts=5, lock_minutes=30, clock=clock)


@pytest.fixture
def user():
    return create_fake_user()


class TestAccountLockPolicy:
    def test_unlocked_user_is_open(self, policy, user):
        state = policy.evaluate(user)

        assert state.locked is False
        assert state.recovered is False
        assert policy.can_login(user) is True

    def test_failures_below_limit_do_not_lock(self, policy, user):
        for _ in range(4):
            state = policy.register_failure(user)

        assert state.locked is False
        assert user.login_attempts == 4
        assert user.is_locked is False

    def test_fifth_failure_locks_for_thirty_minutes(self, policy, user, clock):
        for _ in range(5):
            state = policy.register_failure(user)

        assert state.locked is True
        assert state.remaining_minutes == 30
        assert user.is_locked is True
        assert user.lock_until == clock() + timedelta(minutes=30)
        assert policy.is_account_locked(user) is True

    def test_remaining_minutes_round_up(self, policy, user, clock):
        for _ in range(5):
            policy.register_failure(user)
        clock.advance(minutes=10, seconds=30)

        state = policy.evaluate(user)

        assert state.locked is True
        assert state.remaining_minutes == 20

    def test_elapsed_lock_is_cleared_on_evaluation(self, policy, user, clock):
        for _ in range(5):
            policy.register_failure(user)
        clock.advance(minutes=30)

        state = policy.evaluate(user)

        assert state.locked is False
        assert state.recovered is True
        assert user.is_locked is False
        assert user.lock_until is None
        assert user.login_attempts == 0

    def test_lock_without_expiry_is_treated_as_elapsed(self, policy, user):
        user.is_locked = True
        user.lock_until = None

        state = policy.evaluate(user)

        assert state.recovered is True
        assert user.is_locked is False

    def test_success_resets_counters(self, policy, user):
        policy.register_failure(user)
        policy.register_failure(user)

        policy.register_success(user)

        assert user.login_attempts == 0
        assert user.is_locked is False
        assert user.lock_until is None

    def test_inactive_user_cannot_login(self, policy, user):
        user.is_active = False

        assert policy.can_login(user) is False

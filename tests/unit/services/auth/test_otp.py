import random
from datetime import timedelta

import pytest

from sellerauth.domain.services.auth import OtpEngine
from sellerauth.domain.value_objects.otp import OtpPurpose, OtpVerificationResult
from tests.factories.user import create_fake_user


@pytest.fixture
def engine(clock):
    return OtpEngine(expire_minutes=10, max_attempts=3, clock=clock, rng=random.Random(1234))


@pytest.fixture
def user():
    return create_fake_user(is_email_verified=False)


def test_generate_stores_six_digit_code(engine, user, clock):
    # Act
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)

    # Assert
    assert len(code) == 6 and code.isdigit()
    assert user.verification_otp.code == code
    assert user.verification_otp.attempts == 0
    assert user.verification_otp.expires_at == clock() + timedelta(minutes=10)
    assert user.password_reset_otp is None


def test_generate_keeps_leading_zeros(user, clock):
    class ZeroRandom(random.Random):
        def randint(self, a, b):
            return 42

    engine = OtpEngine(clock=clock, rng=ZeroRandom())

    assert engine.generate(user, OtpPurpose.PASSWORD_RESET) == "000042"
    assert user.password_reset_otp.code == "000042"


def test_regenerate_replaces_code_and_resets_attempts(engine, user):
    engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, "not-it")
    assert user.verification_otp.attempts == 1

    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)

    assert user.verification_otp.code == code
    assert user.verification_otp.attempts == 0


def test_verify_without_slot(engine, user):
    assert engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, "123456") is OtpVerificationResult.NO_OTP


def test_verify_valid_code_clears_slot_and_marks_email_verified(engine, user):
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)

    result = engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, code)

    assert result is OtpVerificationResult.VALID
    assert result.is_valid
    assert user.verification_otp is None
    assert user.is_email_verified is True


def test_valid_reset_code_does_not_touch_email_verification(engine, user):
    code = engine.generate(user, OtpPurpose.PASSWORD_RESET)

    assert engine.verify(user, OtpPurpose.PASSWORD_RESET, code) is OtpVerificationResult.VALID
    assert user.password_reset_otp is None
    assert user.is_email_verified is False


def test_code_is_single_use(engine, user):
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, code)

    assert engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, code) is OtpVerificationResult.NO_OTP


def test_wrong_code_counts_an_attempt(engine, user):
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    wrong = "000000" if code != "000000" else "111111"

    assert engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, wrong) is OtpVerificationResult.INVALID
    assert user.verification_otp.attempts == 1
    assert user.is_email_verified is False


def test_attempt_budget_blocks_even_the_right_code(engine, user):
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    wrong = "000000" if code != "000000" else "111111"
    for _ in range(3):
        engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, wrong)

    result = engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, code)

    assert result is OtpVerificationResult.TOO_MANY_ATTEMPTS
    assert user.verification_otp.attempts == 3


def test_expired_code_is_rejected_without_counting(engine, user, clock):
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    clock.advance(minutes=10, seconds=1)

    assert engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, code) is OtpVerificationResult.EXPIRED
    assert user.verification_otp.attempts == 0


def test_code_is_accepted_at_the_expiry_instant(engine, user, clock):
    code = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    clock.advance(minutes=10)

    assert engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, code) is OtpVerificationResult.VALID


def test_purposes_use_separate_slots(engine, user):
    verification = engine.generate(user, OtpPurpose.EMAIL_VERIFICATION)
    engine.generate(user, OtpPurpose.PASSWORD_RESET)

    assert engine.verify(user, OtpPurpose.EMAIL_VERIFICATION, verification) is OtpVerificationResult.VALID
    assert user.password_reset_otp is not None

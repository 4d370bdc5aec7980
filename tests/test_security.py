from datetime import datetime, timedelta, timezone

from appointment_api.core.security import (
    BCRYPT_ROUNDS, create_access_token, get_password_hash, verify_password, verify_token
)
from appointment_api.utils.timezone import isoformat_z, to_naive_utc

def test_password_hash_round_trip():
    hashed = get_password_hash("correct horse")

    assert hashed != "correct horse"
    assert hashed.startswith("$2")
    assert f"${BCRYPT_ROUNDS:02d}$" in hashed
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)

def test_password_hashes_are_salted():
    assert get_password_hash("same") != get_password_hash("same")

def test_token_subject_and_expiry(settings):
    token = create_access_token("42", settings)
    payload = verify_token(token, settings)

    assert payload.sub == "42"
    assert payload.exp - payload.iat == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

def test_expired_token_is_rejected(settings):
    token = create_access_token("42", settings, expires_delta=timedelta(seconds=-5))
    assert verify_token(token, settings) is None

def test_malformed_token_is_rejected(settings):
    assert verify_token("not.a.jwt", settings) is None

def test_isoformat_z_normalizes_offsets():
    aware = datetime(2030, 1, 1, 11, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_naive_utc(aware) == datetime(2030, 1, 1, 9, 0)
    assert isoformat_z(aware) == "2030-01-01T09:00:00.000Z"
    assert isoformat_z(None) is None

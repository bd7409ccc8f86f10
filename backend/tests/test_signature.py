import pytest

from embedly_webhooks.core.errors import ConfigurationError
from embedly_webhooks.services.signature import SignatureVerifier, compute_signature

PAYLOAD = '{"id":"evt_1","event":"customer.created","data":{"customerId":"c1"}}'


@pytest.fixture
def verifier(secret):
    return SignatureVerifier(secret)


def test_known_hmac_sha256_vector():
    sig = compute_signature("key", "The quick brown fox jumps over the lazy dog")
    assert sig == "f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8"


def test_signature_is_deterministic_lowercase_hex(secret):
    first = compute_signature(secret, PAYLOAD)
    assert first == compute_signature(secret, PAYLOAD)
    assert len(first) == 64
    assert first == first.lower()
    int(first, 16)


def test_str_and_utf8_bytes_sign_the_same(secret):
    payload = '{"id":"evt_ü","event":"customer.created","data":{"name":"José 名前"}}'
    assert compute_signature(secret, payload) == compute_signature(
        secret, payload.encode("utf-8")
    )


def test_validate_accepts_matching_signature(verifier, secret):
    assert verifier.validate(PAYLOAD, compute_signature(secret, PAYLOAD))
    assert verifier.compute_signature(PAYLOAD) == compute_signature(secret, PAYLOAD)


def test_validate_is_case_insensitive(verifier, secret):
    sig = compute_signature(secret, PAYLOAD)
    assert verifier.validate(PAYLOAD, sig.upper())
    assert verifier.validate(PAYLOAD, sig.lower())


def test_any_single_byte_change_is_detected(verifier, secret):
    raw = PAYLOAD.encode()
    sig = compute_signature(secret, raw)
    for i in range(len(raw)):
        tampered = bytearray(raw)
        tampered[i] ^= 0x01
        assert not verifier.validate(bytes(tampered), sig)


def test_reformatted_payload_does_not_validate(verifier, secret):
    sig = compute_signature(secret, PAYLOAD)
    reformatted = PAYLOAD.replace(",", ", ")
    assert not verifier.validate(reformatted, sig)


def test_signature_from_other_secret_is_rejected(verifier):
    assert not verifier.validate(PAYLOAD, compute_signature("other", PAYLOAD))


@pytest.mark.parametrize("payload", [None, "", " ", "   \n\t", b"", b"  "])
def test_blank_payload_is_invalid(verifier, payload):
    assert verifier.validate(payload, "deadbeef") is False


@pytest.mark.parametrize("signature", [None, "", " ", "\t\n"])
def test_blank_signature_is_invalid(verifier, signature):
    assert verifier.validate(PAYLOAD, signature) is False


@pytest.mark.parametrize("signature", ["deadbeef", "not-hex-at-all", "ÿÿÿ", "\ud800", 12345])
def test_bad_signature_returns_false(verifier, signature):
    assert verifier.validate(PAYLOAD, signature) is False


def test_payload_that_cannot_be_encoded_returns_false(verifier):
    assert verifier.validate('{"id":"\ud800"}', "deadbeef") is False


def test_replayed_signature_keeps_validating(verifier, secret):
    # no replay protection at this layer
    sig = compute_signature(secret, PAYLOAD)
    assert all(verifier.validate(PAYLOAD, sig) for _ in range(3))


@pytest.mark.parametrize("bad_secret", [None, "", "   "])
def test_blank_secret_is_a_configuration_error(bad_secret):
    with pytest.raises(ConfigurationError) as exc_info:
        SignatureVerifier(bad_secret)
    assert exc_info.value.error_code == "CONFIGURATION_ERROR"

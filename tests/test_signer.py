"""
Tests for the attestation signer (sign, recover_address, verify_attestation).
"""

from __future__ import annotations

import pytest

from asset_oracle.core.exceptions import SigningError
from asset_oracle.crypto.signer import (
    AttestationSigner,
    attestation_digest,
    attestation_message,
    keccak256,
    recover_address,
    verify_attestation,
)
from asset_oracle.verification.models import AttestationData

ROOT = "a" * 64
SUBMISSION_ID = "sub-42"


def test_attestation_message_format():
    assert attestation_message(ROOT, SUBMISSION_ID) == f"Submission:sub-42|Root:{ROOT}"
    assert len(attestation_digest(ROOT, SUBMISSION_ID)) == 32


def test_signer_address_format(signer):
    """Address is 0x + 20 bytes hex."""
    assert signer.address.startswith("0x")
    assert len(signer.address) == 42
    int(signer.address[2:], 16)


def test_signature_is_65_bytes_hex(signer):
    sig = signer.sign(ROOT, SUBMISSION_ID)
    assert sig.startswith("0x")
    assert len(bytes.fromhex(sig[2:])) == 65


def test_recovered_address_matches_signer(signer):
    """Recovering from (signature, digest) yields the oracle address."""
    for sub_id, root in [(SUBMISSION_ID, ROOT), ("x", ""), ("0x" + "1" * 64, "b" * 64)]:
        sig = signer.sign(root, sub_id)
        assert recover_address(sig, root, sub_id) == signer.address


def test_signing_is_deterministic(signer):
    """RFC 6979 nonces: same key and message -> same signature."""
    assert signer.sign(ROOT, SUBMISSION_ID) == signer.sign(ROOT, SUBMISSION_ID)


def test_recovery_with_wrong_message_gives_other_address(signer):
    sig = signer.sign(ROOT, SUBMISSION_ID)
    assert recover_address(sig, ROOT, "sub-43") != signer.address


def test_recovery_accepts_offset_recovery_id(signer):
    """Recovery id 27/28 is normalised before recovery."""
    raw = bytearray(bytes.fromhex(signer.sign(ROOT, SUBMISSION_ID)[2:]))
    raw[64] += 27
    assert recover_address("0x" + raw.hex(), ROOT, SUBMISSION_ID) == signer.address


def test_verify_attestation(signer):
    att = AttestationData(
        commitment_root=ROOT,
        oracle_address=signer.address,
        signature=signer.sign(ROOT, SUBMISSION_ID),
    )
    assert verify_attestation(att, SUBMISSION_ID) is True
    assert verify_attestation(att, "other-submission") is False


def test_verify_attestation_malformed_signature(signer):
    att = AttestationData(commitment_root=ROOT, oracle_address=signer.address, signature="0x1234")
    assert verify_attestation(att, SUBMISSION_ID) is False


def test_recover_address_rejects_bad_hex():
    with pytest.raises(SigningError, match="hex"):
        recover_address("0xzz", ROOT, SUBMISSION_ID)


@pytest.mark.parametrize(
    "bad_key",
    [
        "",
        "0xnothex",
        "0x1234",
        "0x" + "00" * 32,
        "0x" + "ff" * 32,
    ],
)
def test_invalid_key_material_is_fatal(bad_key):
    """Invalid key material raises SigningError at construction."""
    with pytest.raises(SigningError):
        AttestationSigner(bad_key)


def test_key_without_prefix_accepted(signer):
    from fakes import TEST_PRIVATE_KEY

    assert AttestationSigner(TEST_PRIVATE_KEY[2:]).address == signer.address


def test_repr_does_not_leak_key():
    from fakes import TEST_PRIVATE_KEY

    text = repr(AttestationSigner(TEST_PRIVATE_KEY))
    assert TEST_PRIVATE_KEY[2:] not in text


def test_keccak256_is_not_fips_sha3():
    """Ethereum Keccak-256 vector for empty input (FIPS SHA3-256 gives a7ffc6f8...)."""
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


def test_dev_key_maps_to_ethereum_address():
    """Private key 0x..01 has the well-known Ethereum address 0x7e5f...5bdf."""
    assert AttestationSigner("0x" + "0" * 63 + "1").address == "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf"


def test_attestation_digest_is_keccak_of_message():
    digest = attestation_digest("abc", "sub-001")
    assert digest == keccak256(b"Submission:sub-001|Root:abc")
    assert digest.hex().startswith("fc365a")

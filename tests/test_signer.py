"""
Tests for the LocalSigner and the Signer protocol.
"""
import pytest
import rlp
from eth_account import Account
from eth_utils import keccak, to_hex

from contractkit_sdk.exceptions import SigningFailed
from contractkit_sdk.models import SignedTransaction, TransactionIntent
from contractkit_sdk.signer import LocalSigner, Signer
from tests.test_helpers import OTHER_PRIV_KEY, TEST_PRIV_KEY, TEST_PRIV_KEY_ADDRESS, TEST_RECIPIENT


def _intent(**overrides):
    fields = dict(
        from_address=TEST_PRIV_KEY_ADDRESS,
        to=TEST_RECIPIENT,
        value=10 ** 15,
        gas_limit=21000,
        gas_price=2 * 10 ** 9,
        nonce=3,
        data=b"",
        chain_id=42,
    )
    fields.update(overrides)
    return TransactionIntent(**fields)


def test_local_signer_satisfies_protocol():
    signer: Signer = LocalSigner()
    assert callable(signer.sign)


def test_signing_is_deterministic():
    signer = LocalSigner()
    first = signer.sign(_intent(), TEST_PRIV_KEY)
    second = signer.sign(_intent(), TEST_PRIV_KEY)
    assert isinstance(first, SignedTransaction)
    assert first.raw_transaction == second.raw_transaction
    assert first.tx_hash == second.tx_hash


def test_hash_is_keccak_of_raw_bytes():
    signed = LocalSigner().sign(_intent(), TEST_PRIV_KEY)
    assert signed.tx_hash == to_hex(keccak(signed.raw_transaction))
    assert signed.sender == TEST_PRIV_KEY_ADDRESS


@pytest.mark.parametrize("chain_id", [1, 42])
def test_signature_commits_to_chain_id(chain_id):
    signed = LocalSigner().sign(_intent(chain_id=chain_id), TEST_PRIV_KEY)
    nonce, gas_price, gas, to, value, data, v, r, s = rlp.decode(signed.raw_transaction)
    assert int.from_bytes(v, "big") in (chain_id * 2 + 35, chain_id * 2 + 36)
    assert int.from_bytes(nonce, "big") == 3
    assert int.from_bytes(gas, "big") == 21000
    assert to == bytes.fromhex(TEST_RECIPIENT[2:])


def test_different_chain_ids_produce_different_bytes():
    signer = LocalSigner()
    mainnet = signer.sign(_intent(chain_id=1), TEST_PRIV_KEY)
    kovan = signer.sign(_intent(chain_id=42), TEST_PRIV_KEY)
    assert mainnet.raw_transaction != kovan.raw_transaction


def test_signature_recovers_sender():
    signed = LocalSigner().sign(_intent(data=b"\x01\x02"), TEST_PRIV_KEY)
    recovered = Account.recover_transaction(signed.raw_transaction)
    assert recovered.lower() == TEST_PRIV_KEY_ADDRESS


def test_wrong_key_for_sender():
    with pytest.raises(SigningFailed, match="not to sender"):
        LocalSigner().sign(_intent(), OTHER_PRIV_KEY)


def test_unusable_key():
    with pytest.raises(SigningFailed) as exc_info:
        LocalSigner().sign(_intent(), "0x1234")
    assert "0x1234" not in str(exc_info.value)


def test_intent_is_frozen():
    intent = _intent()
    with pytest.raises(Exception):
        intent.nonce = 4


def test_intent_normalizes_addresses():
    intent = _intent(to=TEST_RECIPIENT.upper().replace("0X", "0x"))
    assert intent.to == TEST_RECIPIENT
    tx = intent.to_transaction_dict()
    assert tx["chainId"] == 42
    assert tx["data"] == "0x"
    assert tx["gas"] == 21000

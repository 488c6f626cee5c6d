"""
TV Systems accounts.

An account is a Curve25519 identity scoped to one network: an optional private
key, a public key and the network-tagged address derived from it.

Address layout (26 bytes)::

    [version=5][network byte][secure_hash(public key)[:20]][checksum]

where the 4-byte checksum is ``secure_hash(first 22 bytes)[:4]``.
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple, Union, List, TYPE_CHECKING

from .codec.base58 import b58decode, b58encode
from .config import (
    ADDRESS_VERSION, ADDRESS_LENGTH, ADDRESS_HASH_LENGTH, ADDRESS_CHECKSUM_LENGTH,
)
from .crypto.curve25519 import Curve25519PrivateKey, Curve25519PublicKey, Curve25519Error, clamp_private_key
from .crypto.hashing import secure_hash, sha256
from .enums import NetworkType
from .runtime.errors import AccountKeyError, AddressFormatError

if TYPE_CHECKING:
    from .blockchain import Blockchain
    from .entities import BalanceDetail
    from .transactions import ProvenTransaction, Transaction

logger = logging.getLogger(__name__)

_PREFIX_LENGTH = 2 + ADDRESS_HASH_LENGTH


def derive_keypair(seed: str, nonce: Optional[int] = None) -> Tuple[bytes, bytes]:
    """
    Derive a keypair from a seed phrase.

    The nonce, when given, is prepended to the seed as decimal text. The
    seed bytes are hashed with the secure hash, then SHA-256, and the result
    is clamped into a Curve25519 scalar.

    Args:
        seed: Seed phrase
        nonce: Optional account index

    Returns:
        Tuple of (private_key, public_key) as 32-byte values
    """
    if nonce is not None:
        seed = f"{nonce}{seed}"
    account_seed = secure_hash(seed.encode("utf-8"))
    private_key = clamp_private_key(sha256(account_seed))
    public_key = Curve25519PrivateKey(private_key).public_key().to_bytes()
    return private_key, public_key


def _checksum(prefix: bytes) -> bytes:
    return secure_hash(prefix)[:ADDRESS_CHECKSUM_LENGTH]


def derive_address(public_key: bytes, network_byte: int) -> bytes:
    """
    Derive the 26-byte address of a public key.

    Args:
        public_key: 32-byte public key
        network_byte: Network byte to embed

    Returns:
        26-byte address
    """
    prefix = bytes([ADDRESS_VERSION, network_byte]) + secure_hash(public_key)[:ADDRESS_HASH_LENGTH]
    return prefix + _checksum(prefix)


def address_from_public_key(public_key: str, network: NetworkType) -> str:
    """Base58 address for a Base58 public key."""
    return b58encode(derive_address(b58decode(public_key), network.byte))


def _key_material(value: Union[bytes, str], error_cls, what: str) -> bytes:
    if isinstance(value, str):
        try:
            return b58decode(value)
        except ValueError as e:
            raise error_cls(f"{what} is not valid Base58", cause=e) from e
    return bytes(value)


def validate_address(network: NetworkType, address: Union[bytes, str]) -> bool:
    """
    Check an address against a network.

    Never raises: undecodable or malformed input is simply invalid.

    Args:
        network: Expected network
        address: Raw address bytes or Base58 text

    Returns:
        True if length, version, network byte and checksum all match
    """
    try:
        if isinstance(address, str):
            address = b58decode(address)
        if len(address) != ADDRESS_LENGTH:
            return False
        if address[0] != ADDRESS_VERSION or address[1] != network.byte:
            return False
        return address[_PREFIX_LENGTH:] == _checksum(address[:_PREFIX_LENGTH])
    except (ValueError, TypeError):
        return False


class Account:
    """
    A cryptographic identity on one network.

    Construct with one of the ``from_*`` class methods. At least one of private
    key, public key or address is always present; missing material is absent,
    and reading it raises :class:`AccountKeyError`.

    Example:
        ```python
        account = Account.from_seed(NetworkType.TESTNET, "my seed phrase", nonce=0)
        print(account.address)
        ```
    """

    __slots__ = ("_network", "_private_key", "_public_key", "_address")

    def __init__(self, network: NetworkType, private_key: Optional[Union[bytes, str]] = None,
                 public_key: Optional[Union[bytes, str]] = None, address: Optional[Union[bytes, str]] = None):
        """
        Initialize an account from key material.

        Each argument accepts raw bytes or Base58 text.

        Args:
            network: Network the account lives on
            private_key: 32-byte private key
            public_key: 32-byte public key (derived when a private key is given)
            address: 26-byte address (derived when a public key is known)

        Raises:
            AccountKeyError: If no key material is supplied or a key is malformed
            AddressFormatError: If the address is invalid or does not match the public key
        """
        if private_key is None and public_key is None and address is None:
            raise AccountKeyError("Account needs a private key, a public key or an address")

        if private_key is not None:
            private_key = _key_material(private_key, AccountKeyError, "Private key")
        if public_key is not None:
            public_key = _key_material(public_key, AccountKeyError, "Public key")
        if address is not None:
            address = _key_material(address, AddressFormatError, "Address")

        self._network = network
        self._private_key: Optional[Curve25519PrivateKey] = None
        self._public_key: Optional[Curve25519PublicKey] = None
        self._address: Optional[bytes] = None

        try:
            if private_key is not None:
                self._private_key = Curve25519PrivateKey(private_key)
                derived = self._private_key.public_key()
                if public_key is not None and public_key != derived.to_bytes():
                    raise AccountKeyError("Public key does not match private key")
                self._public_key = derived
            elif public_key is not None:
                self._public_key = Curve25519PublicKey(public_key)
        except Curve25519Error as e:
            raise AccountKeyError(str(e), cause=e) from e

        if self._public_key is not None:
            derived_address = derive_address(self._public_key.to_bytes(), network.byte)
            if address is not None and address != derived_address:
                raise AddressFormatError("Address does not match public key")
            self._address = derived_address
        else:
            if not validate_address(network, address):
                raise AddressFormatError("invalid address", details={"network": network.name})
            self._address = address

    @classmethod
    def from_seed(cls, network: NetworkType, seed: str, nonce: Optional[int] = None) -> Account:
        """
        Derive an account from a seed phrase.

        Args:
            network: Network the account lives on
            seed: Seed phrase
            nonce: Optional account index

        Returns:
            Account holding a private key
        """
        private_key, public_key = derive_keypair(seed, nonce)
        account = cls(network, private_key=private_key, public_key=public_key)
        logger.debug("Derived account %s (nonce=%s) on %s", account.address, nonce, network.name)
        return account

    @classmethod
    def from_private_key(cls, network: NetworkType, private_key: str) -> Account:
        """Create an account from a Base58 private key."""
        return cls(network, private_key=private_key)

    @classmethod
    def from_public_key(cls, network: NetworkType, public_key: str) -> Account:
        """Create a view-only account from a Base58 public key."""
        return cls(network, public_key=public_key)

    @classmethod
    def from_address(cls, network: NetworkType, address: str) -> Account:
        """
        Create an address-only account from a Base58 address.

        Raises:
            AddressFormatError: If the address fails validation
        """
        return cls(network, address=address)

    @property
    def network(self) -> NetworkType:
        """Network the account lives on."""
        return self._network

    @property
    def has_private_key(self) -> bool:
        """Whether the account can sign."""
        return self._private_key is not None

    @property
    def private_key_bytes(self) -> bytes:
        if self._private_key is None:
            raise AccountKeyError("No private key in account.")
        return self._private_key.to_bytes()

    @property
    def public_key_bytes(self) -> bytes:
        if self._public_key is None:
            raise AccountKeyError("No public key in account.")
        return self._public_key.to_bytes()

    @property
    def address_bytes(self) -> bytes:
        return self._address

    @property
    def private_key(self) -> str:
        """Base58 private key."""
        return b58encode(self.private_key_bytes)

    @property
    def public_key(self) -> str:
        """Base58 public key."""
        return b58encode(self.public_key_bytes)

    @property
    def address(self) -> str:
        """Base58 address."""
        return b58encode(self._address)

    def sign_bytes(self, data: bytes) -> bytes:
        """
        Sign raw bytes with the account's private key.

        Args:
            data: Message bytes

        Returns:
            64-byte signature

        Raises:
            AccountKeyError: If the account holds no private key
        """
        if self._private_key is None:
            raise AccountKeyError("Cannot sign the context. No private key in account.")
        return self._private_key.sign(data)

    def verify_bytes(self, data: bytes, signature: bytes) -> bool:
        """
        Verify a signature made by this account.

        Raises:
            AccountKeyError: If the account holds no public key
        """
        if self._public_key is None:
            raise AccountKeyError("No public key in account.")
        return self._public_key.verify(signature, data)

    def get_signature(self, transaction: Transaction) -> str:
        """Base58 signature over the transaction's canonical bytes."""
        from .signers import sign_transaction
        return sign_transaction(self, transaction)

    def check_address(self) -> bool:
        """Validate the account's own address against its network."""
        return validate_address(self._network, self._address)

    def send_transaction(self, chain: Blockchain, transaction: ProvenTransaction) -> Transaction:
        """
        Sign a transaction and broadcast it through a node.

        Args:
            chain: Node client
            transaction: Transaction to broadcast

        Returns:
            Transaction record echoed by the node
        """
        signature = self.get_signature(transaction)
        payload = transaction.to_api_request_json(self.public_key, signature)
        return chain.send_transaction(transaction.tx_type, payload)

    def get_balance(self, chain: Blockchain) -> int:
        return chain.get_balance(self.address)

    def get_balance_detail(self, chain: Blockchain) -> BalanceDetail:
        return chain.get_balance_detail(self.address)

    def get_transaction_history(self, chain: Blockchain, num: int) -> List[Transaction]:
        return chain.get_transaction_history(self.address, num)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return False
        return self._network is other._network and self._address == other._address

    def __hash__(self) -> int:
        return hash((self._network, self._address))

    def __repr__(self) -> str:
        return f"Account(network={self._network.name}, address='{self.address}')"


__all__ = [
    "Account",
    "derive_keypair",
    "derive_address",
    "address_from_public_key",
    "validate_address",
]

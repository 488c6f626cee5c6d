"""
Client configuration and protocol constants.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional, Mapping

from .enums import NetworkType

# One network unit expressed in the smallest denomination
V_UNITY = 100_000_000

# Upper bound the node accepts for transaction history queries
TX_MAX_LIMIT = 10_000

DEFAULT_TX_FEE = 10_000_000
DEFAULT_FEE_SCALE = 100

ADDRESS_VERSION = 5
ADDRESS_LENGTH = 26
ADDRESS_HASH_LENGTH = 20
ADDRESS_CHECKSUM_LENGTH = 4

KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

COLD_SIGN_PROTOCOL = "v.systems"
COLD_SIGN_OPC = "transaction"
# Largest integer a JSON number round-trips through a double without loss
COLD_SIGN_AMOUNT_THRESHOLD = 2 ** 53 - 1


@dataclass
class ClientConfig:
    """Configuration for the node client."""

    node_url: str
    network: NetworkType = NetworkType.TESTNET
    timeout: float = 30.0
    verify_ssl: bool = True
    debug: bool = False
    user_agent: str = "tvsystems-python-sdk/0.1.0"

    def __post_init__(self):
        self.node_url = self.node_url.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """
        Build a configuration from environment variables.

        Reads ``TVSYS_NODE_URL`` (required), ``TVSYS_NETWORK``,
        ``TVSYS_TIMEOUT`` and ``TVSYS_DEBUG``.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            ClientConfig

        Raises:
            ValueError: If the node URL is missing or a value is malformed
        """
        env = os.environ if environ is None else environ

        node_url = env.get("TVSYS_NODE_URL")
        if not node_url:
            raise ValueError("TVSYS_NODE_URL is not set")

        config = cls(node_url=node_url)
        if env.get("TVSYS_NETWORK"):
            config.network = NetworkType.from_name(env["TVSYS_NETWORK"])
        if env.get("TVSYS_TIMEOUT"):
            config.timeout = float(env["TVSYS_TIMEOUT"])
        if env.get("TVSYS_DEBUG"):
            config.debug = env["TVSYS_DEBUG"].strip().lower() in ("1", "true", "yes", "on")
        return config

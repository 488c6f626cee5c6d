#!/usr/bin/env python3

"""Derive accounts from a seed phrase and check their addresses"""

import sys

from tvsystems_client import Account, NetworkType, address_from_public_key, validate_address


def main():
    """Main example function"""
    seed = sys.argv[1] if len(sys.argv) > 1 else "0123"

    print("=== TV Systems Account Derivation ===")
    for nonce in range(3):
        account = Account.from_seed(NetworkType.TESTNET, seed, nonce)
        print(f"Nonce {nonce}")
        print(f"  Public Key: {account.public_key}")
        print(f"  Address:    {account.address}")

        # The address is a pure function of the public key and the network
        assert address_from_public_key(account.public_key, NetworkType.TESTNET) == account.address
        print(f"  Valid on Testnet: {validate_address(NetworkType.TESTNET, account.address)}")
        print(f"  Valid on Mainnet: {validate_address(NetworkType.MAINNET, account.address)}")

    # Watch-only accounts carry no private key
    watch = Account.from_address(NetworkType.TESTNET, account.address)
    print(f"\nWatch-only account can sign: {watch.has_private_key}")


if __name__ == "__main__":
    main()

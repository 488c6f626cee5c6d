from .mocks import MockTransport
from .factories import FIXED_TIMESTAMP, mk_account, mk_lease, mk_payment

__all__ = [
    "MockTransport",
    "FIXED_TIMESTAMP",
    "mk_account",
    "mk_lease",
    "mk_payment",
]

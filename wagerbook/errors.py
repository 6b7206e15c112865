"""Exceptions raised at Wagerbook's boundaries.

The wager and settlement logic never raises; these cover the codec and the
persistence store.
"""


class WagerbookError(Exception):
    """Base class for Wagerbook errors."""


class WagerDecodeError(WagerbookError):
    """Serialized wager could not be decoded."""


class WagerNotFoundError(WagerbookError):
    """No stored wager has the requested id."""

    def __init__(self, wager_id: int):
        super().__init__(f"Wager {wager_id} not found")
        self.wager_id = wager_id


class AccountNotFoundError(WagerbookError):
    """No stored account has the requested id."""

    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id

"""fabric-sdk-py backed implementation of the ledger ports. Requires the ``fabric`` extra."""
from .event_hub import HfcEventHub
from .sdk_adapter import HfcChannelHandle, HfcLedgerClient, HfcLedgerSDK

__all__ = ['HfcEventHub', 'HfcChannelHandle', 'HfcLedgerClient', 'HfcLedgerSDK']

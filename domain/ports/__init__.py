from .channel_port import ChannelPort
from .event_hub_port import EventHubPort
from .ledger_sdk_port import LedgerClientPort, LedgerSDKPort

__all__ = ['ChannelPort', 'EventHubPort', 'LedgerClientPort', 'LedgerSDKPort']

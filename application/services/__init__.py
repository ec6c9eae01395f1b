from .chaincode_service import ChaincodeDeploymentService
from .event_hub_selector import connect_event_hub, find_event_peer, select_event_hub

__all__ = ['ChaincodeDeploymentService', 'connect_event_hub', 'find_event_peer', 'select_event_hub']

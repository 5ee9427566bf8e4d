from .network_service import NetworkService, assess_network_geometry, rank_treatments

__all__ = ["NetworkService", "assess_network_geometry", "rank_treatments"]

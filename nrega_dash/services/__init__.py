from .api import DataService, DataServiceClient

__all__ = ["DataService", "DataServiceClient"]

from .client import BatchResponse, GlobalSettings, InspectionApiClient, PersistenceError

__all__ = ["BatchResponse", "GlobalSettings", "InspectionApiClient", "PersistenceError"]

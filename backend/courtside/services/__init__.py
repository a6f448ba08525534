"""
Service layer modules

Data clients (in-memory and relational), data source routing, prediction
orchestration and performance analytics.
"""

from .data_client import DataClient, DataStoreError, ListOptions, NotFoundError
from .local_client import LocalDataClient, get_local_client
from .data_source import DataSourceRouter, get_data_client, get_data_source_router
from .prediction_service import PredictionService, get_prediction_service
from .model_performance import ModelPerformance, load_model_performance
from .sample_data import seed_sample_data

__all__ = [
    "DataClient",
    "DataStoreError",
    "ListOptions",
    "NotFoundError",
    "LocalDataClient",
    "get_local_client",
    "DataSourceRouter",
    "get_data_client",
    "get_data_source_router",
    "PredictionService",
    "get_prediction_service",
    "ModelPerformance",
    "load_model_performance",
    "seed_sample_data",
]

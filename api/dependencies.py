# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: dependencies.py
# -----------------------------------------------------------------------------
from api.AppContainer import get_app_container
from services.IQBatchProcessor import IQBatchProcessor
from services.IQHealthService import IQHealthService
from services.IQQueryEngine import IQQueryEngine
from services.IQStatsService import IQStatsService


def get_health_service() -> IQHealthService:
    # use the singleton service from the container
    return get_app_container().health_service

def get_stats_service() -> IQStatsService:
    # use the singleton service from the container
    return get_app_container().stats_service

def get_query_engine() -> IQQueryEngine:
    # use the singleton service from the container
    return get_app_container().query_engine

def get_batch_processor() -> IQBatchProcessor:
    # use the singleton service from the container
    return get_app_container().batch_processor

from .dashboards_service import DashboardsService
from .labels_service import LabelsService
from .query_service import QueryService

__all__ = ['DashboardsService', 'LabelsService', 'QueryService']

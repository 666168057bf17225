"""Infrastructure modules for the org metadata service.

Centralized infrastructure components:
- configuration: Settings management (Settings, AwsSettings, OrgDirectorySettings)
- clients: AWS service clients (AWSClients, SessionProvider, Credentials)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Operation results and error classification
- services: Dependency injection services (SettingsDep, QueryServiceDep, get_settings)
"""

from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "get_module_logger",
    "OperationResult",
    "OperationStatus",
]

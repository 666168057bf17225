"""Directory lookups against the cache table.

Every route answers 200 with a list of entries, or 200 with
``{"message": "No items found"}`` when nothing matched. Multi-valued path
parameters are comma-separated.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.dependencies.rate_limits import QUERY_LIMIT, get_limiter
from api.errors import INTERNAL_SERVER_ERROR
from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus
from infrastructure.services import QueryServiceDep
from modules.org_directory.queries import parse_csv_param, parse_tags_param

logger = get_module_logger()

router = APIRouter(prefix="/aws-org-metadata", tags=["Org Directory"])
limiter = get_limiter()


def _respond(result: OperationResult):
    if result.is_success:
        return result.data
    if result.status == OperationStatus.NOT_FOUND:
        return {"message": result.message}
    logger.error("query_result_unexpected", status=result.status.value, error=result.message)
    return JSONResponse(status_code=500, content=INTERNAL_SERVER_ERROR)


@router.get("/account_id/{ids}")
@limiter.limit(QUERY_LIMIT)
def get_by_account_ids(request: Request, ids: str, queries: QueryServiceDep):
    """Entries by account id; unknown ids are omitted."""
    return _respond(queries.by_ids(parse_csv_param(ids)))


@router.get("/email/{emails}")
@limiter.limit(QUERY_LIMIT)
def get_by_emails(request: Request, emails: str, queries: QueryServiceDep):
    return _respond(queries.by_emails(parse_csv_param(emails)))


@router.get("/status/{status}")
@limiter.limit(QUERY_LIMIT)
def get_by_status(request: Request, status: str, queries: QueryServiceDep):
    return _respond(queries.by_status(status))


@router.get("/name/{names}")
@limiter.limit(QUERY_LIMIT)
def get_by_names(request: Request, names: str, queries: QueryServiceDep):
    return _respond(queries.by_names(parse_csv_param(names)))


@router.get("/ou/{ous}")
@limiter.limit(QUERY_LIMIT)
def get_by_ous(request: Request, ous: str, queries: QueryServiceDep):
    """Every entry anywhere under the given OUs (or roots)."""
    return _respond(queries.by_ous(parse_csv_param(ous)))


@router.get("/tag/{name}/{value}")
@limiter.limit(QUERY_LIMIT)
def get_by_tag(request: Request, name: str, value: str, queries: QueryServiceDep):
    return _respond(queries.by_tag(name, value))


@router.get("/tags/{tags_query}")
@limiter.limit(QUERY_LIMIT)
def get_by_tags(request: Request, tags_query: str, queries: QueryServiceDep):
    """Entries carrying every tag of ``key:value,key:value``."""
    return _respond(queries.by_tags(parse_tags_param(tags_query)))

"""
Admin API Routes - Maintenance Endpoints

Authentication is via Admin API Key.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.maintenance import (
    CleanupExpiredResetTokensResponse,
    CleanupExpiredResetTokensUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/password-reset-tokens/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupExpiredResetTokensResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_expired_reset_tokens(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Cleanup Expired Reset Tokens

    Runs the expired-token sweep on demand.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = CleanupExpiredResetTokensUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value

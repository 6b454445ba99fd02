"""
API Router for Strategy Diagnostics

Contains:
    - GET /strategies - Registered scoring strategies with effective timeouts
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_matching_config, get_strategy_registry
from src.api.schemas.matching import StrategyInfo
from src.domain.matching import MatchingConfig, StrategyRegistry

router = APIRouter(prefix="/strategies", tags=["strategies"])


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[StrategyInfo],
    summary="List scoring strategies",
)
async def list_strategies(
    registry: StrategyRegistry = Depends(get_strategy_registry),
    config: MatchingConfig = Depends(get_matching_config),
) -> list[StrategyInfo]:
    return [StrategyInfo(**entry) for entry in registry.diagnostics(config)]

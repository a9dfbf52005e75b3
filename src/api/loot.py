"""Loot API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api.schemas import (
    ChestResponse,
    CreateSessionRequest,
    LootResponse,
    SessionResponse,
    TravelRequest,
    UseItemRequest,
    UseItemResponse,
)
from src.core.logging import get_logger
from src.core.session import GameSession
from src.services.loot_service import LootReport, LootService

logger = get_logger(__name__)

router = APIRouter(prefix="/loot", tags=["loot"])


def get_loot_service(request: Request) -> LootService:
    """LootService 인스턴스 반환 (의존성 주입)"""
    service: LootService = request.app.state.loot_service
    return service


def _build_session_response(game: GameSession) -> SessionResponse:
    raw = game.to_dict()
    return SessionResponse(
        session_id=game.session_id,
        hero=raw["hero"],
        inventory={key.value: count for key, count in game.inventory_counts().items()},
        gold=game.gold,
        distance=game.distance,
        rings_remaining=len(game.ring_pool),
    )


def _build_loot_response(report: LootReport | None) -> LootResponse:
    if report is None:
        return LootResponse(found=False)
    return LootResponse(found=True, items=report.items, gold=report.gold)


@router.post("/sessions", response_model=SessionResponse, status_code=201)
def create_session(
    body: CreateSessionRequest,
    service: LootService = Depends(get_loot_service),
) -> SessionResponse:
    """새 게임 세션 생성"""
    try:
        game = service.create_session(body.session_id, level=body.level)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _build_session_response(game)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    service: LootService = Depends(get_loot_service),
) -> SessionResponse:
    """세션 상태 조회"""
    game = service.get_session(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return _build_session_response(game)


@router.post("/sessions/{session_id}/travel", response_model=SessionResponse)
def travel(
    session_id: str,
    body: TravelRequest,
    service: LootService = Depends(get_loot_service),
) -> SessionResponse:
    try:
        game = service.travel(session_id, body.distance)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_session_response(game)


@router.post("/sessions/{session_id}/inspect", response_model=LootResponse)
def inspect(
    session_id: str,
    service: LootService = Depends(get_loot_service),
) -> LootResponse:
    """현재 위치 탐색 (상자 + 묘비)"""
    try:
        report = service.inspect(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_loot_response(report)


@router.post("/sessions/{session_id}/battle", response_model=LootResponse)
def battle(
    session_id: str,
    service: LootService = Depends(get_loot_service),
) -> LootResponse:
    """전투 승리 보상"""
    try:
        report = service.battle_victory(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _build_loot_response(report)


@router.post("/sessions/{session_id}/defeat", response_model=ChestResponse)
def defeat(
    session_id: str,
    service: LootService = Depends(get_loot_service),
) -> ChestResponse:
    """사망 처리. 남긴 묘비 내용 반환."""
    try:
        chest = service.defeat(session_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ChestResponse(**chest.to_dict())


@router.post("/sessions/{session_id}/use", response_model=UseItemResponse)
def use_item(
    session_id: str,
    body: UseItemRequest,
    service: LootService = Depends(get_loot_service),
) -> UseItemResponse:
    try:
        message = service.use_item(session_id, body.item)
    except LookupError as e:
        # KeyError도 LookupError: 아이템 없음(400)과 세션 없음(404) 구분
        if isinstance(e, KeyError):
            raise HTTPException(status_code=400, detail=f"Item not held: {body.item}")
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown item: {body.item}")
    return UseItemResponse(message=message)


@router.get("/sessions/{session_id}/tombstones/{distance}", response_model=ChestResponse)
def get_tombstone(
    session_id: str,
    distance: int,
    service: LootService = Depends(get_loot_service),
) -> ChestResponse:
    """해당 거리의 묘비 내용 조회"""
    chest = service.get_tombstone(session_id, distance)
    if chest is None:
        raise HTTPException(
            status_code=404,
            detail=f"No tombstone for {session_id} at distance {distance}",
        )
    return ChestResponse(**chest.to_dict())

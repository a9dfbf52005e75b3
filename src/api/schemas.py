"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, Field


# === Request Schemas ===


class CreateSessionRequest(BaseModel):
    """새 게임 세션 요청"""

    session_id: str = Field(..., min_length=1, max_length=50, description="세션 ID")
    level: int = Field(1, ge=1, description="시작 레벨")


class TravelRequest(BaseModel):
    """이동 요청"""

    distance: int = Field(..., ge=0, description="집으로부터의 거리")


class UseItemRequest(BaseModel):
    """아이템 사용 요청"""

    item: str = Field(..., description="아이템 key (potion, ether, speed_ring, ...)")


# === Response Schemas ===


class EquipmentInfo(BaseModel):
    kind: str
    level: int


class HeroInfo(BaseModel):
    """영웅 정보"""

    level: int
    max_hp: int
    current_hp: int
    max_mp: int
    current_mp: int
    strength: int
    speed: int
    status_effect: Optional[str] = None
    sword: Optional[EquipmentInfo] = None
    shield: Optional[EquipmentInfo] = None
    left_ring: Optional[str] = None
    right_ring: Optional[str] = None


class SessionResponse(BaseModel):
    """세션 상태"""

    session_id: str
    hero: HeroInfo
    inventory: dict[str, int] = {}
    gold: int
    distance: int
    rings_remaining: int


class LootResponse(BaseModel):
    """탐색/전투 보상 결과"""

    found: bool
    items: dict[str, int] = {}
    gold: int = 0


class ChestResponse(BaseModel):
    """사망 시 남긴 묘비 내용"""

    items: list[dict[str, Any]] = []
    sword: Optional[EquipmentInfo] = None
    shield: Optional[EquipmentInfo] = None
    gold: int


class UseItemResponse(BaseModel):
    message: str


"""보상 Service — Core↔DB 연결, EventBus 통신

세션 로드 → Core 보상 로직 실행 → 세션 저장 → 이벤트 발행.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from src.core.event_bus import EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger
from src.core.loot.chest import Chest
from src.core.loot.generation import (
    DEFAULT_CONFIG,
    LootConfig,
    battle_loot,
    extract_from_player,
    generate_loot,
)
from src.core.loot.items import Key
from src.core.session import GameSession, Hero
from src.db.models import GameSessionModel, TombstoneModel

logger = get_logger(__name__)

SOURCE = "loot_service"


@dataclass
class LootReport:
    """획득 결과 (표시 계층 전달용)"""

    items: dict[str, int] = field(default_factory=dict)
    gold: int = 0
    source: str = "chest"  # "chest" | "battle"


class LootService:
    """세션 CRUD + 보상 생성/획득/사망 처리"""

    def __init__(
        self,
        db: Session,
        event_bus: EventBus,
        config: LootConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ):
        self._db = db
        self._bus = event_bus
        self._config = config
        self._rng = rng

    # === 세션 ===

    def create_session(self, session_id: str, level: int = 1) -> GameSession:
        """새 게임. 반지 풀은 전체 종류로 시작. 중복 ID는 ValueError."""
        if self._get_orm(session_id) is not None:
            raise ValueError(f"Session already exists: {session_id}")

        game = GameSession(session_id=session_id, hero=Hero(level=level))
        orm = GameSessionModel(session_id=session_id)
        self._write(orm, game)
        self._db.add(orm)
        self._db.commit()

        self._bus.reset_chain()
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.SESSION_CREATED,
                data={"session_id": session_id, "level": level},
                source=SOURCE,
            )
        )
        logger.info("Created session %s (level=%d)", session_id, level)
        return game

    def get_session(self, session_id: str) -> GameSession | None:
        orm = self._get_orm(session_id)
        if orm is None:
            return None
        return self._read(orm)

    def travel(self, session_id: str, distance: int) -> GameSession:
        """현재 거리 갱신. 음수는 ValueError."""
        if distance < 0:
            raise ValueError(f"Distance must be >= 0, got {distance}")
        orm, game = self._load(session_id)
        game.distance = distance
        self._save(orm, game)

        self._bus.reset_chain()
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PLAYER_TRAVELED,
                data={"session_id": session_id, "distance": distance},
                source=SOURCE,
            )
        )
        return game

    # === 보상 ===

    def inspect(self, session_id: str) -> LootReport | None:
        """현재 위치 탐색. 랜덤 상자 + 이 위치의 묘비를 합쳐서 획득.
        둘 다 없으면 None.
        """
        orm, game = self._load(session_id)
        self._bus.reset_chain()

        chest = generate_loot(game, self._rng, self._config)
        if chest is not None:
            self._emit_found(game, "chest")

        tombstone = self._pop_tombstone(session_id, game.distance)
        if tombstone is not None:
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.TOMBSTONE_RECOVERED,
                    data={"session_id": session_id, "distance": game.distance},
                    source=SOURCE,
                )
            )
            if chest is None:
                chest = tombstone
            else:
                chest.merge(tombstone)

        if chest is None:
            # 반지 풀 변화 없음, 저장 불필요
            return None

        report = self._pick_up(game, chest, "chest")
        self._save(orm, game)
        return report

    def battle_victory(self, session_id: str) -> LootReport | None:
        """전투 승리 보상 (골드 제외)."""
        orm, game = self._load(session_id)
        self._bus.reset_chain()

        chest = battle_loot(game, self._rng, self._config)
        if chest is None:
            return None

        self._emit_found(game, "battle")
        report = self._pick_up(game, chest, "battle")
        self._save(orm, game)
        return report

    def defeat(self, session_id: str) -> Chest:
        """영웅 사망. 소지품 전부를 현재 위치 묘비로 남기고 집으로 귀환.
        같은 위치에 이전 묘비가 있으면 하나로 합친다.
        """
        orm, game = self._load(session_id)
        self._bus.reset_chain()

        distance = game.distance
        chest = extract_from_player(game)

        tomb_orm = self._get_tombstone_orm(session_id, distance)
        if tomb_orm is None:
            tomb_orm = TombstoneModel(session_id=session_id, distance=distance, chest={})
            self._db.add(tomb_orm)
        else:
            chest.merge(Chest.from_dict(tomb_orm.chest))
        tomb_orm.chest = chest.to_dict()

        game.hero.restore()
        game.return_home()
        self._save(orm, game)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.TOMBSTONE_DROPPED,
                data={
                    "session_id": session_id,
                    "distance": distance,
                    "gold": chest.gold,
                    "item_count": len(chest.items),
                },
                source=SOURCE,
            )
        )
        logger.info(
            "Session %s defeated at distance %d: dropped %d gold, %d items",
            session_id,
            distance,
            chest.gold,
            len(chest.items),
        )
        return chest

    def get_tombstone(self, session_id: str, distance: int) -> Chest | None:
        tomb_orm = self._get_tombstone_orm(session_id, distance)
        if tomb_orm is None:
            return None
        return Chest.from_dict(tomb_orm.chest)

    def use_item(self, session_id: str, item_key: str) -> str:
        """인벤토리 아이템 1개 사용. 미보유 시 KeyError."""
        orm, game = self._load(session_id)
        message = game.use_item(item_key)
        self._save(orm, game)

        self._bus.reset_chain()
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.ITEM_USED,
                data={"session_id": session_id, "item": item_key},
                source=SOURCE,
            )
        )
        return message

    # === 내부 ===

    def _pick_up(self, game: GameSession, chest: Chest, source: str) -> LootReport:
        counts, gold = chest.pick_up(game)
        report = LootReport(items=_key_counts(counts), gold=gold, source=source)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.LOOT_PICKED_UP,
                data={
                    "session_id": game.session_id,
                    "items": report.items,
                    "gold": gold,
                    "source": source,
                },
                source=SOURCE,
            )
        )
        logger.info(
            "Session %s picked up %s + %d gold (%s)",
            game.session_id,
            report.items,
            gold,
            source,
        )
        return report

    def _emit_found(self, game: GameSession, source: str) -> None:
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.LOOT_FOUND,
                data={
                    "session_id": game.session_id,
                    "distance": game.distance,
                    "source": source,
                },
                source=SOURCE,
            )
        )

    def _pop_tombstone(self, session_id: str, distance: int) -> Chest | None:
        tomb_orm = self._get_tombstone_orm(session_id, distance)
        if tomb_orm is None:
            return None
        chest = Chest.from_dict(tomb_orm.chest)
        self._db.delete(tomb_orm)
        return chest

    def _get_orm(self, session_id: str) -> GameSessionModel | None:
        return (
            self._db.query(GameSessionModel)
            .filter(GameSessionModel.session_id == session_id)
            .first()
        )

    def _get_tombstone_orm(self, session_id: str, distance: int) -> TombstoneModel | None:
        return (
            self._db.query(TombstoneModel)
            .filter(
                TombstoneModel.session_id == session_id,
                TombstoneModel.distance == distance,
            )
            .first()
        )

    def _load(self, session_id: str) -> tuple[GameSessionModel, GameSession]:
        orm = self._get_orm(session_id)
        if orm is None:
            raise LookupError(f"Session not found: {session_id}")
        return orm, self._read(orm)

    def _save(self, orm: GameSessionModel, game: GameSession) -> None:
        self._write(orm, game)
        self._db.commit()

    # === ORM ↔ Core 변환 ===

    def _read(self, orm: GameSessionModel) -> GameSession:
        """ORM → Core"""
        return GameSession.from_dict(
            {
                "session_id": orm.session_id,
                "hero": orm.hero,
                "inventory": orm.inventory or [],
                "gold": orm.gold,
                "distance": orm.distance,
                "ring_pool": orm.ring_pool or [],
            }
        )

    def _write(self, orm: GameSessionModel, game: GameSession) -> None:
        """Core → ORM. JSON 컬럼은 항상 새 객체로 대입 (변경 감지)."""
        raw = game.to_dict()
        orm.hero = raw["hero"]
        orm.inventory = raw["inventory"]
        orm.gold = raw["gold"]
        orm.distance = raw["distance"]
        orm.ring_pool = raw["ring_pool"]


def _key_counts(counts: dict[Key, int]) -> dict[str, int]:
    return {key.value: count for key, count in counts.items()}

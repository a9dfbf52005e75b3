"""이벤트 유형 상수

서비스가 발행하는 보상 관련 이벤트.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # session
    SESSION_CREATED = "session_created"
    PLAYER_TRAVELED = "player_traveled"

    # loot
    LOOT_FOUND = "loot_found"
    LOOT_PICKED_UP = "loot_picked_up"
    ITEM_USED = "item_used"

    # defeat
    TOMBSTONE_DROPPED = "tombstone_dropped"
    TOMBSTONE_RECOVERED = "tombstone_recovered"

# policy/risk_gate.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.config import DEFAULT_COOLDOWN_SECONDS
from core.logging_config import get_logger
from core.models.contact import RiskRating
from core.services.rating_service import RatingService
from core.services.time_range_service import TimeRangeService
from policy.actions import Action, Allow, HardWarn, SoftWarn
from policy.time_window_policy import TimeWindowPolicy

logger = get_logger("policy.gate")


class RiskGate:
    """
    Decides what the compose screen should do before a message goes out:

    - rating NONE / unset, or outside every active range -> Allow
    - CAUTION inside an active range                    -> SoftWarn
    - HIGH_RISK inside an active range                  -> HardWarn(cooldown)

    The gate never blocks on its own; the host UI renders the action.
    """

    def __init__(
        self,
        rating_service: RatingService,
        time_range_service: TimeRangeService,
        policy: Optional[TimeWindowPolicy] = None,
        *,
        cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        if cooldown_seconds < 1:
            raise ValueError("cooldown_seconds must be at least 1")

        self.rating_service = rating_service
        self.time_range_service = time_range_service
        self.policy = policy or TimeWindowPolicy()
        self.cooldown_seconds = int(cooldown_seconds)

    def evaluate(self, contact_id: str, now: Optional[datetime] = None) -> Action:
        if now is None:
            now = self.policy.clock.now()

        rating = self.rating_service.get_rating(contact_id)
        if rating is None or rating == RiskRating.NONE:
            logger.debug("%s has no rating -> allow", contact_id)
            return Allow()

        ranges = self.time_range_service.load()
        if not self.policy.is_active(now, ranges):
            logger.debug("%s rated %s but outside active hours -> allow", contact_id, rating.name)
            return Allow()

        if rating == RiskRating.HIGH_RISK:
            logger.info("%s is high risk during active hours -> hard warning", contact_id)
            return HardWarn(cooldown_seconds=self.cooldown_seconds)

        logger.info("%s needs caution during active hours -> soft warning", contact_id)
        return SoftWarn()

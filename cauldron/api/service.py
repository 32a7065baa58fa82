"""
API Service - Business logic layer between the HTTP API and the engine.

The service:
1. Translates API requests into a turn snapshot
2. Applies per-request configuration overrides
3. Runs the search policy
4. Formats the decision for the response

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..bots.evaluator import HeuristicEvaluator
from ..bots.personality import get_personality
from ..bots.policy import SearchPolicy
from ..config import SearchConfig, SearchStrategy
from ..engine_core.action import ActionDescriptor
from ..errors import CauldronError, ConfigError
from ..protocol.commands import render_command
from ..protocol.parser import Inventory, TurnSnapshot
from .schemas import (
    DecideRequest,
    DecideResponse,
    ErrorResponse,
    ErrorCode,
    InventoryInfo,
)

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(config=SearchConfig.from_env())
        response = service.decide(request)
    """
    config: SearchConfig = field(default_factory=SearchConfig)
    decisions_made: int = 0

    def decide(self, request: DecideRequest) -> DecideResponse | ErrorResponse:
        """Run one search for the posted turn."""
        try:
            config = self._config_for(request)
            personality = get_personality(request.weights or config.weights_preset)
        except ConfigError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_CONFIG)

        snapshot = self.snapshot_from_request(request)
        try:
            repo, root = snapshot.build(config)
        except CauldronError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_SNAPSHOT)

        policy = SearchPolicy(config=config, evaluator=HeuristicEvaluator(personality.weights))
        try:
            decision = policy.select_action(repo, root)
        except Exception as e:
            logger.exception("Search failed")
            return ErrorResponse(
                error=f"Search failed: {e}",
                error_code=ErrorCode.INTERNAL_ERROR,
            )
        self.decisions_made += 1

        logger.info(
            "Decision %d: action %d after %d nodes",
            self.decisions_made,
            decision.action_id,
            decision.evaluated_nodes,
        )

        return DecideResponse(
            command=render_command(repo, decision.action_id, times=decision.times),
            action_id=decision.action_id,
            kind=decision.kind.value if decision.kind else None,
            times=decision.times,
            score=decision.best_score,
            evaluated_nodes=decision.evaluated_nodes,
            timed_out=decision.timed_out,
            explanation=decision.explanation,
            details={**decision.evaluation_details, "personality": personality.name},
        )

    def _config_for(self, request: DecideRequest) -> SearchConfig:
        overrides: dict = {}
        if request.timeout_ms is not None:
            overrides["timeout_ms"] = request.timeout_ms
        if request.max_depth is not None:
            overrides["max_depth"] = request.max_depth
        if request.strategy is not None:
            overrides["strategy"] = SearchStrategy(request.strategy.value)
        if not overrides:
            return self.config
        return self.config.with_overrides(**overrides)

    @staticmethod
    def snapshot_from_request(request: DecideRequest) -> TurnSnapshot:
        """Convert the request body into a protocol snapshot."""
        actions = tuple(
            ActionDescriptor(
                action_id=info.action_id,
                kind=info.kind.value,
                delta=tuple(info.delta),
                price=info.price,
                tome_index=info.tome_index,
                tax_gain=info.tax_count,
                castable=info.castable,
                repeatable=info.repeatable,
            )
            for info in request.actions
        )
        return TurnSnapshot(
            actions=actions,
            player=_inventory(request.inventory),
            opponent=_inventory(request.opponent) if request.opponent else None,
        )


def _inventory(info: InventoryInfo) -> Inventory:
    return Inventory(ingredients=tuple(info.ingredients), rupees=info.rupees)

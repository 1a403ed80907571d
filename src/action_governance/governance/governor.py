"""
ActionGovernor -- single admit / deny / downgrade decision per action request.

Composition order:
  1. ModeLadder.clamp         requested mode capped at the action's ceiling
  2. ConfidenceGate.apply     capped mode forced to manual on low confidence
  3. ValidationGate           admitted only if validation allows it

Denials are ordinary results (admitted=False plus a DenialReason), never
exceptions. The only errors raised are InvalidModeError/InvalidStatusError
for values outside their enumerations.

The governor holds no state, so one instance can be shared across threads
and polled freely while validation is still running.
"""

import logging

from . import confidence_gate, mode_ladder, validation_gate
from .models import ActionDescriptor, DenialReason, GovernanceDecision, RequestContext

logger = logging.getLogger(__name__)


class ActionGovernor:
    """
    Combines the mode ceiling, confidence gate and validation gate.

    Usage:
        governor = ActionGovernor()
        decision = governor.decide(action, ctx)
        if decision.admitted:
            run(action, mode=decision.effective_mode)
    """

    def decide(
        self, action: ActionDescriptor, ctx: RequestContext
    ) -> GovernanceDecision:
        requested = mode_ladder.parse_mode(ctx.requested_mode)
        ceiling = mode_ladder.parse_mode(action.mode_ceiling)
        status = validation_gate.parse_status(ctx.validation_status)

        capped = mode_ladder.clamp(requested, ceiling)
        effective = confidence_gate.apply(
            capped, action.confidence, ctx.confidence_threshold
        )

        denial = validation_gate.reason_for(status, ctx.warning_acknowledged)
        admitted = denial is None

        if not admitted:
            reason = denial
        elif effective != capped:
            reason = DenialReason.CONFIDENCE_DOWNGRADED
        else:
            reason = DenialReason.OK

        decision = GovernanceDecision(
            effective_mode=effective,
            admitted=admitted,
            reason=reason,
            requested_mode=requested,
            mode_ceiling=ceiling,
            ceiling_applied=capped != requested,
            validation_status=status,
            confidence_threshold=ctx.confidence_threshold,
        )

        if admitted:
            logger.debug(
                f"[Governor] {action.id} ({action.kind}): admitted at "
                f"{effective.value} (requested {requested.value}, "
                f"reason={reason.value})"
            )
        else:
            logger.info(
                f"[Governor] {action.id} ({action.kind}): denied "
                f"(status={status.value}, reason={reason.value})"
            )
        return decision

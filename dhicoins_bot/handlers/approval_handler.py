"""
Approval handler: applies approver button presses.
"""

from dhicoins_bot.models.events import ButtonDecision
from dhicoins_bot.services.approval_flow import ApprovalFlow, Decision
from dhicoins_bot.services.message_dispatcher import DeliveryError, MessageDispatcher
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


class ApprovalHandler:
    """
    Runs ``ApprovalFlow`` decisions and delivers the resulting messages.

    Delivery is at-most-once: the order leaves the store before anything is
    sent, and a failed send is only reported back to the approver.
    """

    def __init__(self, flow: ApprovalFlow, dispatcher: MessageDispatcher):
        self.flow = flow
        self.dispatcher = dispatcher
        logger.info("ApprovalHandler initialized")

    async def handle_decision(self, event: ButtonDecision) -> Decision:
        """
        Process an Approve/Reject button press.

        Args:
            event: Decision event

        Returns:
            The decision that was taken
        """
        decision = self.flow.decide(event)

        try:
            await self.dispatcher.deliver_all(decision.actions)
        except DeliveryError as e:
            logger.error(
                f"Error processing {event.verb.value}",
                extra={
                    "order_id": event.order_id,
                    "outcome": decision.outcome.value,
                    "error": str(e.cause),
                },
            )
            await self.dispatcher.deliver_best_effort(decision.fallback)
            return decision

        await self.dispatcher.deliver_best_effort(decision.followups)
        return decision

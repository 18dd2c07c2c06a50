"""
Conversation handler: runs the buy flow against the stores and Telegram.
"""

from dhicoins_bot.models.events import ConversationEvent
from dhicoins_bot.services.conversation_flow import ConversationFlow, Transition
from dhicoins_bot.services.message_dispatcher import DeliveryError, MessageDispatcher
from dhicoins_bot.services.order_store import OrderStore
from dhicoins_bot.services.session_store import SessionStore
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


class ConversationHandler:
    """
    Applies ``ConversationFlow`` transitions.

    Plain steps commit the new session and then send their replies. The
    receipt step is conditional: the order is stored before the approver is
    notified, and if that notification fails the order is withdrawn and the
    session is left at the receipt step so the user can upload again.
    """

    def __init__(
        self,
        flow: ConversationFlow,
        session_store: SessionStore,
        order_store: OrderStore,
        dispatcher: MessageDispatcher,
    ):
        self.flow = flow
        self.session_store = session_store
        self.order_store = order_store
        self.dispatcher = dispatcher
        logger.info("ConversationHandler initialized")

    async def handle_event(self, event: ConversationEvent) -> Transition:
        """
        Process one inbound conversation event.

        Args:
            event: Event from the Telegram handler

        Returns:
            The transition that was applied
        """
        user_id = event.user_id
        transition = self.flow.advance(self.session_store.get(user_id), event)

        if not transition.handled:
            return transition

        if transition.conditional:
            await self._apply_conditional(user_id, transition)
        else:
            self._commit_session(user_id, transition)
            await self.dispatcher.deliver_best_effort(transition.actions)

        return transition

    async def _apply_conditional(self, user_id: int, transition: Transition) -> None:
        order = transition.order
        if order is not None:
            self.order_store.add(order)

        try:
            await self.dispatcher.deliver_all(transition.actions)
        except DeliveryError as e:
            logger.error(
                "Error sending order to approver",
                extra={
                    "user_id": user_id,
                    "order_id": order.order_id if order else None,
                    "error": str(e.cause),
                },
            )
            if order is not None:
                self.order_store.take(order.order_id)
            await self.dispatcher.deliver_best_effort(transition.fallback)
            return

        self._commit_session(user_id, transition)
        await self.dispatcher.deliver_best_effort(transition.followups)

        if order is not None:
            logger.info(
                "Order submitted",
                extra={"user_id": user_id, "order_id": order.order_id},
            )

    def _commit_session(self, user_id: int, transition: Transition) -> None:
        if transition.session is None:
            self.session_store.delete(user_id)
        else:
            self.session_store.set(user_id, transition.session)

"""
Main FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from contextlib import asynccontextmanager
from telegram import Bot
from telegram.request import HTTPXRequest

from dhicoins_bot.config import Settings, get_settings
from dhicoins_bot.logging_config import setup_logging, get_logger
from dhicoins_bot.routes.webhooks import router as webhook_router
from dhicoins_bot.handlers.approval_handler import ApprovalHandler
from dhicoins_bot.handlers.conversation_handler import ConversationHandler
from dhicoins_bot.handlers.telegram_handler import TelegramHandler
from dhicoins_bot.middleware.error_middleware import ErrorHandlingMiddleware
from dhicoins_bot.services.approval_flow import ApprovalFlow
from dhicoins_bot.services.conversation_flow import ConversationFlow, PayeeDetails
from dhicoins_bot.services.message_dispatcher import MessageDispatcher
from dhicoins_bot.services.order_store import OrderStore
from dhicoins_bot.services.session_store import SessionStore
from dhicoins_bot.utils.webhook_manager import WebhookManager


VERSION = "1.0.0"

logger = get_logger(__name__)


def build_telegram_handler(bot: Bot, settings: Settings) -> TelegramHandler:
    """
    Wire stores, flows and handlers around a Bot instance.

    Args:
        bot: Telegram Bot (or a test double)
        settings: Application settings

    Returns:
        TelegramHandler ready to process updates
    """
    session_store = SessionStore()
    order_store = OrderStore()
    dispatcher = MessageDispatcher(bot)

    conversation_flow = ConversationFlow(
        exchange_rate=settings.exchange_rate_mvr_to_usdt,
        approver_chat_id=settings.admin_chat_id,
        payee=PayeeDetails(
            account_name=settings.payee_account_name,
            bank_name=settings.payee_bank_name,
            account_number=settings.payee_account_number,
        ),
        order_id_factory=order_store.generate_order_id,
    )
    approval_flow = ApprovalFlow(
        order_store=order_store,
        approver_chat_id=settings.admin_chat_id,
        admin_wallet=settings.admin_wallet_address,
    )

    return TelegramHandler(
        bot=bot,
        conversation_handler=ConversationHandler(
            flow=conversation_flow,
            session_store=session_store,
            order_store=order_store,
            dispatcher=dispatcher,
        ),
        approval_handler=ApprovalHandler(flow=approval_flow, dispatcher=dispatcher),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    settings = get_settings()
    logger.info(
        "Starting Dhicoins bot",
        extra={
            "environment": settings.environment,
            "log_level": settings.log_level,
            "exchange_rate": str(settings.exchange_rate_mvr_to_usdt),
            "version": VERSION,
        },
    )

    request = HTTPXRequest(
        connection_pool_size=8,
        connect_timeout=30.0,
        read_timeout=60.0,
        write_timeout=30.0,
        pool_timeout=10.0,
    )
    bot = Bot(token=settings.telegram_bot_token, request=request)
    await bot.initialize()
    app.state.bot = bot

    app.state.telegram_handler = build_telegram_handler(bot, settings)

    webhook_manager = WebhookManager(
        bot=bot,
        webhook_url=settings.telegram_webhook_url,
        webhook_secret=settings.telegram_webhook_secret,
    )
    app.state.webhook_manager = webhook_manager

    if not await webhook_manager.register_webhook():
        logger.error("Failed to register webhook - bot may not receive updates")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down Dhicoins bot")

    await webhook_manager.delete_webhook()
    await bot.shutdown()
    logger.info("Bot session closed")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    use_json = settings.environment == "production"
    setup_logging(log_level=settings.log_level, use_json=use_json)

    app = FastAPI(
        title="Dhicoins Telegram Bot",
        description="USDT buy orders over Telegram with admin approval",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(ErrorHandlingMiddleware)
    app.include_router(webhook_router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Dhicoins Telegram Bot is running"

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": settings.environment,
        }

    logger.info("FastAPI application created successfully")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)

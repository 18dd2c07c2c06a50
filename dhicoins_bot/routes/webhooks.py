"""
Webhook endpoint for Telegram updates.
"""

from fastapi import APIRouter, Request, HTTPException, Header, Depends
from typing import Optional

from dhicoins_bot.config import get_settings
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)
router = APIRouter(prefix="/webhook", tags=["webhooks"])


# Dependency for settings
def get_app_settings():
    return get_settings()


@router.post("/telegram")
async def telegram_webhook(
    request: Request,
    x_telegram_bot_api_secret_token: Optional[str] = Header(None),
    settings=Depends(get_app_settings),
):
    """
    Webhook endpoint for receiving updates from Telegram.

    Validates the secret token and hands the update to the Telegram handler.
    """
    if x_telegram_bot_api_secret_token != settings.telegram_webhook_secret:
        logger.warning(
            "Invalid Telegram webhook secret",
            extra={
                "received_token": (
                    x_telegram_bot_api_secret_token[:10]
                    if x_telegram_bot_api_secret_token
                    else None
                )
            },
        )
        raise HTTPException(status_code=403, detail="Invalid webhook secret")

    try:
        update_data = await request.json()
        logger.debug(
            "Received Telegram update",
            extra={"update_id": update_data.get("update_id")},
        )

        await request.app.state.telegram_handler.process_update(update_data)

        return {"status": "ok"}

    except Exception as e:
        logger.error(
            "Error processing Telegram webhook", extra={"error": str(e)}, exc_info=True
        )
        # 200 keeps Telegram from redelivering the update
        return {"status": "error", "message": str(e)}

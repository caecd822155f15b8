"""Chat router — entry point for the chat transport bridge."""

from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends

from apps.api.core.auth import require_api_key
from apps.api.deps import get_local_timezone, get_rate_provider, get_repository
from apps.api.domains.chat.schemas import ChatMessageIn, ChatReply
from apps.api.domains.chat.service import handle_message
from apps.api.domains.transactions.repository import TransactionRepository
from packages.market_rates import RateProvider

router = APIRouter(prefix="/chat", tags=["chat"], dependencies=[Depends(require_api_key)])


@router.post("/messages", response_model=ChatReply)
def post_message(
    message: ChatMessageIn,
    repository: TransactionRepository = Depends(get_repository),
    provider: RateProvider = Depends(get_rate_provider),
    tz: ZoneInfo = Depends(get_local_timezone),
):
    """Handle one user message and return the bot's replies."""
    replies = handle_message(message.user_id, message.text, repository, provider.current(), tz)
    return ChatReply(replies=replies)

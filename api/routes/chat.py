from fastapi import APIRouter, HTTPException, Request
from schemas.chat import ChatRequest, ChatResponse
import logging

from core.exceptions import InvalidInputError

router = APIRouter()
logger = logging.getLogger(__name__)

GREETING = "Hi, I'm the ACME Fitness assistant. Ask me anything about our bikes and gear!"


@router.get("/hello", response_model=ChatResponse)
async def hello():
    return ChatResponse(messages=[GREETING])


@router.post("/question", response_model=ChatResponse)
async def question(request: ChatRequest, req: Request):
    message_count = len(request.messages or [])
    logger.info(f"Received chat request with {message_count} messages (productId={request.productId})")

    chat_service = req.app.state.chat_service
    try:
        messages = await chat_service.chat(request.messages, request.productId)
    except InvalidInputError as e:
        logger.warning(f"Rejected chat request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error generating response: {e}")
        raise HTTPException(status_code=502, detail="Sorry, I encountered an error providing a response.")

    logger.info(f"Returning {len(messages)} assistant messages")
    return ChatResponse(messages=messages)

from fastapi import APIRouter, Request

import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/health", tags=["Health"])
async def health_check(req: Request):
    logger.debug("Health check endpoint called")
    chat_service = getattr(req.app.state, "chat_service", None)
    if chat_service is None:
        return {"status": "starting"}
    return {
        "status": "ok",
        "products": len(chat_service.product_repository),
        "mcpServices": len(chat_service.mcp_service_urls),
    }

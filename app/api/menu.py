"""Menu file endpoint."""
import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from app.core.config import get_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/menu.json")
async def get_menu():
    """Serve the restaurant's menu file as-is."""
    menu_path = Path(get_settings().menu_file)
    if not menu_path.is_file():
        logger.warning(f"[MENU] Menu file not found at {menu_path}")
        raise HTTPException(status_code=404, detail="Menu not found")
    return FileResponse(menu_path, media_type="application/json")

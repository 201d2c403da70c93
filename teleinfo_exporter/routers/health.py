from fastapi import APIRouter, Request

router = APIRouter()


@router.get("")
async def health_check(request: Request):
    """Report basic service health.

    Returns:
        Status and whether the serial stream is open.
    """
    stream = request.app.state.stream
    return {
        "status": "ok",
        "serial_device": request.app.state.settings.serial_device,
        "serial_open": bool(getattr(stream, "is_open", True)),
    }

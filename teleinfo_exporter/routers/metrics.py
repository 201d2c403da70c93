from fastapi import APIRouter, HTTPException, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from teleinfo_exporter.schemas.sample import SampleResponse, SampleError
from teleinfo_exporter.teleinfo import TeleinfoError

router = APIRouter()


# Sync handlers run in the threadpool, so the blocking serial read does not
# stall the event loop.
@router.get("/metrics")
def metrics(request: Request) -> Response:
    """Sample the meter and render the Prometheus text format."""
    payload = generate_latest(request.app.state.registry)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/api/sample",
    response_model=SampleResponse,
    response_model_by_alias=True,
    responses={503: {"model": SampleError}},
)
def sample(request: Request):
    """Sample the meter and return the decoded frame.

    Raises:
        HTTPException: 503 with the failed stage when no valid frame was read.
    """
    try:
        record = request.app.state.collector.sample()
    except TeleinfoError as exc:
        raise HTTPException(
            status_code=503,
            detail=SampleError(stage=exc.stage, error=str(exc)).model_dump(),
        )
    return SampleResponse.from_record(record)

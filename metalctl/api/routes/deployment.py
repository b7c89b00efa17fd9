from fastapi import APIRouter, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from metalctl.modules.deployment import DeploymentError
from metalctl.modules.deployment.service import get_service
from metalctl.logging import setup_logger

router = APIRouter()
logger = setup_logger("metalctl.api")


@router.get("/deployment")
def get_deployment():
    return get_service().deployment().model_dump(by_alias=True)


@router.post("/deployment")
async def update_deployment(request: Request):
    body = await request.body()
    try:
        resolved = await run_in_threadpool(get_service().update_deployment, body)
    except DeploymentError as e:
        logger.error(f"[DEPLOYMENT] {e}")
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"[DEPLOYMENT] Applied {len(resolved)} hosts")
    return {
        "status": "success",
        "hosts": [{"mac": r.entry.mac, "kind": r.kind.value} for r in resolved],
    }

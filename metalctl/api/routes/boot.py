from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from metalctl.modules.deployment.service import get_service

router = APIRouter()

ARTIFACT_SUFFIXES = (".ipxe", ".cfg", ".ks")


@router.get("/health")
def health():
    return {"alive": True}


@router.get("/lookup/{mac}")
def lookup(mac: str):
    return {"mac": mac, "deployment": get_service().find_deployment(mac)}


@router.get("/{artifact}", response_class=PlainTextResponse)
def serve_artifact(artifact: str):
    if not artifact.lower().endswith(ARTIFACT_SUFFIXES):
        raise HTTPException(status_code=404, detail="Not Found")
    content = get_service().artifact(f"/{artifact}")
    if content is None:
        raise HTTPException(status_code=404, detail=f"No boot artifact at /{artifact}")
    return content

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from metalctl.modules.deployment import BootConfig
from metalctl.modules.deployment.service import get_service

router = APIRouter()


class ConfigRequest(BaseModel):
    bootConfigs: List[BootConfig]


@router.get("/config")
def get_config():
    return get_service().describe()


@router.post("/config")
def update_config(req: ConfigRequest):
    service = get_service()
    service.set_boot_configs(req.bootConfigs)
    return service.describe()

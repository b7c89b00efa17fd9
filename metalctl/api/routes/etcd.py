from fastapi import APIRouter
from pydantic import BaseModel

from metalctl.modules.etcd import EtcdMember, EtcdTopology, plan

router = APIRouter()


class EtcdPlanRequest(BaseModel):
    hostname1: str
    hostname2: str
    hostname3: str
    address1: str
    address2: str
    address3: str
    initCA: bool = False
    apiversion: str = ""


@router.post("/etcd/plan")
def etcd_plan(req: EtcdPlanRequest):
    topology = EtcdTopology(
        members=[
            EtcdMember(req.hostname1, req.address1),
            EtcdMember(req.hostname2, req.address2),
            EtcdMember(req.hostname3, req.address3),
        ],
        init_ca=req.initCA,
        api_version=req.apiversion,
    )
    return {"actions": [a.to_dict() for a in plan(topology)]}

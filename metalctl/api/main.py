from fastapi import FastAPI
from dotenv import load_dotenv

from metalctl.api.routes import boot, config, deployment, etcd
from metalctl.api.middleware import AuthMiddleware

load_dotenv()
app = FastAPI(title="metalctl")
app.add_middleware(AuthMiddleware)

app.include_router(deployment.router)
app.include_router(config.router)
app.include_router(etcd.router)

# Serves /<mac>.ipxe and friends, so it goes last
app.include_router(boot.router)

import os

import uvicorn

if __name__ == "__main__":
    host = os.environ.get("MODEL_ROUTER_HOST", "127.0.0.1")
    port = int(os.environ.get("MODEL_ROUTER_PORT", "8000"))
    uvicorn.run("model_router.main:app", host=host, port=port)

from __future__ import annotations
import json, logging
from typing import Any, Sequence

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel

from .producer import RandomStringProducer
from .streaming import StreamHub

log = logging.getLogger(__name__)

class ProducerBody(BaseModel):
    action: str

def make_app(producer: RandomStringProducer, hub: StreamHub, consumers: Sequence[Any] = ()) -> FastAPI:
    app = FastAPI()

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    @app.get("/api/state")
    async def get_state():
        return {"state": producer.state, "subscribers": producer.subscriber_count}

    @app.post("/api/producer")
    async def post_producer(body: ProducerBody):
        a = body.action.lower()
        if a == "start":
            try:
                await producer.start()
            except RuntimeError as exc:
                return JSONResponse({"ok": False, "error": str(exc)}, status_code=409)
            # stop() clears the registry, so everything re-attaches on start
            for sub in (hub, *consumers):
                producer.subscribe(sub)
        elif a == "stop":
            await producer.stop()
        else:
            return JSONResponse({"ok": False, "error": "invalid action"}, status_code=400)
        log.info("Producer %s via API", a)
        return {"ok": True, "state": producer.state}

    @app.get("/events")
    async def sse(req: Request):
        async def gen():
            async for value in hub.subscribe():
                if await req.is_disconnected():
                    break
                yield f"event: value\ndata: {json.dumps(value)}\n\n"
        return StreamingResponse(gen(), media_type="text/event-stream")

    return app

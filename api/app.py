import logging
from typing import List
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from engine.clock import format_time
from engine.engine import Engine
from engine.radio import RadioMessage
from runtime.config import get_settings
from runtime.runner import TickRunner
from .schemas import (
    CommandIn, LogResponse, MessageOut, MessagesResponse, OutcomeOut, StartRequest, TickRequest, TickResponse,
)

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Signal Lost")
runner: TickRunner | None = None

# Renderer runs as a separate dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:5174", "http://localhost:5175"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _out(msgs: List[RadioMessage]) -> List[MessageOut]:
    return [MessageOut(time=format_time(m.time), sender=m.sender, text=m.text, urgent=m.urgent) for m in msgs]

def _require_runner() -> TickRunner:
    if not runner:
        raise HTTPException(400, "Mission not started")
    return runner

@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Signal Lost mission server",
        "docs": "/docs",
        "version": "1.0"
    }

@app.on_event("shutdown")
async def shutdown():
    """Stop the mission clock on app shutdown."""
    global runner
    if runner:
        await runner.stop()

@app.post("/mission/start")
async def start_mission(req: StartRequest):
    """Start a fresh mission, replacing any running one."""
    await shutdown()
    global runner
    seed = req.seed if req.seed is not None else settings.seed
    autorun = req.autorun if req.autorun is not None else settings.autorun
    eng = Engine(seed=seed)
    eng.start_game()
    runner = TickRunner(eng, tick_seconds=settings.tick_seconds, time_compression=settings.time_compression)
    if autorun:
        await runner.start()
    logger.info("[API] Mission started, seed=%d autorun=%s", seed, autorun)
    return {"mission_id": "local", "seed": seed, "autorun": autorun}

@app.post("/mission/command", response_model=MessagesResponse)
async def post_command(cmd: CommandIn):
    """Submit one line of player input."""
    r = _require_runner()
    msgs = await r.command(cmd.text)
    return MessagesResponse(messages=_out(msgs))

@app.post("/mission/tick", response_model=TickResponse)
async def post_tick(req: TickRequest):
    """Advance the clock by hand."""
    r = _require_runner()
    msgs = await r.advance(req.count)
    s = await r.snapshot()
    return TickResponse(clock=s["clock"], time=s["time"], running=s["running"], messages=_out(msgs))

@app.post("/mission/end", response_model=OutcomeOut)
async def post_end():
    """End the mission now and report the verdict."""
    r = _require_runner()
    outcome = await r.end()
    await r.stop()
    return OutcomeOut(success=outcome.success, title=outcome.title, reason=outcome.reason)

@app.post("/mission/tts")
async def toggle_tts():
    """Flip narration for the attached narrator."""
    r = _require_runner()
    return {"tts_enabled": r.engine.toggle_tts()}

@app.get("/mission/state")
async def get_state():
    """Get current mission snapshot."""
    r = _require_runner()
    return await r.snapshot()

@app.get("/mission/log", response_model=LogResponse)
async def get_log(since: int = 0, limit: int = 500):
    """Get radio traffic since offset."""
    r = _require_runner()
    msgs, next_offset = r.engine.state.log.since(since, limit)
    return LogResponse(next_offset=next_offset, messages=_out(msgs))

@app.post("/mission/time-control")
async def set_time_control(time_compression: float):
    """Set clock compression (1.0 = one game minute per tick_seconds)."""
    r = _require_runner()
    r.set_time_compression(time_compression)
    return {"time_compression": r.time_compression}

@app.get("/mission/time-control")
async def get_time_control():
    """Get current time compression setting."""
    r = _require_runner()
    return {"time_compression": r.time_compression}

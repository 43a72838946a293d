"""POST /api/v1/control/{action} — tick source lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from orderbot.api.dependencies import get_engine_manager
from orderbot.api.engine_manager import EngineManager
from orderbot.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    stop = "stop"
    reset = "reset"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    snapshot = manager.get_snapshot()
    version = snapshot.version if snapshot else 0

    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", version=version)
            manager.start()
            return ControlResponse(status="ok", message="Tick source started.", version=version)

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", version=version)
            manager.pause()
            return ControlResponse(status="ok", message="Tick source paused.", version=version)

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", version=version)
            manager.resume()
            return ControlResponse(status="ok", message="Tick source resumed.", version=version)

        case ControlAction.step:
            changed = manager.step()
            snapshot = manager.get_snapshot()
            return ControlResponse(
                status="ok", message="Single tick executed.",
                version=snapshot.version if snapshot else version, changed=changed,
            )

        case ControlAction.stop:
            if not manager.running:
                return ControlResponse(status="noop", message="Not running.", version=version)
            manager.stop()
            return ControlResponse(status="ok", message="Tick source stopped.", version=version)

        case ControlAction.reset:
            manager.reset()
            snapshot = manager.get_snapshot()
            new_version = snapshot.version if snapshot else 0
            return ControlResponse(status="ok", message="Engine reset.", version=new_version)


@router.post("/speed")
def set_speed(
    tps: float = Query(10.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    snapshot = manager.get_snapshot()
    version = snapshot.version if snapshot else 0
    return ControlResponse(status="ok", message=f"Speed set to {tps:.1f} tps.", version=version)

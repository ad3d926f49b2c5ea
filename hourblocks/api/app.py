"""FastAPI web application for hourblocks."""

from datetime import date
from typing import Dict, List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException, Query, status
from pydantic import BaseModel, Field, ValidationError

from hourblocks.api.dependencies import get_current_user_id, get_hour_repository, get_hour_writer
from hourblocks.database.hour_repository import HourRepository, UserHourWriter
from hourblocks.engine.block_detector import block_covering, detect_all
from hourblocks.engine.block_editor import BlockEditor, CommitResult
from hourblocks.engine.cell import commit_cell, recorded_diff
from hourblocks.engine.day_grid import month_range, month_weeks, start_of_week, week_days, week_key
from hourblocks.engine.hour_map import build_hour_map
from hourblocks.engine.summary import TimeSummary, summarize
from hourblocks.models.block import Block
from hourblocks.models.hour_entry import HourEntry, HourWrite, Mode

app = FastAPI(
    title="hourblocks API",
    description="Weekly hour planning and recording with multi-day hour blocks",
    version="0.1.0",
)


# Request models
class HourCellWrite(BaseModel):
    """Single plain-cell entry."""
    project_id: str = Field(..., min_length=1)
    date: date
    mode: Mode = Mode.PLAN
    value: Union[str, float, None] = Field(None, description="Hours as typed; blank means 0")


class BlockCommitRequest(BaseModel):
    """Full draft of a block to write."""
    project_id: str = Field(..., min_length=1)
    mode: Mode = Mode.PLAN
    distribution: Dict[date, Union[str, float]] = Field(..., description="Hours per day for every day of the block")


class QuickEntryRequest(BaseModel):
    """Single total to spread evenly across a block."""
    project_id: str = Field(..., min_length=1)
    mode: Mode = Mode.PLAN
    dates: List[date] = Field(..., description="Consecutive days of the block")
    total: Union[str, int, float] = Field(..., description="Whole hours to distribute")


class BlockDeleteRequest(BaseModel):
    """Block to clear for the active mode."""
    project_id: str = Field(..., min_length=1)
    mode: Mode = Mode.PLAN
    dates: List[date] = Field(..., description="Consecutive days of the block")


# Response models
class HoursResponse(BaseModel):
    hours: List[HourEntry]
    count: int


class BlockView(BaseModel):
    project_id: str
    dates: List[date]
    distribution: Dict[date, float]
    start_index: int
    end_index: int
    total: float


class CellView(BaseModel):
    date: date
    value: float
    planned: float
    recorded: Optional[float]
    diff: Optional[float] = Field(None, description="Recorded minus planned (record mode only)")
    in_block: bool


class ProjectWeekRow(BaseModel):
    project_id: str
    cells: List[CellView]
    blocks: List[BlockView]


class WeekScheduleResponse(BaseModel):
    week_start: date
    week_key: str
    mode: Mode
    days: List[date]
    projects: List[ProjectWeekRow]


class MonthScheduleResponse(BaseModel):
    year: int
    month: int
    mode: Mode
    weeks: List[date]
    summary: TimeSummary


class CommitResponse(BaseModel):
    written: List[date]


def _block_view(block: Block) -> BlockView:
    return BlockView(
        project_id=block.project_id,
        dates=block.dates,
        distribution=block.distribution,
        start_index=block.start_index,
        end_index=block.end_index,
        total=block.total,
    )


def _project_ids(requested: List[str], rows: List[HourEntry]) -> List[str]:
    """Requested projects first, then any others that have rows, without duplicates."""
    seen = set()
    ordered: List[str] = []
    for pid in list(requested) + [row.project_id for row in rows]:
        if pid and pid not in seen:
            seen.add(pid)
            ordered.append(pid)
    return ordered


def _build_block(project_id: str, dates: List[date]) -> Block:
    dates = sorted(dates)
    try:
        return Block(project_id=project_id, dates=dates, distribution={d: 0.0 for d in dates})
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid block: {e.errors()[0]['msg']}")


def _commit_response(result: CommitResult, messages: List[str]) -> CommitResponse:
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "message": messages[-1] if messages else "Failed to write hours",
                "failed_dates": sorted(d.isoformat() for d in result.failed),
                "written_dates": sorted(d.isoformat() for d in result.written),
            },
        )
    return CommitResponse(written=result.written)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/hours", response_model=HoursResponse)
def list_hours(
    start: date,
    end: date,
    user_id: str = Depends(get_current_user_id),
    repository: HourRepository = Depends(get_hour_repository),
):
    """List the current user's hour rows in an inclusive date range."""
    if end < start:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end must be >= start")
    rows = repository.list_range(user_id, start, end)
    return HoursResponse(hours=rows, count=len(rows))


@app.put("/hours", response_model=HourWrite)
def write_cell(
    request: HourCellWrite,
    writer: UserHourWriter = Depends(get_hour_writer),
):
    """Write a single plain cell."""
    try:
        issued = commit_cell(writer.write, request.project_id, request.date, request.mode, request.value)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to write hours: {str(e)}")
    if issued is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Hours must be a non-negative number, got {request.value!r}",
        )
    return issued


@app.get("/schedule/week/{week_start}", response_model=WeekScheduleResponse)
def week_schedule(
    week_start: date,
    mode: Mode = Mode.PLAN,
    project_id: List[str] = Query(default=[]),
    user_id: str = Depends(get_current_user_id),
    repository: HourRepository = Depends(get_hour_repository),
):
    """Days, cells and detected blocks for one Monday-anchored week."""
    if start_of_week(week_start) != week_start:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="week_start must be a Monday")

    days = week_days(week_start)
    rows = repository.list_range(user_id, days[0], days[-1])
    hour_map = build_hour_map(rows, start=days[0], end=days[-1])
    project_ids = _project_ids(project_id, rows)
    blocks_by_project = detect_all(project_ids, days, hour_map, mode)

    projects: List[ProjectWeekRow] = []
    for pid in project_ids:
        blocks = blocks_by_project[pid]
        cells = []
        for index, day in enumerate(days):
            pair = hour_map.lookup(pid, day)
            cells.append(
                CellView(
                    date=day,
                    value=pair.value(mode),
                    planned=pair.planned,
                    recorded=pair.recorded,
                    diff=recorded_diff(pair) if mode == Mode.RECORD else None,
                    in_block=block_covering(blocks, index) is not None,
                )
            )
        projects.append(ProjectWeekRow(project_id=pid, cells=cells, blocks=[_block_view(b) for b in blocks]))

    return WeekScheduleResponse(
        week_start=week_start,
        week_key=week_key(week_start),
        mode=mode,
        days=days,
        projects=projects,
    )


@app.get("/schedule/month/{year}/{month}", response_model=MonthScheduleResponse)
def month_schedule(
    year: int,
    month: int,
    mode: Mode = Mode.PLAN,
    project_id: List[str] = Query(default=[]),
    user_id: str = Depends(get_current_user_id),
    repository: HourRepository = Depends(get_hour_repository),
):
    """Week starts and the time booking summary for a calendar month."""
    try:
        first = date(year, month, 1)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    weeks = month_weeks(first)
    start, end = (date.fromisoformat(s) for s in month_range(first))
    rows = repository.list_range(user_id, start, end)
    hour_map = build_hour_map(rows, start=start, end=end)
    summary = summarize(_project_ids(project_id, rows), hour_map, weeks, mode)
    return MonthScheduleResponse(year=year, month=month, mode=mode, weeks=weeks, summary=summary)


@app.post("/blocks/commit", response_model=CommitResponse)
def commit_block(
    request: BlockCommitRequest,
    writer: UserHourWriter = Depends(get_hour_writer),
):
    """Write every day of a block draft for the active mode."""
    messages: List[str] = []
    editor = BlockEditor(writer.write, request.mode, notify=messages.append)
    editor.open(_build_block(request.project_id, list(request.distribution)))
    for day, value in request.distribution.items():
        if not editor.set_draft_value(day, value):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid hours for {day.isoformat()}: {value!r}",
            )
    return _commit_response(editor.commit(), messages)


@app.post("/blocks/quick-entry", response_model=CommitResponse)
def quick_entry(
    request: QuickEntryRequest,
    writer: UserHourWriter = Depends(get_hour_writer),
):
    """Spread a whole-hour total evenly over a block and write it."""
    messages: List[str] = []
    editor = BlockEditor(writer.write, request.mode, notify=messages.append)
    editor.open(_build_block(request.project_id, request.dates))
    result = editor.quick_entry(request.total)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Total must be a positive whole number of hours, got {request.total!r}",
        )
    return _commit_response(result, messages)


@app.post("/blocks/delete", response_model=CommitResponse)
def delete_block(
    request: BlockDeleteRequest,
    writer: UserHourWriter = Depends(get_hour_writer),
):
    """Clear a block's hours for the active mode."""
    messages: List[str] = []
    editor = BlockEditor(writer.write, request.mode, delete=writer.delete, notify=messages.append)
    editor.open(_build_block(request.project_id, request.dates))
    return _commit_response(editor.delete(), messages)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from game_logic import Position
from models.board import Board
from session import Algorithm, GameMode, GameSession, PlayerSettings
import logging
import uuid

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],  # Frontend dev server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PositionModel(BaseModel):
    x: int = Field(..., ge=0, le=4)
    y: int = Field(..., ge=0, le=4)


class PlayerSettingsModel(BaseModel):
    algorithm: Algorithm = Algorithm.MINIMAX_AB
    depth: int = Field(4, ge=1, le=5, description="Search depth for Minimax (1-5)")
    time_seconds: float = Field(2, ge=1, le=60, description="Time budget in seconds for MCTS")


class NewGameRequest(BaseModel):
    mode: GameMode = GameMode.PLAYER_VS_AI
    play_as_tiger: bool = True
    goat: Optional[PlayerSettingsModel] = None
    tiger: Optional[PlayerSettingsModel] = None


class MoveRequest(BaseModel):
    from_: PositionModel = Field(..., alias="from")
    to: PositionModel


# Default agent settings
default_settings = {
    "minimax": {"depth": 4},
    "alphabeta": {"depth": 4},
    "mcts": {"time_seconds": 2},
    "random": {},
}

sessions: Dict[str, GameSession] = {}


def _to_settings(model: Optional[PlayerSettingsModel]) -> Optional[PlayerSettings]:
    if model is None:
        return None
    return PlayerSettings(algorithm=model.algorithm, depth=model.depth, time_seconds=model.time_seconds)


def _board_to_rows(board: Board) -> List[List[Optional[Dict]]]:
    rows = [[None for _ in range(5)] for _ in range(5)]
    for piece in board.pieces.values():
        rows[piece.position.y][piece.position.x] = {
            "type": piece.kind.value,
            "selected": piece.selected,
        }
    return rows


def _session_to_dict(game_id: str, session: GameSession) -> Dict:
    board = session.board
    return {
        "game_id": game_id,
        "board": _board_to_rows(board),
        "turn": "GOAT" if board.goats_move else "TIGER",
        "goats_in_hand": board.goats_in_hand,
        "goats_captured": board.goats_captured,
        "tigers_trapped": board.tigers_trapped,
        "state": session.state.value,
        "status": session.status,
        "paused": session.paused,
        "game_over": session.game_over,
        "ai_turn": session.is_ai_turn(),
        "diagnostics": {
            "iterations": session.diagnostics.iterations,
            "elapsed_ms": session.diagnostics.elapsed_ms,
            "score": session.diagnostics.score,
        },
    }


def _position_dict(position: Optional[Position]) -> Optional[Dict]:
    if position is None:
        return None
    return {"x": position.x, "y": position.y}


def _get_session(game_id: str) -> GameSession:
    session = sessions.get(game_id)
    if session is None:
        logger.error(f"Unknown game requested: {game_id}")
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return session


@app.get("/agent-settings")
async def get_all_agent_settings():
    """Get default settings for all agent algorithms"""
    return default_settings


@app.post("/games")
async def create_game(request: NewGameRequest):
    game_id = str(uuid.uuid4())
    session = GameSession(
        mode=request.mode,
        play_as_tiger=request.play_as_tiger,
        goat=_to_settings(request.goat),
        tiger=_to_settings(request.tiger),
    )
    sessions[game_id] = session
    logger.info(f"Created game {game_id} (mode={request.mode.value}, play_as_tiger={request.play_as_tiger})")
    return _session_to_dict(game_id, session)


@app.get("/games/{game_id}")
async def get_game(game_id: str):
    return _session_to_dict(game_id, _get_session(game_id))


@app.get("/games/{game_id}/legal-moves")
async def get_legal_moves(game_id: str):
    session = _get_session(game_id)
    if session.game_over:
        return []
    return [
        {
            "type": "placement" if move.is_placement else "movement",
            "from": _position_dict(move.origin),
            "to": _position_dict(move.target),
            "capture": _position_dict(move.capture),
        }
        for move in session.board.legal_moves()
    ]


@app.post("/games/{game_id}/click")
async def click(game_id: str, request: PositionModel):
    session = _get_session(game_id)
    if not session.click((request.x, request.y)):
        raise HTTPException(status_code=400, detail=f"Nothing to do at ({request.x}, {request.y})")
    return _session_to_dict(game_id, session)


@app.post("/games/{game_id}/place")
async def place(game_id: str, request: PositionModel):
    session = _get_session(game_id)
    if not session.place((request.x, request.y)):
        raise HTTPException(status_code=400, detail=f"Cannot place a goat at ({request.x}, {request.y})")
    return _session_to_dict(game_id, session)


@app.post("/games/{game_id}/move")
async def move(game_id: str, request: MoveRequest):
    session = _get_session(game_id)
    from_pos = (request.from_.x, request.from_.y)
    to_pos = (request.to.x, request.to.y)
    if not session.move(from_pos, to_pos):
        raise HTTPException(status_code=400, detail=f"Illegal move {from_pos} -> {to_pos}")
    return _session_to_dict(game_id, session)


@app.post("/games/{game_id}/ai-move")
async def ai_move(game_id: str):
    session = _get_session(game_id)
    if session.game_over or session.paused or not session.is_ai_turn():
        raise HTTPException(status_code=409, detail="Not an AI turn")
    logger.info(f"Game {game_id} board before AI move:\n{session.board}")
    if not session.play_ai_turn() and not session.game_over:
        raise HTTPException(status_code=409, detail="AI found no move")
    return _session_to_dict(game_id, session)


@app.post("/games/{game_id}/reset")
async def reset(game_id: str):
    session = _get_session(game_id)
    session.reset()
    return _session_to_dict(game_id, session)


@app.post("/games/{game_id}/pause")
async def pause(game_id: str):
    session = _get_session(game_id)
    session.toggle_pause()
    return _session_to_dict(game_id, session)


@app.get("/")
async def root():
    logger.info("Root endpoint accessed")
    return {"message": "Welcome to the Bagh Chal AI Backend"}

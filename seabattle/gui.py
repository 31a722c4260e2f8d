from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional, Tuple

import pygame

from .agent import MoveSource, Outcome, Presenter
from .errors import GameAborted
from .field import COORDS, FIELD_SIZE, Cell, Move, OpponentField, OwnField, ShotResult
from .protocol import format_move

logger = logging.getLogger(__name__)

Rows = Tuple[Tuple[Cell, ...], ...]
Session = Callable[[MoveSource, Presenter, Callable[[str], None]], Outcome]

EMPTY_ROWS: Rows = tuple(tuple(Cell.EMPTY for _ in range(FIELD_SIZE)) for _ in range(FIELD_SIZE))

RESULT_TEXT = {
    ShotResult.MISS: "Miss!",
    ShotResult.HIT: "Hit!",
    ShotResult.KILL: "Kill!",
}


class GuiPlayer(Presenter):
    """Bridge between the engine thread and the window thread.

    The engine blocks in :meth:`read_move` until the window posts a move;
    everything the engine reports is pushed to ``events`` as plain tuples
    so the window never touches live board objects.
    """

    def __init__(self) -> None:
        self.moves: "queue.Queue[Optional[str]]" = queue.Queue()
        self.events: "queue.Queue[tuple]" = queue.Queue()

    # engine side
    def read_move(self) -> Optional[str]:
        return self.moves.get()

    def notify(self, text: str) -> None:
        self.events.put(("status", text))

    def show_fields(self, own: OwnField, opponent: OpponentField) -> None:
        self.events.put(("fields", own.rows(), opponent.rows()))

    def your_turn(self) -> None:
        self.events.put(("turn", True))

    def waiting(self) -> None:
        self.events.put(("turn", False))

    def wrong_input(self, text: str) -> None:
        self.notify("Already targeted that cell.")

    def shot_result(self, move: Move, result: ShotResult) -> None:
        self.notify(f"{format_move(move)}: {RESULT_TEXT[result]}")

    def incoming_shot(self, move: Move, result: ShotResult) -> None:
        self.notify(f"Opponent fired at {format_move(move)}: {RESULT_TEXT[result]}")

    def game_over(self, outcome: Outcome) -> None:
        self.events.put(("over", outcome))

    # window side
    def submit(self, move: Optional[Move]) -> None:
        self.moves.put(format_move(move) if move is not None else None)


# --------------------------- Pygame rendering ---------------------------

WINDOW_BG = (15, 18, 25)
GRID_BG = (23, 28, 38)
GRID_LINE = (50, 58, 72)
TEXT = (230, 235, 245)
SUBTEXT = (155, 165, 185)
HIT = (232, 93, 117)
KILLED = (150, 40, 60)
MISS = (240, 190, 90)
SHIP = (60, 130, 200)
SHIP_OUTLINE = (40, 95, 160)
HOVER = (90, 160, 245)
VICTORY = (90, 200, 120)
DEFEAT = (220, 60, 80)

CELL_SIZE = 44
PANEL_PADDING = 36
BOARD_GAP = 70
TOP_BAR = 84
BOTTOM_BAR = 60


class GuiGame:
    def __init__(self, player: GuiPlayer) -> None:
        pygame.init()
        pygame.display.set_caption("Sea Battle")
        total_width = (CELL_SIZE * FIELD_SIZE) * 2 + BOARD_GAP + PANEL_PADDING * 2
        total_height = TOP_BAR + (CELL_SIZE * FIELD_SIZE) + BOTTOM_BAR
        self.screen = pygame.display.set_mode((total_width, total_height))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Arial", 22)
        self.font_small = pygame.font.SysFont("Arial", 18)
        self.font_big = pygame.font.SysFont("Arial", 48, bold=True)

        self.player = player
        self.own_rows: Rows = EMPTY_ROWS
        self.opponent_rows: Rows = EMPTY_ROWS
        self.turn_is_mine = False
        self.awaiting_result = False
        self.info_message = "Connecting..."
        self.game_over: Optional[Outcome] = None
        self.running = True

    def get_board_rects(self) -> Tuple[pygame.Rect, pygame.Rect]:
        left_x = PANEL_PADDING
        right_x = PANEL_PADDING + CELL_SIZE * FIELD_SIZE + BOARD_GAP
        left_rect = pygame.Rect(left_x, TOP_BAR, CELL_SIZE * FIELD_SIZE, CELL_SIZE * FIELD_SIZE)
        right_rect = pygame.Rect(right_x, TOP_BAR, CELL_SIZE * FIELD_SIZE, CELL_SIZE * FIELD_SIZE)
        return left_rect, right_rect

    def mouse_to_cell(self, rect: pygame.Rect, pos: Tuple[int, int]) -> Optional[Move]:
        if not rect.collidepoint(pos):
            return None
        x, y = pos
        col = (x - rect.x) // CELL_SIZE
        row = (y - rect.y) // CELL_SIZE
        if 0 <= row < FIELD_SIZE and 0 <= col < FIELD_SIZE:
            return Move(int(col), int(row))
        return None

    # --------------------------- Draw ---------------------------
    def draw(self) -> None:
        self.screen.fill(WINDOW_BG)
        left_rect, right_rect = self.get_board_rects()

        self.draw_title("Your Board", left_rect.x, 24)
        self.draw_title("Their Board", right_rect.x, 24)
        self.draw_board(left_rect, self.own_rows)
        self.draw_board(right_rect, self.opponent_rows)
        self.draw_status_bar(self.info_message)

        if self.game_over is None and self.turn_is_mine and not self.awaiting_result:
            cell = self.mouse_to_cell(right_rect, pygame.mouse.get_pos())
            if cell:
                rx = right_rect.x + cell.col * CELL_SIZE
                ry = right_rect.y + cell.row * CELL_SIZE
                pygame.draw.rect(self.screen, HOVER, (rx + 2, ry + 2, CELL_SIZE - 4, CELL_SIZE - 4), 2)

        if self.game_over:
            banner = "You Win!" if self.game_over is Outcome.WIN else "You Lose"
            color = VICTORY if self.game_over is Outcome.WIN else DEFEAT
            surf = self.font_big.render(banner, True, color)
            self.screen.blit(surf, (self.screen.get_width() // 2 - surf.get_width() // 2, 8))

        pygame.display.flip()

    def draw_title(self, text: str, x: int, y: int) -> None:
        txt = self.font.render(text, True, TEXT)
        self.screen.blit(txt, (x, y))

    def draw_status_bar(self, text: str) -> None:
        if not text:
            return
        surf = self.font.render(text, True, SUBTEXT)
        self.screen.blit(surf, (PANEL_PADDING, self.screen.get_height() - BOTTOM_BAR + 16))

    def draw_board(self, rect: pygame.Rect, rows: Rows) -> None:
        pygame.draw.rect(self.screen, GRID_BG, rect, border_radius=8)
        for i in range(FIELD_SIZE + 1):
            x = rect.x + i * CELL_SIZE
            y = rect.y + i * CELL_SIZE
            pygame.draw.line(self.screen, GRID_LINE, (rect.x, y), (rect.right, y))
            pygame.draw.line(self.screen, GRID_LINE, (x, rect.y), (x, rect.bottom))
        # letters name columns, digits name rows, as in "A1"
        for i in range(FIELD_SIZE):
            letter = self.font_small.render(COORDS[i], True, SUBTEXT)
            num = self.font_small.render(str(i + 1), True, SUBTEXT)
            self.screen.blit(letter, (rect.x + i * CELL_SIZE + CELL_SIZE // 2 - letter.get_width() // 2, rect.y - 22))
            self.screen.blit(num, (rect.x - 20, rect.y + i * CELL_SIZE + CELL_SIZE // 2 - num.get_height() // 2))
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                cx = rect.x + c * CELL_SIZE
                cy = rect.y + r * CELL_SIZE
                center = (cx + CELL_SIZE // 2, cy + CELL_SIZE // 2)
                if cell is Cell.SHIP:
                    pygame.draw.rect(self.screen, SHIP, (cx + 2, cy + 2, CELL_SIZE - 4, CELL_SIZE - 4))
                    pygame.draw.rect(self.screen, SHIP_OUTLINE, (cx + 2, cy + 2, CELL_SIZE - 4, CELL_SIZE - 4), 2)
                elif cell is Cell.SHOT_EMPTY:
                    pygame.draw.circle(self.screen, MISS, center, CELL_SIZE // 6)
                elif cell is Cell.SHOT_SHIP:
                    pygame.draw.circle(self.screen, HIT, center, CELL_SIZE // 3)
                elif cell is Cell.KILLED:
                    pygame.draw.rect(self.screen, KILLED, (cx + 2, cy + 2, CELL_SIZE - 4, CELL_SIZE - 4))
                    pygame.draw.circle(self.screen, HIT, center, CELL_SIZE // 3)

    # --------------------------- Interaction ---------------------------
    def click_fire(self, pos: Tuple[int, int]) -> None:
        _left_rect, right_rect = self.get_board_rects()
        cell = self.mouse_to_cell(right_rect, pos)
        if cell is None or not self.turn_is_mine or self.awaiting_result:
            return
        if self.opponent_rows[cell.row][cell.col] is not Cell.EMPTY:
            self.info_message = "Already targeted that cell."
            return
        self.player.submit(cell)
        self.awaiting_result = True

    def poll_events(self) -> None:
        while True:
            try:
                event = self.player.events.get_nowait()
            except queue.Empty:
                return
            kind = event[0]
            if kind == "fields":
                self.own_rows, self.opponent_rows = event[1], event[2]
            elif kind == "turn":
                self.turn_is_mine = event[1]
                self.awaiting_result = False
                if self.turn_is_mine:
                    self.info_message = "Your turn: click on the right board to fire."
                else:
                    self.info_message = "Waiting for opponent..."
            elif kind == "status":
                self.info_message = event[1]
            elif kind == "over":
                self.game_over = event[1]
                self.turn_is_mine = False
            elif kind == "error":
                self.info_message = f"Session ended: {event[1]}"
                self.turn_is_mine = False

    def close(self) -> None:
        if self.game_over is None:
            # unblocks an engine waiting for our move
            self.player.submit(None)
        self.running = False

    # --------------------------- Loop ---------------------------
    def run(self) -> None:
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.close()
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self.close()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.game_over is None:
                    self.click_fire(event.pos)

            self.poll_events()
            self.draw()
            self.clock.tick(60)
        pygame.quit()


# --------------------------- Entrypoint ---------------------------

def run_gui(session: Session) -> Outcome:
    """Run ``session`` on a worker thread while the window owns the main thread.

    Errors raised by the session are re-raised here once the window closes.
    """
    player = GuiPlayer()
    outcome: list = []
    failure: list = []

    def worker() -> None:
        try:
            outcome.append(session(player.read_move, player, player.notify))
        except Exception as exc:
            logger.debug("session thread failed", exc_info=True)
            failure.append(exc)
            player.events.put(("error", str(exc)))

    thread = threading.Thread(target=worker, name="seabattle-session", daemon=True)
    thread.start()
    GuiGame(player).run()
    # a session blocked on the network cannot be interrupted; give it a moment
    thread.join(timeout=0.5)

    if failure:
        raise failure[0]
    if not outcome:
        raise GameAborted("window closed before the game ended")
    return outcome[0]

"""
Watch an agent play Snake
Renders the game with pygame, with smooth movement between turns
Keys: H toggles the agent's cycle, P toggles its planned path, ESC quits
"""

from __future__ import annotations
import logging
import time
from typing import List, Optional, Sequence, Tuple

import pygame

from agents import AgentLog, LogKey, make_agent
from game.game import Game
from game.grid import Coord, CoordRange
from game.rng import as_rng

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def cell_center(cell_xy, cell_size) -> Point:
    """Get pixel center of a grid cell"""
    return (cell_xy[0] * cell_size + cell_size / 2, cell_xy[1] * cell_size + cell_size / 2)


def lerp(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation between two points"""
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def draw_snake_with_filled_corners(surface, points: Sequence[Point], thickness, color) -> None:
    """Draw the snake as axis-aligned bars, with boxes on the joints so elbows are filled"""
    if not points:
        return
    half = thickness / 2

    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        if abs(x2 - x1) >= abs(y2 - y1):  # horizontal
            rect = pygame.Rect(int(min(x1, x2)), int(y1 - half), int(abs(x2 - x1)), int(thickness))
        else:                             # vertical
            rect = pygame.Rect(int(x1 - half), int(min(y1, y2)), int(thickness), int(abs(y2 - y1)))
        pygame.draw.rect(surface, color, rect)

    s = int(thickness)
    for (cx, cy) in points:
        pygame.draw.rect(surface, color, pygame.Rect(int(cx - half), int(cy - half), s, s))


class SnakeViewer:
    def __init__(self, dims: CoordRange, cell_size: Optional[int] = None, fps: int = 60, speed_cells: int = 8):
        """
        Open a pygame window for a board

        Args:
            dims: board size
            cell_size: size of each cell in pixels (None = fit to 90% of the screen)
            fps: frames per second
            speed_cells: movement speed in cells per second
        """
        pygame.init()
        self.dims = dims
        if cell_size is None:
            display_info = pygame.display.Info()
            max_width = int(display_info.current_w * 0.9)
            max_height = int(display_info.current_h * 0.9)
            cell_size = min(max_width // dims.w, max_height // dims.h, 60)  # Cap at 60px for small grids
            logger.info("Auto-calculated cell size: %dpx", cell_size)
        self.cell_size = cell_size
        self.fps = fps
        self.step_time = 1.0 / speed_cells
        self.window = pygame.display.set_mode((dims.w * cell_size, dims.h * cell_size))
        pygame.display.set_caption('Snake AI')
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('consolas', 20)
        self.snake_thickness = int(cell_size * 0.98)

        self.show_cycle = True
        self.show_plan = False
        self.running = True

        # Colors
        self.black = pygame.Color(0, 0, 0)
        self.red = pygame.Color(255, 0, 0)
        self.green = pygame.Color(0, 255, 0)
        self.cycle_col = pygame.Color(255, 255, 255)
        self.plan_col = pygame.Color(80, 160, 255)

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_h:
                    self.show_cycle = not self.show_cycle
                elif event.key == pygame.K_p:
                    self.show_plan = not self.show_plan

    def _draw_path(self, path: Sequence[Coord], color, closed: bool) -> None:
        if len(path) < 2:
            return
        points = [cell_center(c, self.cell_size) for c in path]
        pygame.draw.lines(self.window, color, closed, points, 2)

    def draw(self, prev_body: List[Coord], game: Game, alpha: float, log: Optional[AgentLog]) -> None:
        """Draw one frame, alpha in [0,1] interpolates between the previous and the current body"""
        self.window.fill(self.black)

        if log is not None:
            cycle = log.latest(LogKey.CYCLE)
            if self.show_cycle and cycle:
                self._draw_path(cycle, self.cycle_col, closed=True)
            plan = log.latest(LogKey.PLAN)
            if self.show_plan and plan:
                self._draw_path(plan, self.plan_col, closed=False)

        body = list(game.snake)
        # the snake grew: the new tail segment starts where the old tail was
        if len(prev_body) < len(body):
            prev_body = prev_body + [prev_body[-1]] * (len(body) - len(prev_body))
        centers = [lerp(cell_center(a, self.cell_size), cell_center(b, self.cell_size), alpha)
                   for a, b in zip(prev_body, body)]
        tube_points = [centers[0]]
        for i in range(1, len(centers)):
            corner = cell_center(prev_body[i - 1], self.cell_size)
            if abs(tube_points[-1][0] - corner[0]) > 0.01 or abs(tube_points[-1][1] - corner[1]) > 0.01:
                tube_points.append(corner)
            tube_points.append(centers[i])
        draw_snake_with_filled_corners(self.window, tube_points, self.snake_thickness, self.green)

        if not game.win:
            food_size = int(self.cell_size * 0.98)
            offset = (self.cell_size - food_size) // 2
            pygame.draw.rect(self.window, self.red,
                             pygame.Rect(game.apple.x * self.cell_size + offset,
                                         game.apple.y * self.cell_size + offset,
                                         food_size, food_size))

        text = self.font.render(f'Length: {len(game.snake)}  Turn: {game.turn}', True, self.red)
        self.window.blit(text, (10, 10))
        pygame.display.update()

    def animate_move(self, prev_body: List[Coord], game: Game, log: Optional[AgentLog]) -> None:
        """Render frames until the snake has slid one cell"""
        accum = 0.0
        while self.running:
            self.handle_events()
            accum += self.clock.tick(self.fps) / 1000.0
            alpha = min(accum / self.step_time, 1.0)
            self.draw(prev_body, game, alpha, log)
            if alpha >= 1.0:
                return

    def close(self) -> None:
        pygame.quit()


def watch(agent_name: str = "cell-tree", width: int = 10, height: int = 10, num_games: int = 1,
          seed=None, fps: int = 60, speed_cells: int = 8, cell_size: Optional[int] = None,
          delay_between_games: float = 2.0) -> None:
    """
    Watch an agent play a few games

    Args:
        agent_name: key of agents.AGENTS
        width: width of the board
        height: height of the board
        num_games: number of games to play
        seed: seed for the games and the agents
        fps: frames per second for rendering
        speed_cells: movement speed in cells per second
        cell_size: pixels per cell (None = auto)
        delay_between_games: seconds to wait between games
    """
    dims = CoordRange(width, height)
    rng = as_rng(seed)
    viewer = SnakeViewer(dims, cell_size=cell_size, fps=fps, speed_cells=speed_cells)

    print("\n" + "=" * 60)
    print(f"Watching agent '{agent_name}' on a {width}x{height} board")
    print("=" * 60)
    print("H: toggle cycle | P: toggle plan | ESC: exit")
    print("=" * 60 + "\n")

    try:
        for i in range(num_games):
            if not viewer.running:
                break
            round_rng = rng.next_rng()
            agent = make_agent(agent_name, dims, round_rng.next_rng())
            game = Game(dims, round_rng)
            log = AgentLog()
            print(f"Game {i + 1}/{num_games} starting...")
            while not game.done and viewer.running:
                prev_body = list(game.snake)
                game.move(agent(game, log))
                viewer.animate_move(prev_body, game, log)
            result = "WIN" if game.win else "LOSS" if game.loss else "stopped"
            print(f"Game {i + 1} finished: {result} | Length: {len(game.snake)} | Turns: {game.turn}")
            if i < num_games - 1 and viewer.running:
                time.sleep(delay_between_games)
    finally:
        viewer.close()

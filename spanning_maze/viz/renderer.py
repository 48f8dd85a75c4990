import logging
import time

import pygame

from spanning_maze.core.grid import Grid
from spanning_maze.viz.recorder import VideoRecorder
from spanning_maze.viz.replay import EventAdapter

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (255, 255, 255)
    COLOR_WALL = (0, 0, 0)
    COLOR_VISITED = (255, 240, 240)
    COLOR_FRONTIER = (255, 200, 200)
    COLOR_SOLVER = (190, 215, 245)
    COLOR_SOLUTION = (255, 215, 0) # Gold
    COLOR_HUD = (40, 40, 40)

    HUD_HEIGHT = 70
    MAX_STEPS_PER_FRAME = 5000
    # Seconds of video the finished maze is held for
    HOLD_SECONDS = 2.0

    def __init__(self, maze, steps, pace=0.0, width=720, height=790, record=False):
        """
        maze: the Maze being animated. Its event log drives the picture.
        steps: the iterator returned by maze.generate / maze.solve / maze.animate.
        pace: seconds between two steps of the iterator; 0 runs flat out.
        """
        self.maze = maze
        self.steps = steps
        self.pace = pace
        self.screen_width = width
        self.screen_height = height

        # The window draws its own copy of the maze, rebuilt from events
        self.display = Grid(maze.side)
        self.adapter = EventAdapter(self.display, maze.events)

        self.recorder = VideoRecorder(active=record)

        self.cell_size = 20.0
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.finished = False
        self.step_count = 0
        self.status = "Waiting"
        self.debt = 0.0
        self.held = False

    def fit_to_screen(self):
        """Fit the whole grid below the HUD with some padding."""
        padding = 20
        available_w = self.screen_width - padding * 2
        available_h = self.screen_height - self.HUD_HEIGHT - padding * 2
        self.cell_size = max(1.0, min(available_w, available_h) / self.display.side)

        total = self.display.side * self.cell_size
        self.offset_x = (self.screen_width - total) / 2
        self.offset_y = self.HUD_HEIGHT + (self.screen_height - self.HUD_HEIGHT - total) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze - {self.display.side}x{self.display.side}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

    def advance(self, elapsed: float):
        """Steps the core iterator as often as the pace allows for 'elapsed' seconds."""
        if self.pace <= 0:
            budget = self.MAX_STEPS_PER_FRAME
        else:
            self.debt += elapsed
            budget = min(int(self.debt / self.pace), self.MAX_STEPS_PER_FRAME)
            self.debt -= budget * self.pace

        for _ in range(budget):
            try:
                self.status = next(self.steps)
            except StopIteration:
                self.finished = True
                self.status = "Done"
                break
            self.step_count += 1

        self.adapter.apply_pending()

    def cell_rect(self, row, col):
        px = int(col * self.cell_size + self.offset_x)
        py = int(row * self.cell_size + self.offset_y)
        size = int(self.cell_size) + 1
        return px, py, size

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        grid = self.display

        # Pass 1 - Backgrounds
        for row in range(grid.side):
            for col in range(grid.side):
                cell = grid.cells[row * grid.side + col]
                color = None
                if cell & Grid.PATH:
                    color = self.COLOR_SOLUTION
                elif cell & Grid.SOLVER_VISITED:
                    color = self.COLOR_SOLVER
                elif cell & Grid.FRONTIER:
                    color = self.COLOR_FRONTIER
                elif cell & Grid.VISITED:
                    color = self.COLOR_VISITED
                if color:
                    px, py, size = self.cell_rect(row, col)
                    pygame.draw.rect(self.surface, color, (px, py, size, size))

        # Pass 2 - Walls
        width = 2 if self.cell_size > 8 else 1
        gaps = {(grid.side - 1, grid.side - 1, Grid.SOUTH), (0, 0, Grid.NORTH)} if self.maze.generated else set()
        for row in range(grid.side):
            for col in range(grid.side):
                cell = grid.cells[row * grid.side + col]
                px, py, size = self.cell_rect(row, col)
                right, bottom = px + size - 1, py + size - 1

                if cell & Grid.SOUTH and (row, col, Grid.SOUTH) not in gaps:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, bottom), (right, bottom), width)
                if cell & Grid.EAST:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (right, py), (right, bottom), width)
                if row == 0 and (row, col, Grid.NORTH) not in gaps:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (right, py), width)
                if col == 0:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, bottom), width)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        info = [
            f"Size: {self.display.side}x{self.display.side} ({self.display.size} cells)   FPS: {fps}",
            f"Steps: {self.step_count}   Events: {len(self.maze.events)}   Path: {len(self.adapter.path)}",
            f"Status: {self.status}" + ("   REC" if self.recorder.active else ""),
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_HUD)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        last = time.perf_counter()

        while self.running:
            self.handle_input()

            now = time.perf_counter()
            if not self.finished:
                self.advance(now - last)
            last = now

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)
                if self.finished and not self.held:
                    self.recorder.hold(self.HOLD_SECONDS)
                    self.held = True

            self.clock.tick(60)

        if not self.finished:
            logger.info("Window closed after %d steps; maze left partially built", self.step_count)
        self.recorder.stop()
        pygame.quit()

import pygame

from hypermaze.viz.plane import PlaneView, DEFAULT_PALETTE


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)

    def __init__(self, view: PlaneView, engine=None, width=1280, height=720,
                 steps_per_frame=1, fps=60, recorder=None):
        self.view = view
        self.engine = engine
        self.screen_width = width
        self.screen_height = height
        self.steps_per_frame = steps_per_frame
        self.fps = fps
        self.palette = DEFAULT_PALETTE

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.recorder = recorder

        self.font = None
        self.running = True
        self.paused = False
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the plane on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / max(self.view.width, 1), available_h / max(self.view.height, 1))

        self.offset_x = (self.screen_width - self.view.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.view.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        dims = "x".join(str(d) for d in self.view.graph.dimensions) or "point"
        pygame.display.set_caption(f"Hypermaze - {dims}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.paused = not self.paused
                elif event.key == pygame.K_RIGHT and self.paused:
                    self.step_engine(1)
                elif event.key == pygame.K_f:
                    self.fit_to_screen()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.001, min(200.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def step_engine(self, steps: int):
        if self.engine is None:
            return
        for _ in range(steps):
            if self.engine.is_done:
                break
            self.engine.advance()

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        view = self.view

        # 1. Status colors, one pixel per cell scaled up in a single blit
        image = pygame.surfarray.make_surface(view.status_image(self.palette))
        scaled = pygame.transform.scale(
            image, (max(1, int(view.width * self.cell_size)), max(1, int(view.height * self.cell_size)))
        )
        self.surface.blit(scaled, (int(self.offset_x), int(self.offset_y)))

        if self.cell_size <= 4.0:
            return

        # 2. Walls, culled to the visible range
        start_x = max(0, int(-self.offset_x / self.cell_size))
        start_y = max(0, int(-self.offset_y / self.cell_size))
        end_x = min(view.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(view.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)

        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                px = int(x * self.cell_size + self.offset_x)
                py = int(y * self.cell_size + self.offset_y)
                size = int(self.cell_size) + 1

                if view.has_wall(x, y, view.y_direction):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
                if view.has_wall(x, y, view.x_direction):
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
                if y == 0:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
                if x == 0:
                    pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        graph = self.view.graph
        if self.engine is None:
            status = "Idle"
        elif self.engine.is_done:
            status = "Done"
        else:
            status = "Paused" if self.paused else "Running"
        info = [
            f"FPS: {fps}",
            f"Dimensions: {list(graph.dimensions)} ({graph.size:,} cells)",
            f"Slice: {self.view.fixed}",
            f"Steps: {self.engine.step_count if self.engine else 0}",
            f"Status: {status}",
            "REC" if self.recorder else "",
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        try:
            while self.running:
                self.handle_input()

                if not self.paused:
                    self.step_engine(self.steps_per_frame)

                self.draw_grid()
                self.draw_hud()
                pygame.display.flip()

                if self.recorder:
                    self.recorder.capture(self.surface, self.engine)
                    if self.recorder.finished:
                        self.running = False

                self.clock.tick(self.fps)
        finally:
            if self.recorder:
                self.recorder.stop()
            pygame.quit()

import pygame

from sudoku_solver.game.session import GameSession
from sudoku_solver.logger import get_logger

logger = get_logger("sudoku_solver.window")

BOARD_SIZE = 500
PANEL_HEIGHT = 60
WINDOW_SIZE = (BOARD_SIZE, BOARD_SIZE + PANEL_HEIGHT)
FPS = 30

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
LIGHT_GRAY = (220, 220, 220)
DARK_GRAY = (64, 64, 64)
GREEN = (0, 255, 0)
RED = (255, 0, 0)
ENTRY_COLOR = (0, 0, 160)
CONFLICT_COLOR = (200, 0, 0)

BUTTONS = ("Play", "Reset", "Solution")

DIGIT_KEYS = {
    pygame.K_1: "1",
    pygame.K_2: "2",
    pygame.K_3: "3",
    pygame.K_4: "4",
    pygame.K_5: "5",
    pygame.K_6: "6",
    pygame.K_7: "7",
    pygame.K_8: "8",
    pygame.K_9: "9",
    pygame.K_KP_1: "1",
    pygame.K_KP_2: "2",
    pygame.K_KP_3: "3",
    pygame.K_KP_4: "4",
    pygame.K_KP_5: "5",
    pygame.K_KP_6: "6",
    pygame.K_KP_7: "7",
    pygame.K_KP_8: "8",
    pygame.K_KP_9: "9",
}
CLEAR_KEYS = [pygame.K_0, pygame.K_KP_0, pygame.K_DELETE, pygame.K_BACKSPACE]


class Game:
    x, y = 0, 0

    def __init__(self, session: GameSession, puzzle=None) -> None:
        self.session = session
        self.puzzle = puzzle
        self.running = True
        self.dif = BOARD_SIZE / session.board.size
        self.screen = None
        self.font = None
        self.small_font = None
        self.buttons = {}

    def setup(self):
        pygame.init()
        self.screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("SUDOKU")
        self.font = pygame.font.SysFont("arial", 36)
        self.small_font = pygame.font.SysFont("arial", 22)

        width = 100
        for i, label in enumerate(BUTTONS):
            self.buttons[label] = pygame.Rect(
                10 + i * (width + 10), BOARD_SIZE + 12, width, PANEL_HEIGHT - 24
            )

    @property
    def board(self):
        return self.session.board

    def draw_selection_box(self):
        x, y, dif = self.x, self.y, self.dif

        if self.board.is_editable((y, x)):
            color = GREEN
        else:
            color = RED

        for i in range(2):
            pygame.draw.line(
                self.screen,
                color,
                (x * dif - 3, (y + i) * dif),
                (x * dif + dif + 3, (y + i) * dif),
                7,
            )
            pygame.draw.line(
                self.screen,
                color,
                ((x + i) * dif, y * dif),
                ((x + i) * dif, y * dif + dif),
                7,
            )

    def draw_value(self, pos):
        row, col = pos
        val = self.board.get(pos)
        if self.board.is_editable(pos):
            color = ENTRY_COLOR if self.session.check_entry(pos) else CONFLICT_COLOR
        else:
            color = BLACK
        contents = self.font.render(str(val), True, color)
        rect = contents.get_rect(
            center=(col * self.dif + self.dif / 2, row * self.dif + self.dif / 2)
        )
        self.screen.blit(contents, rect)

    def draw_board(self):
        size = self.board.size
        order = self.board.order

        for row in range(size):
            for col in range(size):
                pos = (row, col)
                bg_color = WHITE if self.board.is_editable(pos) else LIGHT_GRAY
                pygame.draw.rect(
                    self.screen,
                    bg_color,
                    (col * self.dif, row * self.dif, self.dif + 1, self.dif + 1),
                )
                if self.board.get(pos) is not None:
                    self.draw_value(pos)

        for line in range(size + 1):
            thick = 7 if line % order == 0 else 1
            offset = line * self.dif
            pygame.draw.line(self.screen, DARK_GRAY, (0, offset), (BOARD_SIZE, offset), thick)
            pygame.draw.line(self.screen, DARK_GRAY, (offset, 0), (offset, BOARD_SIZE), thick)

    def draw_panel(self):
        for label, rect in self.buttons.items():
            pygame.draw.rect(self.screen, LIGHT_GRAY, rect)
            pygame.draw.rect(self.screen, DARK_GRAY, rect, 2)
            text = self.small_font.render(label, True, BLACK)
            self.screen.blit(text, text.get_rect(center=rect.center))

        status = self.session.timer_text
        if self.session.status:
            status = f"{status}  {self.session.status}"
        text = self.small_font.render(status, True, BLACK)
        self.screen.blit(text, (340, BOARD_SIZE + 18))

    def draw_all(self):
        self.screen.fill(WHITE)
        self.draw_board()
        self.draw_selection_box()
        self.draw_panel()
        pygame.display.update()

    def select_xy(self, pos):
        self.x = int(pos[0] // self.dif)
        self.y = int(pos[1] // self.dif)

    def click(self, pos):
        for label, rect in self.buttons.items():
            if rect.collidepoint(pos):
                self.press(label)
                return
        if pos[1] < BOARD_SIZE:
            self.select_xy(pos)

    def press(self, label):
        if label == "Play":
            self.session.play(self.puzzle)
        elif label == "Reset":
            self.session.reset()
        elif label == "Solution":
            self.session.solution()

    def handle_input(self):
        last = self.board.size - 1
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            if event.type == pygame.MOUSEBUTTONDOWN:
                self.click(pygame.mouse.get_pos())
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False

                if event.key == pygame.K_LEFT and self.x > 0:
                    self.x -= 1
                if event.key == pygame.K_RIGHT and self.x < last:
                    self.x += 1
                if event.key == pygame.K_UP and self.y > 0:
                    self.y -= 1
                if event.key == pygame.K_DOWN and self.y < last:
                    self.y += 1

                if event.key in DIGIT_KEYS:
                    self.session.enter((self.y, self.x), DIGIT_KEYS[event.key])
                if event.key in CLEAR_KEYS:
                    self.session.enter((self.y, self.x), None)

    def run(self):
        self.setup()
        clock = pygame.time.Clock()
        self.running = True

        while self.running:
            self.handle_input()
            self.draw_all()
            if self.session.running and self.session.is_won():
                self.session.stop_timer()
                self.session.status = "Well done!"
                logger.info(f"Puzzle completed, {self.session.timer_text}")
            clock.tick(FPS)
        pygame.quit()


def run_game(puzzle=None, solver=None):
    session = GameSession(solver=solver)
    Game(session, puzzle).run()
